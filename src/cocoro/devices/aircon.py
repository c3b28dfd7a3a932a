"""Air conditioners (echonet class 0x0130)."""

from __future__ import annotations

from enum import Enum
from typing import ClassVar

from ..device import Device
from ..state import CompositeState, StateField, StateLayout

__all__ = [
    "AirconStatusCode",
    "OperationMode",
    "Windspeed",
    "STATE_DETAIL_LAYOUT",
    "AirConditioner",
]

MIN_TEMPERATURE = 16
MAX_TEMPERATURE = 32


class AirconStatusCode(str, Enum):
    POWER = "80"
    OPERATION_MODE = "B0"
    WINDSPEED = "A0"
    ROOM_TEMPERATURE = "BB"
    STATE_DETAIL = "F1"


class OperationMode(str, Enum):
    OTHER = "40"
    AUTO = "41"
    COOL = "42"
    HEAT = "43"
    DEHUMIDIFY = "44"
    VENTILATION = "45"


class Windspeed(str, Enum):
    LEVEL_1 = "31"
    LEVEL_2 = "32"
    LEVEL_3 = "33"
    LEVEL_4 = "34"
    LEVEL_5 = "35"
    LEVEL_6 = "36"
    LEVEL_7 = "37"
    LEVEL_8 = "38"
    AUTO = "41"


# Observed on one model family only; pass a different layout through
# ``state_layouts`` for units that pack the state detail differently.
STATE_DETAIL_LAYOUT = StateLayout(
    status_code=AirconStatusCode.STATE_DETAIL.value,
    width=16,
    fields=(
        StateField("power", offset=1, mask=0x01, kind="flag"),
        StateField("swing", offset=1, mask=0x02, kind="flag"),
        StateField("operation_mode", offset=2),
        StateField(
            "temperature",
            offset=3,
            minimum=MIN_TEMPERATURE,
            maximum=MAX_TEMPERATURE,
        ),
        StateField("windspeed", offset=4),
    ),
)


class AirConditioner(Device):
    """An air conditioner with typed getters and setters."""

    DEFAULT_STATE_LAYOUTS: ClassVar[dict[str, StateLayout]] = {
        STATE_DETAIL_LAYOUT.status_code: STATE_DETAIL_LAYOUT
    }

    def get_temperature(self) -> int:
        """Target temperature from the state detail property."""
        value: int = self.get_state(AirconStatusCode.STATE_DETAIL).get(
            "temperature"
        )
        return value

    def get_room_temperature(self) -> int:
        value: int = self.require_property_status(
            AirconStatusCode.ROOM_TEMPERATURE
        ).value
        return value

    def get_windspeed(self) -> Windspeed:
        return Windspeed(self.get_value(AirconStatusCode.WINDSPEED))

    def get_operation_mode(self) -> OperationMode:
        return OperationMode(self.get_value(AirconStatusCode.OPERATION_MODE))

    def queue_temperature_update(
        self, temperature: int, *, from_current: bool = False
    ) -> None:
        """Queue a target temperature change.

        By default the change is written into a zero-filled state detail,
        so the other fields of that property are sent as zero. Pass
        ``from_current=True`` to start from the last status instead; this
        requires the status to be present.

        Raises:
            InvalidFieldValueError: If the temperature is out of range.
            PropertyNotPresentError: If ``from_current`` is set and no state
                detail value is known.
        """
        state: CompositeState
        if from_current:
            state = self.get_state(AirconStatusCode.STATE_DETAIL)
        else:
            state = self.new_state(AirconStatusCode.STATE_DETAIL)
        state.set("temperature", temperature)
        self.queue_state_update(state)

    def queue_operation_mode_update(self, mode: OperationMode | str) -> None:
        """Queue an operation mode change.

        Raises:
            ValueError: If ``mode`` is not an :class:`OperationMode` code.
        """
        self.queue_single_update(
            AirconStatusCode.OPERATION_MODE, OperationMode(mode)
        )

    def queue_windspeed_update(self, speed: Windspeed | str) -> None:
        """Queue a windspeed change.

        Raises:
            ValueError: If ``speed`` is not a :class:`Windspeed` code.
        """
        self.queue_single_update(AirconStatusCode.WINDSPEED, Windspeed(speed))
