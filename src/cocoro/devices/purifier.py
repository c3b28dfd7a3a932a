"""Air purifiers (echonet class 0x0135).

Purifiers take most commands through one BINARY property (``F3``). Each
command is a 27-byte blob whose first two bytes select the command and
whose remaining bytes carry its argument, e.g. the operating mode at byte
4 or an ``FF`` switch at byte 13 (power) or 15 (humidifier).
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Any, ClassVar

from ..device import Device
from ..state import CompositeState, StateField, StateLayout

__all__ = [
    "PurifierStatusCode",
    "PurifierCommand",
    "PurifierMode",
    "OPERATION_LAYOUT",
    "AirPurifier",
]


class PurifierStatusCode(str, Enum):
    POWER = "80"
    STATE_DETAIL = "F1"
    OPERATION_MODE = "F3"


class PurifierCommand(IntEnum):
    """Command selector in bytes 0-1 of an ``F3`` blob."""

    POWER = 0x0003
    HUMIDIFY = 0x0009
    MODE = 0x0101


class PurifierMode(IntEnum):
    """Operating modes, as written to byte 4 of a mode command."""

    AUTO = 0x10
    NIGHT = 0x11
    POLLEN = 0x13
    SILENT = 0x14
    MEDIUM = 0x15
    HIGH = 0x16
    AI_AUTO = 0x20
    REALIZE = 0x40

    @classmethod
    def from_name(cls, name: str) -> PurifierMode:
        """Look up a mode by name, e.g. ``"ai_auto"`` or ``"AI-AUTO"``.

        Raises:
            ValueError: If no mode has that name.
        """
        key = name.strip().upper().replace("-", "_")
        try:
            return cls[key]
        except KeyError:
            valid = ", ".join(m.name.lower() for m in cls)
            raise ValueError(
                f"Unknown purifier mode {name!r}. Valid modes: {valid}"
            ) from None


OPERATION_LAYOUT = StateLayout(
    status_code=PurifierStatusCode.OPERATION_MODE.value,
    width=27,
    fields=(
        StateField("command", offset=0, length=2),
        StateField(
            "mode", offset=4, choices=frozenset(m.value for m in PurifierMode)
        ),
        StateField("power", offset=13, kind="flag"),
        StateField("humidify", offset=15, kind="flag"),
    ),
)


class AirPurifier(Device):
    """An air purifier with typed command helpers."""

    DEFAULT_STATE_LAYOUTS: ClassVar[dict[str, StateLayout]] = {
        OPERATION_LAYOUT.status_code: OPERATION_LAYOUT
    }

    def build_command(
        self, command: PurifierCommand, **fields: Any
    ) -> CompositeState:
        """Build a zero-filled ``F3`` command blob.

        Raises:
            InvalidFieldValueError: If a field value is out of its domain.
        """
        return self.get_state_layout(PurifierStatusCode.OPERATION_MODE).build(
            command=int(command), **fields
        )

    def queue_mode(self, mode: PurifierMode | str) -> None:
        """Queue an operating mode change.

        Args:
            mode: A :class:`PurifierMode` or its name (``"night"``).
        """
        if isinstance(mode, str):
            mode = PurifierMode.from_name(mode)
        self.queue_state_update(
            self.build_command(PurifierCommand.MODE, mode=int(mode))
        )

    def queue_humidify(self, enabled: bool) -> None:
        """Queue switching the humidifier on or off."""
        self.queue_state_update(
            self.build_command(PurifierCommand.HUMIDIFY, humidify=enabled)
        )

    def queue_power_command(self, power_on: bool) -> None:
        """Queue power on or off through the ``F3`` command property.

        Some purifiers ignore the plain power property (``80``) while
        reporting it settable; this sends the equivalent command blob.
        """
        self.queue_state_update(
            self.build_command(PurifierCommand.POWER, power=power_on)
        )
