"""Device model for appliances reachable through the Cocoro cloud API.

A :class:`Device` combines the capability list reported for an appliance
(its properties) with the latest values read from it (its status), and keeps
a queue of pending changes. Reads never modify the status; changes go into
the queue and only reach the appliance when the queue is submitted, after
which the status should be fetched again.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any, ClassVar

from .converters import decode_binary
from .enums import DeviceType, StatusCode, ValueSingle, ValueType
from .exceptions import (
    NotSettableError,
    PropertyError,
    PropertyKindMismatchError,
    PropertyNotPresentError,
    UnknownPropertyError,
)
from .models import (
    BinaryProperty,
    BinaryPropertyStatus,
    Box,
    DeviceProperties,
    EchonetData,
    RangeProperty,
    RangePropertyStatus,
    SingleProperty,
    SinglePropertyStatus,
)
from .state import CompositeState, StateLayout
from .update_queue import PropertyUpdateQueue

_logger = logging.getLogger(__name__)

__all__ = ["Device"]


class Device:
    """An appliance as represented by the Cocoro API.

    Each device has numerous properties that can or can not be read or set,
    and the current status of those properties. The property list is fixed
    when the device is created; the status list is replaced as a whole by
    :meth:`replace_status`.

    Composite BINARY properties are decoded with the :class:`StateLayout`
    registered for their status code. Subclasses provide defaults for their
    device family in ``DEFAULT_STATE_LAYOUTS``; the ``state_layouts``
    argument adds to or overrides them.

    Example:
        >>> device = Device(
        ...     name="Living room",
        ...     device_id=1,
        ...     echonet_node="node",
        ...     echonet_object="013001",
        ...     properties=[SingleProperty(status_code="80", settable=True)],
        ...     status=[],
        ... )
        >>> device.queue_power_on()
        >>> device.property_updates.get("80").code
        '30'
    """

    DEFAULT_STATE_LAYOUTS: ClassVar[Mapping[str, StateLayout]] = {}

    def __init__(
        self,
        *,
        name: str,
        device_id: int,
        echonet_node: str,
        echonet_object: str,
        properties: Iterable[Any],
        status: Iterable[Any],
        kind: DeviceType | None = None,
        maker: str = "",
        model: str = "",
        serial_number: str = "",
        box: Box | None = None,
        state_layouts: Mapping[str, StateLayout] | None = None,
    ) -> None:
        self.name = name
        self.device_id = device_id
        self.echonet_node = echonet_node
        self.echonet_object = echonet_object
        self.kind = kind or DeviceType.from_echonet_object(echonet_object)
        self.maker = maker
        self.model = model
        self.serial_number = serial_number
        self.box = box

        self.state_layouts: dict[str, StateLayout] = {
            **self.DEFAULT_STATE_LAYOUTS,
            **(state_layouts or {}),
        }
        self._properties: tuple[Any, ...] = tuple(properties)
        self._status: list[Any] = []
        self.replace_status(status)

        self.property_updates = PropertyUpdateQueue()

    @classmethod
    def from_box(
        cls,
        box: Box,
        device_properties: DeviceProperties,
        *,
        echonet: EchonetData | None = None,
        state_layouts: Mapping[str, StateLayout] | None = None,
    ) -> Device:
        """Create a device from a box listing and its property query."""
        echonet = echonet or box.echonet_data[0]
        return cls(
            name=echonet.label_data.name,
            device_id=echonet.device_id,
            echonet_node=echonet.echonet_node,
            echonet_object=echonet.echonet_object,
            properties=device_properties.properties,
            status=device_properties.status,
            maker=echonet.maker,
            model=echonet.model,
            serial_number=echonet.serial_number,
            box=box,
            state_layouts=state_layouts,
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, "
            f"device_id={self.device_id!r}, kind={self.kind.value})"
        )

    @property
    def properties(self) -> tuple[Any, ...]:
        """Declared properties, in the order the API reported them."""
        return self._properties

    @property
    def status(self) -> tuple[Any, ...]:
        """Current property values from the last status query."""
        return tuple(self._status)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_property(self, status_code: Enum | str) -> Any | None:
        """Return the property for ``status_code``, or None if absent.

        The result is a :class:`SingleProperty`, :class:`RangeProperty` or
        :class:`BinaryProperty`; check :attr:`kind` to narrow it.
        """
        code = _code(status_code)
        for prop in self._properties:
            if prop.status_code == code:
                return prop
        return None

    def get_property_status(self, status_code: Enum | str) -> Any | None:
        """Return the current value for ``status_code``, or None if absent."""
        code = _code(status_code)
        for status in self._status:
            if status.status_code == code:
                return status
        return None

    def require_property_status(self, status_code: Enum | str) -> Any:
        """Like :meth:`get_property_status` but raise when absent.

        Raises:
            PropertyNotPresentError: If no value is known.
        """
        status = self.get_property_status(status_code)
        if status is None:
            raise PropertyNotPresentError(_code(status_code))
        return status

    def get_value(self, status_code: Enum | str) -> str | int | bytes:
        """Return the decoded current value for ``status_code``.

        SINGLE values decode to their code, RANGE values to an int and
        BINARY values to raw bytes.

        Raises:
            PropertyNotPresentError: If no value is known.
            MalformedValueError: If the wire value cannot be decoded.
        """
        value: str | int | bytes = self.require_property_status(
            status_code
        ).value
        return value

    def get_state_layout(
        self, status_code: Enum | str = StatusCode.STATE_DETAIL
    ) -> StateLayout:
        code = _code(status_code)
        try:
            return self.state_layouts[code]
        except KeyError:
            raise PropertyError(
                f"no composite state layout registered for {code}", code
            ) from None

    def get_state(
        self, status_code: Enum | str = StatusCode.STATE_DETAIL
    ) -> CompositeState:
        """Decode the current value of a composite BINARY property.

        Raises:
            PropertyNotPresentError: If no value is known.
            PropertyKindMismatchError: If the value is not BINARY.
            PropertyError: If no layout is registered for the code.
            MalformedValueError: If the value does not fit the layout.
        """
        layout = self.get_state_layout(status_code)
        status = self.require_property_status(status_code)
        if status.kind is not ValueType.BINARY:
            raise PropertyKindMismatchError(
                status.status_code, ValueType.BINARY, status.kind
            )
        return CompositeState.decode(layout, status.code)

    def new_state(
        self, status_code: Enum | str = StatusCode.STATE_DETAIL
    ) -> CompositeState:
        """Create a zero-filled composite state for write-only changes."""
        return CompositeState.empty(self.get_state_layout(status_code))

    def is_powered_on(self) -> bool:
        """Return True if the power property reports on.

        Raises:
            PropertyNotPresentError: If no power value is known.
        """
        return bool(self.get_value(StatusCode.POWER) == ValueSingle.POWER_ON)

    # ------------------------------------------------------------------
    # Status refresh
    # ------------------------------------------------------------------

    def replace_status(self, status: Iterable[Any]) -> None:
        """Replace the current status list with a fresh one.

        Raises:
            PropertyKindMismatchError: If a value's kind disagrees with the
                declared property. The previous status is kept in that case.
        """
        fresh = list(status)
        for item in fresh:
            prop = self.get_property(item.status_code)
            if prop is not None and prop.kind is not item.kind:
                raise PropertyKindMismatchError(
                    item.status_code, prop.kind, item.kind
                )
        self._status = fresh
        _logger.debug(
            "Device %s: status replaced (%d values)", self.name, len(fresh)
        )

    # ------------------------------------------------------------------
    # Queued updates
    # ------------------------------------------------------------------

    def queue_property_status_update(self, property_status: Any) -> None:
        """Queue a property value for change.

        This alone does not do anything; the queue needs to be submitted to
        the Cocoro API. A later update for the same status code replaces an
        earlier one.

        Raises:
            UnknownPropertyError: If the device has no such property.
            NotSettableError: If the property is not settable.
            PropertyKindMismatchError: If the value's kind differs from
                the property's.
            MalformedValueError: If a BINARY value has the wrong width.
        """
        code = property_status.status_code
        prop = self.get_property(code)
        if prop is None:
            raise UnknownPropertyError(code)
        if prop.settable is not True:
            raise NotSettableError(code, prop.status_name)
        if prop.kind is not property_status.kind:
            raise PropertyKindMismatchError(
                code, prop.kind, property_status.kind
            )
        self._check_value(prop, property_status)

        self.property_updates.put(property_status)

    def _check_value(self, prop: Any, property_status: Any) -> None:
        if isinstance(prop, BinaryProperty):
            width = prop.value_binary.size
            if width is None and prop.status_code in self.state_layouts:
                width = self.state_layouts[prop.status_code].width
            decode_binary(property_status.code, width, prop.status_code)
        elif isinstance(prop, RangeProperty):
            value = property_status.value
            if not prop.value_range.contains(value):
                _logger.warning(
                    f"Value {value} for {prop.status_code} is outside the "
                    f"declared range {prop.value_range.min}-"
                    f"{prop.value_range.max}"
                )
        elif isinstance(prop, SingleProperty):
            if not prop.accepts(property_status.code):
                _logger.warning(
                    f"Code {property_status.code} for {prop.status_code} is "
                    f"not in the declared value table {prop.codes}"
                )

    def queue_single_update(
        self, status_code: Enum | str, value: str
    ) -> None:
        self.queue_property_status_update(
            SinglePropertyStatus.from_value(_code(status_code), value)
        )

    def queue_range_update(
        self, status_code: Enum | str, value: int
    ) -> None:
        """Queue a RANGE value, padded to the width of the current code."""
        current = self.get_property_status(status_code)
        width = len(current.code) if current is not None else None
        self.queue_property_status_update(
            RangePropertyStatus.from_value(_code(status_code), value, width)
        )

    def queue_state_update(self, state: CompositeState) -> None:
        """Queue the encoded form of a composite state."""
        self.queue_property_status_update(
            BinaryPropertyStatus.from_value(state.status_code, state.encode())
        )

    def queue_power_on(self) -> None:
        """Queue a power on action."""
        self.queue_single_update(StatusCode.POWER, ValueSingle.POWER_ON)

    def queue_power_off(self) -> None:
        """Queue a power off action."""
        self.queue_single_update(StatusCode.POWER, ValueSingle.POWER_OFF)

    @property
    def has_queued_updates(self) -> bool:
        return not self.property_updates.is_empty

    def clear_queued_updates(self) -> int:
        """Drop all pending updates without sending them."""
        return self.property_updates.clear()


def _code(status_code: Enum | str) -> str:
    if isinstance(status_code, Enum):
        return str(status_code.value)
    return str(status_code)
