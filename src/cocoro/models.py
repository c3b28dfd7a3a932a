"""Data models for the Cocoro cloud API.

This module defines pydantic models for the records exchanged with the
cloud gateway: the capability list (:data:`Property`), the current values
(:data:`PropertyStatus`), the box/device listing, and the control
submission body.

Properties and statuses come in three shapes, one per
:class:`~cocoro.enums.ValueType`. Both are discriminated unions on the
``valueType`` key, so a record can only validate as the variant its tag
names, and a record whose payload does not match its tag is rejected.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
)
from pydantic.alias_generators import to_camel

from .converters import (
    decode_binary,
    decode_range,
    decode_single,
    encode_range,
    encode_single,
)
from .enums import ValueType
from .exceptions import MalformedValueError


class CocoroBaseModel(BaseModel):
    """Base model for all Cocoro models."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",  # Ignore unknown fields by default
    )


# ============================================================================
# Properties (capabilities)
# ============================================================================


class SingleOption(CocoroBaseModel):
    """One entry of a SINGLE property's value table."""

    code: str
    name: str = ""


class RangeSpec(CocoroBaseModel):
    """Bounds of a RANGE property."""

    min: int | None = None
    max: int | None = None
    step: int | None = None

    def contains(self, value: int) -> bool:
        if self.min is not None and value < self.min:
            return False
        if self.max is not None and value > self.max:
            return False
        return True


class BinarySpec(CocoroBaseModel):
    """Metadata of a BINARY property."""

    size: int | None = Field(
        default=None, description="Width of the value in bytes, if declared"
    )


class _PropertyBase(CocoroBaseModel):
    status_code: str
    status_name: str = ""
    gettable: bool = Field(default=False, alias="get")
    settable: bool = Field(default=False, alias="set")
    notify: bool = Field(
        default=False,
        alias="inf",
        description="Whether the device announces changes of this value",
    )

    @property
    def kind(self) -> ValueType:
        return ValueType(getattr(self, "value_type"))


class SingleProperty(_PropertyBase):
    """A property whose value is one code from an enumerated table."""

    value_type: Literal["valueSingle"] = "valueSingle"
    value_single: list[SingleOption] = Field(default_factory=list)

    @property
    def codes(self) -> list[str]:
        return [option.code for option in self.value_single]

    def accepts(self, code: str) -> bool:
        """Return True if ``code`` is in the table, or no table is declared."""
        return not self.value_single or code in self.codes


class RangeProperty(_PropertyBase):
    """A property whose value is an integer within vendor bounds."""

    value_type: Literal["valueRange"] = "valueRange"
    value_range: RangeSpec = Field(default_factory=RangeSpec)


class BinaryProperty(_PropertyBase):
    """A property whose value is a fixed-width hex string."""

    value_type: Literal["valueBinary"] = "valueBinary"
    value_binary: BinarySpec = Field(default_factory=BinarySpec)


Property = Annotated[
    Union[SingleProperty, RangeProperty, BinaryProperty],
    Field(discriminator="value_type"),
]

# ============================================================================
# Property statuses (current values)
# ============================================================================


_PAYLOAD_FIELDS = {
    ValueType.SINGLE: "value_single",
    ValueType.RANGE: "value_range",
    ValueType.BINARY: "value_binary",
}


class ValueCode(CocoroBaseModel):
    """The ``{"code": ...}`` wrapper every status value is carried in."""

    code: str


class _PropertyStatusBase(CocoroBaseModel):
    status_code: str

    @property
    def kind(self) -> ValueType:
        return ValueType(getattr(self, "value_type"))

    @property
    def code(self) -> str:
        """The wire-form value."""
        payload: ValueCode = getattr(self, _PAYLOAD_FIELDS[self.kind])
        return payload.code

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the record shape the API expects."""
        return self.model_dump(by_alias=True, mode="json")


class SinglePropertyStatus(_PropertyStatusBase):
    """Current value of a SINGLE property."""

    value_type: Literal["valueSingle"] = "valueSingle"
    value_single: ValueCode

    @classmethod
    def from_value(cls, status_code: str, value: str) -> SinglePropertyStatus:
        return cls(
            status_code=status_code,
            value_single=ValueCode(code=encode_single(value)),
        )

    @property
    def value(self) -> str:
        return decode_single(self.value_single.code)


class RangePropertyStatus(_PropertyStatusBase):
    """Current value of a RANGE property."""

    value_type: Literal["valueRange"] = "valueRange"
    value_range: ValueCode

    @classmethod
    def from_value(
        cls, status_code: str, value: int, width: int | None = None
    ) -> RangePropertyStatus:
        return cls(
            status_code=status_code,
            value_range=ValueCode(code=encode_range(value, width)),
        )

    @property
    def value(self) -> int:
        """Decoded integer.

        Raises:
            MalformedValueError: If the code is not an integer.
        """
        return decode_range(self.value_range.code, self.status_code)


class BinaryPropertyStatus(_PropertyStatusBase):
    """Current value of a BINARY property."""

    value_type: Literal["valueBinary"] = "valueBinary"
    value_binary: ValueCode

    @classmethod
    def from_value(cls, status_code: str, code: str) -> BinaryPropertyStatus:
        decode_binary(code, status_code=status_code)
        return cls(status_code=status_code, value_binary=ValueCode(code=code))

    @property
    def value(self) -> bytes:
        """Raw bytes of the value.

        Raises:
            MalformedValueError: If the code is not an even-length hex string.
        """
        return decode_binary(self.value_binary.code, status_code=self.status_code)


PropertyStatus = Annotated[
    Union[SinglePropertyStatus, RangePropertyStatus, BinaryPropertyStatus],
    Field(discriminator="value_type"),
]

_PROPERTY_LIST_ADAPTER: TypeAdapter[list[Any]] = TypeAdapter(list[Property])
_STATUS_LIST_ADAPTER: TypeAdapter[list[Any]] = TypeAdapter(list[PropertyStatus])


def parse_properties(records: Iterable[Any]) -> list[Any]:
    """Validate raw capability records into :data:`Property` variants.

    Raises:
        MalformedValueError: If a record does not match its ``valueType``.
    """
    try:
        return _PROPERTY_LIST_ADAPTER.validate_python(list(records))
    except ValidationError as e:
        raise MalformedValueError(f"Invalid property record: {e}") from e


def parse_statuses(records: Iterable[Any]) -> list[Any]:
    """Validate raw status records into :data:`PropertyStatus` variants.

    Raises:
        MalformedValueError: If a record does not match its ``valueType``.
    """
    try:
        return _STATUS_LIST_ADAPTER.validate_python(list(records))
    except ValidationError as e:
        raise MalformedValueError(f"Invalid status record: {e}") from e


# ============================================================================
# Boxes and devices
# ============================================================================


class LabelData(CocoroBaseModel):
    """User-assigned labels of a device."""

    name: str = ""


class EchonetData(CocoroBaseModel):
    """One echonet object (appliance) behind a box."""

    device_id: int
    echonet_node: str
    echonet_object: str
    label_data: LabelData = Field(default_factory=LabelData)
    maker: str = ""
    model: str = ""
    serial_number: str = ""


class Box(CocoroBaseModel):
    """A gateway registered to the account, as returned by boxInfo."""

    box_id: str
    echonet_data: list[EchonetData] = Field(default_factory=list)


class QueryBoxesResponse(CocoroBaseModel):
    box: list[Box] = Field(default_factory=list)


class DeviceProperties(CocoroBaseModel):
    """Capabilities and current values of one device."""

    properties: list[Property] = Field(
        default_factory=list, alias="property"
    )
    status: list[PropertyStatus] = Field(default_factory=list)


class QueryDevicePropertiesResponse(CocoroBaseModel):
    device_property: DeviceProperties


# ============================================================================
# Control submission
# ============================================================================


class ControlEntry(CocoroBaseModel):
    """Queued changes for one device."""

    device_id: int
    echonet_node: str
    echonet_object: str
    status: list[PropertyStatus] = Field(default_factory=list)


class SubmissionPayload(CocoroBaseModel):
    """Body of a deviceControl request."""

    control_list: list[ControlEntry] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not any(entry.status for entry in self.control_list)

    def status_map(self) -> dict[str, str]:
        """Map of status code to wire value across all entries."""
        return {
            status.status_code: status.code
            for entry in self.control_list
            for status in entry.status
        }

    def to_request_body(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


__all__ = [
    "CocoroBaseModel",
    "SingleOption",
    "RangeSpec",
    "BinarySpec",
    "SingleProperty",
    "RangeProperty",
    "BinaryProperty",
    "Property",
    "ValueCode",
    "SinglePropertyStatus",
    "RangePropertyStatus",
    "BinaryPropertyStatus",
    "PropertyStatus",
    "parse_properties",
    "parse_statuses",
    "LabelData",
    "EchonetData",
    "Box",
    "QueryBoxesResponse",
    "DeviceProperties",
    "QueryDevicePropertiesResponse",
    "ControlEntry",
    "SubmissionPayload",
]
