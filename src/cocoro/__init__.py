"""Python client for the Sharp Cocoro home appliance cloud API.

Basic Usage:
    from cocoro import CocoroClient

    async with CocoroClient(app_secret, app_key) as client:
        devices = await client.query_devices()
        aircon = devices[0]
        aircon.queue_power_on()
        aircon.queue_temperature_update(24)
        await client.execute_queued_updates(aircon)
        await client.refresh_status(aircon)

Composite state codes can be used without the client:
    from cocoro.devices.aircon import STATE_DETAIL_LAYOUT

    state = STATE_DETAIL_LAYOUT.decode(code)
    state.set("temperature", 25)
    new_code = state.encode()
"""

from __future__ import annotations

from .api_client import CocoroClient
from .device import Device
from .devices import AirConditioner, AirPurifier, create_device
from .enums import DeviceType, StatusCode, ValueSingle, ValueType
from .exceptions import (
    APIError,
    AuthenticationError,
    CocoroError,
    InvalidFieldValueError,
    MalformedValueError,
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
    RangeProperty,
    RangePropertyStatus,
    SingleProperty,
    SinglePropertyStatus,
    SubmissionPayload,
    parse_properties,
    parse_statuses,
)
from .state import CompositeState, StateField, StateLayout
from .submission import build_submission
from .update_queue import PropertyUpdateQueue

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Client
    "CocoroClient",
    # Devices
    "Device",
    "AirConditioner",
    "AirPurifier",
    "create_device",
    "PropertyUpdateQueue",
    "build_submission",
    # Enums
    "DeviceType",
    "StatusCode",
    "ValueSingle",
    "ValueType",
    # Models
    "BinaryProperty",
    "BinaryPropertyStatus",
    "Box",
    "DeviceProperties",
    "RangeProperty",
    "RangePropertyStatus",
    "SingleProperty",
    "SinglePropertyStatus",
    "SubmissionPayload",
    "parse_properties",
    "parse_statuses",
    # Composite state
    "CompositeState",
    "StateField",
    "StateLayout",
    # Exceptions
    "APIError",
    "AuthenticationError",
    "CocoroError",
    "InvalidFieldValueError",
    "MalformedValueError",
    "NotSettableError",
    "PropertyError",
    "PropertyKindMismatchError",
    "PropertyNotPresentError",
    "UnknownPropertyError",
]
