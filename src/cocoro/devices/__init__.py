"""Device family support.

:func:`create_device` picks the :class:`~cocoro.device.Device` subclass
matching the echonet object class of an appliance.
"""

from __future__ import annotations

from collections.abc import Mapping

from ..device import Device
from ..enums import DeviceType
from ..models import Box, DeviceProperties, EchonetData
from ..state import StateLayout
from .aircon import AirConditioner
from .purifier import AirPurifier

DEVICE_CLASSES: dict[DeviceType, type[Device]] = {
    DeviceType.AIR_CONDITIONER: AirConditioner,
    DeviceType.AIR_PURIFIER: AirPurifier,
}


def create_device(
    box: Box,
    device_properties: DeviceProperties,
    *,
    echonet: EchonetData | None = None,
    state_layouts: Mapping[str, StateLayout] | None = None,
) -> Device:
    """Create a device of the right family from query results.

    Unrecognized families get a plain :class:`Device`.
    """
    echonet = echonet or box.echonet_data[0]
    kind = DeviceType.from_echonet_object(echonet.echonet_object)
    device_class = DEVICE_CLASSES.get(kind, Device)
    return device_class.from_box(
        box,
        device_properties,
        echonet=echonet,
        state_layouts=state_layouts,
    )


__all__ = ["AirConditioner", "AirPurifier", "DEVICE_CLASSES", "create_device"]
