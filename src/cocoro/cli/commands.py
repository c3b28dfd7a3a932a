"""Command handlers for CLI operations."""

import logging
from collections.abc import Callable

from cocoro import (
    AirConditioner,
    AirPurifier,
    CocoroClient,
    CocoroError,
    Device,
    PropertyError,
)
from cocoro.devices.aircon import OperationMode, Windspeed
from cocoro.devices.purifier import PurifierMode

from .rich_output import get_formatter

_logger = logging.getLogger(__name__)
_formatter = get_formatter()


def select_device(devices: list[Device], selector: str | None) -> Device | None:
    """Pick a device by name or id; the first device if no selector."""
    if not devices:
        return None
    if not selector:
        return devices[0]
    for device in devices:
        if selector in (device.name, str(device.device_id)):
            return device
    lowered = selector.lower()
    for device in devices:
        if lowered in device.name.lower():
            return device
    return None


async def _submit(
    client: CocoroClient,
    device: Device,
    queue_func: Callable[[], None],
    action_name: str,
    success_msg: str,
) -> bool:
    """Queue a change, submit it and refresh the device status."""
    try:
        queue_func()
    except (PropertyError, ValueError) as e:
        device.clear_queued_updates()
        _logger.error(f"Invalid parameters: {e}")
        _formatter.print_error(str(e), title="Invalid Parameters")
        return False

    try:
        await client.execute_queued_updates(device)
        await client.refresh_status(device)
    except CocoroError as e:
        _logger.error(f"Error {action_name}: {e}")
        _formatter.print_error(
            str(e), title=f"Error During {action_name.title()}"
        )
        return False
    _logger.info(success_msg)
    _formatter.print_success(success_msg)
    return True


def _unsupported(device: Device, action_name: str) -> bool:
    _formatter.print_error(
        f"{device.name} ({device.kind.value}) does not support {action_name}",
        title="Unsupported Command",
    )
    return False


def handle_devices(devices: list[Device]) -> None:
    """Print the devices available in the account."""
    if not devices:
        _formatter.print_info("No devices found.")
        return
    _formatter.print_device_list(devices)


def handle_status(device: Device, raw: bool = False) -> None:
    """Print the properties and current values of a device."""
    if raw:
        _formatter.print_json(
            {
                "property": [
                    p.model_dump(by_alias=True, mode="json")
                    for p in device.properties
                ],
                "status": [s.to_wire() for s in device.status],
            }
        )
        return
    _formatter.print_property_table(device)


def handle_state(device: Device) -> None:
    """Decode and print the composite state properties of a device."""
    if not device.state_layouts:
        _unsupported(device, "composite state decoding")
        return
    for status_code in device.state_layouts:
        try:
            _formatter.print_state(device.get_state(status_code))
        except PropertyError as e:
            _formatter.print_error(str(e), title=f"State {status_code}")


async def handle_power(
    client: CocoroClient, device: Device, power_on: bool
) -> bool:
    return await _submit(
        client,
        device,
        device.queue_power_on if power_on else device.queue_power_off,
        "setting power",
        f"Power {'on' if power_on else 'off'} sent to {device.name}",
    )


async def handle_mode(client: CocoroClient, device: Device, name: str) -> bool:
    """Set the operating mode by name (``cool``, ``night``, ...)."""
    if isinstance(device, AirConditioner):
        try:
            mode = OperationMode[name.strip().upper().replace("-", "_")]
        except KeyError:
            valid = ", ".join(m.name.lower() for m in OperationMode)
            _formatter.print_error(
                f"Unknown mode {name!r}. Valid modes: {valid}",
                title="Invalid Parameters",
            )
            return False
        return await _submit(
            client,
            device,
            lambda: device.queue_operation_mode_update(mode),
            "setting mode",
            f"Mode {mode.name.lower()} sent to {device.name}",
        )
    if isinstance(device, AirPurifier):
        return await _submit(
            client,
            device,
            lambda: device.queue_mode(PurifierMode.from_name(name)),
            "setting mode",
            f"Mode {name} sent to {device.name}",
        )
    return _unsupported(device, "mode changes")


async def handle_temperature(
    client: CocoroClient, device: Device, value: int, from_current: bool
) -> bool:
    if not isinstance(device, AirConditioner):
        return _unsupported(device, "target temperature")
    return await _submit(
        client,
        device,
        lambda: device.queue_temperature_update(
            value, from_current=from_current
        ),
        "setting temperature",
        f"Target temperature {value}°C sent to {device.name}",
    )


async def handle_windspeed(
    client: CocoroClient, device: Device, level: str
) -> bool:
    if not isinstance(device, AirConditioner):
        return _unsupported(device, "windspeed")
    key = "AUTO" if level.lower() == "auto" else f"LEVEL_{level}"
    if key not in Windspeed.__members__:
        _formatter.print_error(
            f"Unknown windspeed {level!r}. Use 1-8 or auto.",
            title="Invalid Parameters",
        )
        return False
    speed = Windspeed[key]
    return await _submit(
        client,
        device,
        lambda: device.queue_windspeed_update(speed),
        "setting windspeed",
        f"Windspeed {level} sent to {device.name}",
    )


async def handle_humidify(
    client: CocoroClient, device: Device, enabled: bool
) -> bool:
    if not isinstance(device, AirPurifier):
        return _unsupported(device, "humidifier control")
    return await _submit(
        client,
        device,
        lambda: device.queue_humidify(enabled),
        "setting humidifier",
        f"Humidifier {'on' if enabled else 'off'} sent to {device.name}",
    )
