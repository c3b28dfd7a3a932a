"""Cocoro Appliance Control Script - Main Entry Point."""

import argparse
import asyncio
import logging
import os
import sys

from cocoro import CocoroClient, __version__
from cocoro.config import ENV_APP_KEY, ENV_APP_SECRET
from cocoro.exceptions import (
    APIError,
    AuthenticationError,
    CocoroError,
    PropertyError,
)

from . import commands as cmds
from .rich_output import get_formatter

_logger = logging.getLogger(__name__)
_formatter = get_formatter()


async def async_main(args: argparse.Namespace) -> int:
    """Asynchronous main function."""
    app_secret = args.app_secret or os.getenv(ENV_APP_SECRET)
    app_key = args.app_key or os.getenv(ENV_APP_KEY)

    if not app_secret or not app_key:
        _logger.error(
            "Credentials missing. Use --app-secret/--app-key or env vars."
        )
        return 1

    try:
        async with CocoroClient(app_secret, app_key) as client:
            devices = await client.query_devices()
            cmd = args.command
            if cmd == "devices":
                cmds.handle_devices(devices)
                return 0

            device = cmds.select_device(devices, args.device)
            if not device:
                _logger.error("No matching device found.")
                return 1
            _logger.info(f"Using device: {device.name}")

            # Command Dispatching
            ok = True
            if cmd == "status":
                cmds.handle_status(device, args.raw)
            elif cmd == "state":
                cmds.handle_state(device)
            elif cmd == "power":
                ok = await cmds.handle_power(client, device, args.state == "on")
            elif cmd == "mode":
                ok = await cmds.handle_mode(client, device, args.name)
            elif cmd == "temp":
                ok = await cmds.handle_temperature(
                    client, device, args.value, args.keep_state
                )
            elif cmd == "windspeed":
                ok = await cmds.handle_windspeed(client, device, args.level)
            elif cmd == "humidify":
                ok = await cmds.handle_humidify(
                    client, device, args.state == "on"
                )
            return 0 if ok else 1

    except AuthenticationError as e:
        _logger.error(f"Auth failed: {e}")
        _formatter.print_error(str(e), title="Authentication Failed")
    except APIError as e:
        _logger.error(f"API error: {e}")
        _formatter.print_error(str(e), title="API Error")
    except PropertyError as e:
        _logger.error(f"Property error: {e}")
        _formatter.print_error(str(e), title="Property Error")
    except CocoroError as e:
        _logger.error(f"Library error: {e}")
        _formatter.print_error(str(e), title="Library Error")
    except Exception as e:
        _logger.error(f"Unexpected error: {e}", exc_info=True)
        _formatter.print_error(str(e), title="Unexpected Error")
    return 1


def parse_args(args: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sharp Cocoro appliance CLI")
    parser.add_argument(
        "--version", action="version", version=f"python-cocoro {__version__}"
    )
    parser.add_argument("--app-secret", help="Cocoro app secret")
    parser.add_argument("--app-key", help="Cocoro app key")
    parser.add_argument(
        "-d", "--device", help="Device name or id (default: first device)"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        dest="loglevel",
        action="store_const",
        const=logging.INFO,
    )
    parser.add_argument(
        "-vv",
        "--very-verbose",
        dest="loglevel",
        action="store_const",
        const=logging.DEBUG,
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Simple commands
    subparsers.add_parser("devices", help="List devices in the account")
    subparsers.add_parser(
        "status", help="Show device properties and their current values"
    ).add_argument("--raw", action="store_true")
    subparsers.add_parser(
        "state", help="Decode composite state properties into fields"
    )

    # Command with args
    subparsers.add_parser("power", help="Turn device on or off").add_argument(
        "state", choices=["on", "off"]
    )
    subparsers.add_parser("mode", help="Set operation mode").add_argument(
        "name", help="Mode name (e.g. cool, heat, auto, night, pollen)"
    )
    temp = subparsers.add_parser(
        "temp", help="Set target temperature (air conditioners)"
    )
    temp.add_argument("value", type=int, help="Temperature °C")
    temp.add_argument(
        "--keep-state",
        action="store_true",
        help="Start from the current state detail instead of zeroes",
    )
    subparsers.add_parser(
        "windspeed", help="Set windspeed (air conditioners)"
    ).add_argument("level", help="1-8 or auto")
    subparsers.add_parser(
        "humidify", help="Turn the humidifier on or off (purifiers)"
    ).add_argument("state", choices=["on", "off"])

    return parser.parse_args(args)


def main(args_list: list[str]) -> None:
    args = parse_args(args_list)
    logging.basicConfig(
        level=logging.WARNING,
        stream=sys.stdout,
        format="[%(asctime)s] %(levelname)s:%(name)s:%(message)s",
    )
    logging.getLogger("cocoro").setLevel(args.loglevel or logging.WARNING)
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    try:
        sys.exit(asyncio.run(async_main(args)))
    except KeyboardInterrupt:
        _logger.info("Interrupted.")


def run() -> None:
    main(sys.argv[1:])


if __name__ == "__main__":
    run()
