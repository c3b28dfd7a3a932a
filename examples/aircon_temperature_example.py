#!/usr/bin/env python3
"""Example: Read and change the target temperature of an air conditioner."""

import asyncio
import logging
import os
import sys

from cocoro import AirConditioner, CocoroClient, CocoroError


async def main() -> None:
    app_secret = os.getenv("COCORO_APP_SECRET")
    app_key = os.getenv("COCORO_APP_KEY")

    if not app_secret or not app_key:
        print("Error: Set COCORO_APP_SECRET and COCORO_APP_KEY environment variables")
        sys.exit(1)

    async with CocoroClient(app_secret, app_key) as client:
        devices = await client.query_devices()
        aircon = next(
            (d for d in devices if isinstance(d, AirConditioner)), None
        )
        if aircon is None:
            print("No air conditioner found for this account")
            return

        state = aircon.get_state()
        print(f"{aircon.name}: {state.as_dict()}")

        target = 26 if aircon.get_temperature() != 26 else 24
        print(f"Setting target temperature to {target}°C...")
        aircon.queue_temperature_update(target, from_current=True)
        await client.execute_queued_updates(aircon)

        await client.refresh_status(aircon)
        print(f"Target temperature is now {aircon.get_temperature()}°C")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    try:
        asyncio.run(main())
    except CocoroError as e:
        print(f"Error: {e}")
        sys.exit(1)
