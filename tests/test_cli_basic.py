"""Basic tests for CLI entry point."""

import sys
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from cocoro.cli import commands
from cocoro.cli.__main__ import parse_args, run
from cocoro.exceptions import MalformedValueError


def test_cli_help():
    """Test that CLI help command works."""
    with patch.object(sys, "argv", ["cocoro-cli", "--help"]):
        with pytest.raises(SystemExit) as excinfo:
            run()
        assert excinfo.value.code == 0


def test_cli_no_args():
    """Test that CLI without a command exits with an error."""
    with patch.object(sys, "argv", ["cocoro-cli"]):
        with pytest.raises(SystemExit) as excinfo:
            run()
        assert excinfo.value.code != 0


def test_parse_temp_command():
    args = parse_args(["-d", "Living room", "temp", "25", "--keep-state"])
    assert args.command == "temp"
    assert args.value == 25
    assert args.keep_state is True
    assert args.device == "Living room"


def test_select_device(aircon, purifier):
    devices = [aircon, purifier]
    assert commands.select_device(devices, None) is aircon
    assert commands.select_device(devices, "77") is purifier
    assert commands.select_device(devices, "bed") is purifier
    assert commands.select_device(devices, "kitchen") is None
    assert commands.select_device([], None) is None


@pytest.mark.asyncio
async def test_handle_temperature_submits(aircon):
    client = AsyncMock()

    ok = await commands.handle_temperature(client, aircon, 23, False)

    assert ok
    client.execute_queued_updates.assert_awaited_once_with(aircon)
    client.refresh_status.assert_awaited_once_with(aircon)


@pytest.mark.asyncio
async def test_handle_temperature_invalid_clears_queue(aircon):
    client = AsyncMock()

    ok = await commands.handle_temperature(client, aircon, 99, False)

    assert not ok
    assert not aircon.has_queued_updates
    client.execute_queued_updates.assert_not_awaited()


@pytest.mark.asyncio
async def test_handle_humidify_unsupported(aircon):
    client = AsyncMock()
    assert not await commands.handle_humidify(client, aircon, True)


@pytest.mark.asyncio
async def test_refresh_failure_is_reported_as_submission_error(
    aircon, monkeypatch
):
    formatter = MagicMock()
    monkeypatch.setattr(commands, "_formatter", formatter)
    client = AsyncMock()
    client.refresh_status.side_effect = MalformedValueError(
        "bad status record"
    )

    ok = await commands.handle_temperature(client, aircon, 23, False)

    assert not ok
    client.execute_queued_updates.assert_awaited_once_with(aircon)
    formatter.print_error.assert_called_once_with(
        "bad status record", title="Error During Setting Temperature"
    )
