"""Tests for CocoroClient request shaping and error handling."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from cocoro import AirConditioner, CocoroClient
from cocoro.exceptions import APIError, AuthenticationError

TERMINAL_APP_ID = "https://db.cloudlabs.sharp.co.jp/clpf/key/app-key"


def _make_client(authenticated: bool = True) -> tuple[CocoroClient, AsyncMock]:
    """Create a CocoroClient with a mocked request method."""
    client = CocoroClient("app-secret", "app-key", session=MagicMock())
    client.is_authenticated = authenticated
    mock_request = AsyncMock()
    client._make_request = mock_request  # type: ignore[method-assign]
    return client, mock_request


def _session_with(status: int, *, json=None, text: str = "") -> MagicMock:
    """Create a session mock whose requests return one canned response."""
    resp = MagicMock()
    resp.status = status
    resp.text = AsyncMock(return_value=text)
    if isinstance(json, Exception):
        resp.json = AsyncMock(side_effect=json)
    else:
        resp.json = AsyncMock(return_value=json)
    session = MagicMock()
    session.request.return_value.__aenter__.return_value = resp
    return session


def test_credentials_required(monkeypatch):
    monkeypatch.delenv("COCORO_APP_SECRET", raising=False)
    monkeypatch.delenv("COCORO_APP_KEY", raising=False)
    with pytest.raises(ValueError):
        CocoroClient()


def test_credentials_from_environment(monkeypatch):
    monkeypatch.setenv("COCORO_APP_SECRET", "env-secret")
    monkeypatch.setenv("COCORO_APP_KEY", "env-key")
    client = CocoroClient()
    assert client.terminal_app_id.endswith("/env-key")


@pytest.mark.asyncio
async def test_login():
    client, mock_request = _make_client(authenticated=False)
    mock_request.return_value = {"result": "ok"}

    await client.login()

    assert client.is_authenticated
    mock_request.assert_awaited_once_with(
        "POST",
        "/setting/login/",
        params={"appSecret": "app-secret", "serviceName": "iClub"},
        json_data={"terminalAppId": TERMINAL_APP_ID},
    )


@pytest.mark.asyncio
async def test_login_failure_is_authentication_error():
    client, mock_request = _make_client(authenticated=False)
    mock_request.side_effect = APIError("boom", status=500)

    with pytest.raises(AuthenticationError) as excinfo:
        await client.login()

    assert excinfo.value.status == 500
    assert not client.is_authenticated


@pytest.mark.asyncio
async def test_query_logs_in_first(box_record):
    client, mock_request = _make_client(authenticated=False)
    mock_request.side_effect = [{}, {"box": [box_record]}]

    boxes = await client.query_boxes()

    assert boxes[0].box_id == box_record["boxId"]
    assert mock_request.await_args_list[0].args[1] == "/setting/login/"
    assert mock_request.await_args_list[1].args[1] == "/setting/boxInfo/"


@pytest.mark.asyncio
async def test_query_devices(
    box_record, aircon_property_records, aircon_status_records
):
    client, mock_request = _make_client()
    mock_request.side_effect = [
        {"box": [box_record]},
        {
            "deviceProperty": {
                "property": aircon_property_records,
                "status": aircon_status_records,
            }
        },
    ]

    devices = await client.query_devices()

    assert len(devices) == 1
    assert isinstance(devices[0], AirConditioner)
    assert devices[0].get_temperature() == 24
    mock_request.assert_awaited_with(
        "GET",
        "/control/deviceProperty",
        params={
            "boxId": box_record["boxId"],
            "appSecret": "app-secret",
            "echonetNode": "node-1",
            "echonetObject": "013001",
            "status": "true",
        },
    )


@pytest.mark.asyncio
async def test_invalid_box_response():
    client, mock_request = _make_client()
    mock_request.return_value = {"box": [{"echonetData": []}]}

    with pytest.raises(APIError):
        await client.query_boxes()


@pytest.mark.asyncio
async def test_refresh_status(aircon, aircon_status_records):
    client, mock_request = _make_client()
    aircon_status_records[0]["valueSingle"]["code"] = "31"
    mock_request.return_value = {
        "deviceProperty": {"property": [], "status": aircon_status_records}
    }

    await client.refresh_status(aircon)

    assert not aircon.is_powered_on()


@pytest.mark.asyncio
async def test_execute_queued_updates(aircon):
    client, mock_request = _make_client()
    mock_request.return_value = {"result": "ok"}
    aircon.queue_power_off()

    result = await client.execute_queued_updates(aircon)

    assert result == {"result": "ok"}
    assert not aircon.has_queued_updates
    mock_request.assert_awaited_once()
    args = mock_request.await_args
    assert args.args == ("POST", "/control/deviceControl")
    assert args.kwargs["params"] == {
        "boxId": TERMINAL_APP_ID,
        "appSecret": "app-secret",
    }
    assert args.kwargs["json_data"]["controlList"][0]["status"] == [
        {
            "statusCode": "80",
            "valueType": "valueSingle",
            "valueSingle": {"code": "31"},
        }
    ]


@pytest.mark.asyncio
async def test_execute_keeps_queue_when_asked(aircon):
    client, mock_request = _make_client()
    mock_request.return_value = {}
    aircon.queue_power_on()

    await client.execute_queued_updates(aircon, clear=False)

    assert aircon.has_queued_updates


@pytest.mark.asyncio
async def test_execute_keeps_queue_on_failure(aircon):
    client, mock_request = _make_client()
    mock_request.side_effect = APIError("rejected", status=400)
    aircon.queue_power_on()

    with pytest.raises(APIError):
        await client.execute_queued_updates(aircon)

    assert aircon.property_updates.get("80").code == "30"


@pytest.mark.asyncio
async def test_execute_empty_queue(aircon):
    client, mock_request = _make_client()

    assert await client.execute_queued_updates(aircon) is None
    mock_request.assert_not_awaited()


class TestMakeRequest:
    @pytest.mark.asyncio
    async def test_returns_json_object(self):
        session = _session_with(200, json={"ok": True})
        client = CocoroClient("s", "k", session=session)

        assert await client._make_request("GET", "/x") == {"ok": True}

    @pytest.mark.asyncio
    async def test_unauthorized(self):
        session = _session_with(401, text="denied")
        client = CocoroClient("s", "k", session=session)
        client.is_authenticated = True

        with pytest.raises(AuthenticationError) as excinfo:
            await client._make_request("GET", "/x")

        assert excinfo.value.response == "denied"
        assert not client.is_authenticated

    @pytest.mark.asyncio
    async def test_server_error(self):
        session = _session_with(500, text="oops")
        client = CocoroClient("s", "k", session=session)

        with pytest.raises(APIError) as excinfo:
            await client._make_request("GET", "/x")

        assert "HTTP 500" in str(excinfo.value)

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        session = _session_with(200, json=ValueError("bad json"))
        client = CocoroClient("s", "k", session=session)

        with pytest.raises(APIError):
            await client._make_request("GET", "/x")

    @pytest.mark.asyncio
    async def test_non_object_body(self):
        session = _session_with(200, json=[1, 2])
        client = CocoroClient("s", "k", session=session)

        with pytest.raises(APIError):
            await client._make_request("GET", "/x")
