"""
Cocoro cloud API client.

Provides async access to the Sharp Cocoro cloud gateway: logging in,
listing the boxes (gateways) registered to an account, reading the
properties and status of the appliances behind them, and submitting the
updates queued on a :class:`~cocoro.device.Device`.

The client owns no global state. Pass an :class:`aiohttp.ClientSession`
to share a connection pool; the login cookie lives in that session's
cookie jar.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

import aiohttp
from pydantic import ValidationError

from .command_decorators import requires_authentication
from .config import (
    API_BASE_URL,
    DEFAULT_TIMEOUT,
    ENV_APP_KEY,
    ENV_APP_SECRET,
    SERVICE_NAME,
    TERMINAL_APP_ID_PREFIX,
    USER_AGENT,
)
from .device import Device
from .devices import create_device
from .exceptions import APIError, AuthenticationError, MalformedValueError
from .models import (
    Box,
    DeviceProperties,
    EchonetData,
    QueryBoxesResponse,
    QueryDevicePropertiesResponse,
)
from .state import StateLayout
from .submission import build_submission

_logger = logging.getLogger(__name__)

AUTH_ERROR_CODES = {401, 403}

__all__ = [
    "CocoroClient",
]


class CocoroClient:
    """Async client for the Cocoro cloud API.

    Credentials are resolved in this order:
    1. ``app_secret`` / ``app_key`` constructor parameters
    2. ``COCORO_APP_SECRET`` / ``COCORO_APP_KEY`` environment variables

    Example:
        >>> async with CocoroClient(app_secret, app_key) as client:
        ...     devices = await client.query_devices()
        ...     devices[0].queue_power_on()
        ...     await client.execute_queued_updates(devices[0])
    """

    def __init__(
        self,
        app_secret: str | None = None,
        app_key: str | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        base_url: str = API_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        state_layouts: Mapping[str, StateLayout] | None = None,
    ) -> None:
        self._app_secret = app_secret or os.environ.get(ENV_APP_SECRET)
        self._app_key = app_key or os.environ.get(ENV_APP_KEY)
        if not self._app_secret or not self._app_key:
            raise ValueError(
                "Cocoro app secret and app key required. Set "
                f"{ENV_APP_SECRET} and {ENV_APP_KEY} environment variables "
                "or pass app_secret and app_key to CocoroClient()."
            )
        self._session = session
        self._owned_session = False
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._state_layouts = dict(state_layouts or {})
        self.is_authenticated = False

    async def __aenter__(self) -> CocoroClient:
        self._ensure_session()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the session if it was created by this client."""
        if self._owned_session and self._session:
            await self._session.close()
            self._session = None
            self._owned_session = False
        self.is_authenticated = False

    @property
    def terminal_app_id(self) -> str:
        return f"{TERMINAL_APP_ID_PREFIX}{self._app_key}"

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            self._owned_session = True
        return self._session

    # ------------------------------------------------------------------
    # HTTP core
    # ------------------------------------------------------------------

    async def _make_request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json_data: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send one request and return the decoded JSON body.

        Raises:
            AuthenticationError: On HTTP 401/403.
            APIError: On other HTTP errors, transport failures, or a body
                that is not a JSON object.
        """
        session = self._ensure_session()
        url = f"{self._base_url}{path}"
        headers = {
            "Content-Type": "application/json; charset=utf-8",
            "User-Agent": USER_AGENT,
        }
        _logger.debug(f"{method} {path} body={json_data}")

        try:
            async with session.request(
                method,
                url,
                headers=headers,
                params=dict(params) if params else None,
                json=dict(json_data) if json_data is not None else None,
                timeout=self._timeout,
            ) as resp:
                if resp.status in AUTH_ERROR_CODES:
                    self.is_authenticated = False
                    raise AuthenticationError(
                        "Request was not authorized",
                        status=resp.status,
                        response=await resp.text(),
                    )
                if resp.status >= 400:
                    raise APIError(
                        f"{method} {path} failed",
                        status=resp.status,
                        response=await resp.text(),
                    )
                try:
                    data = await resp.json(content_type=None)
                except ValueError as e:
                    raise APIError(
                        f"Invalid JSON response from {path}",
                        status=resp.status,
                    ) from e
        except aiohttp.ClientError as e:
            raise APIError(f"{method} {path} failed: {e}") from e

        if not isinstance(data, dict):
            raise APIError(f"Unexpected response from {path}: {data!r}")
        return data

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    async def login(self) -> dict[str, Any]:
        """Log in and store the session cookie.

        Raises:
            AuthenticationError: If the gateway rejects the credentials.
        """
        try:
            result = await self._make_request(
                "POST",
                "/setting/login/",
                params={
                    "appSecret": self._app_secret,
                    "serviceName": SERVICE_NAME,
                },
                json_data={"terminalAppId": self.terminal_app_id},
            )
        except AuthenticationError:
            raise
        except APIError as e:
            raise AuthenticationError(
                f"Login failed: {e}", status=e.status, response=e.response
            ) from e
        self.is_authenticated = True
        _logger.info("Logged in to Cocoro API")
        return result

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @requires_authentication
    async def query_boxes(self) -> list[Box]:
        """Query all boxes (gateways) registered to the account.

        Most callers want :meth:`query_devices` instead.
        """
        data = await self._make_request(
            "GET",
            "/setting/boxInfo/",
            params={"appSecret": self._app_secret, "mode": "other"},
        )
        try:
            boxes = QueryBoxesResponse.model_validate(data).box
        except ValidationError as e:
            raise APIError(f"Invalid boxInfo response: {e}") from e
        _logger.info("Retrieved %d box(es)", len(boxes))
        return boxes

    @requires_authentication
    async def query_box_properties(
        self, box: Box, echonet: EchonetData | None = None
    ) -> DeviceProperties:
        """Query the properties and current status of one appliance.

        Properties describe what the appliance can do; status holds the
        actual values of those properties.

        Raises:
            MalformedValueError: If a property or status record does not
                match its declared value type.
        """
        echonet = echonet or box.echonet_data[0]
        data = await self._make_request(
            "GET",
            "/control/deviceProperty",
            params={
                "boxId": box.box_id,
                "appSecret": self._app_secret,
                "echonetNode": echonet.echonet_node,
                "echonetObject": echonet.echonet_object,
                "status": "true",
            },
        )
        try:
            return QueryDevicePropertiesResponse.model_validate(
                data
            ).device_property
        except ValidationError as e:
            raise MalformedValueError(
                f"Invalid deviceProperty response: {e}"
            ) from e

    async def query_devices(self) -> list[Device]:
        """Query all appliances available in the account."""
        devices: list[Device] = []
        for box in await self.query_boxes():
            for echonet in box.echonet_data:
                props = await self.query_box_properties(box, echonet)
                device = create_device(
                    box,
                    props,
                    echonet=echonet,
                    state_layouts=self._state_layouts,
                )
                _logger.debug("Found device %r", device)
                devices.append(device)
        return devices

    async def refresh_status(self, device: Device) -> Device:
        """Re-read the status of ``device``, replacing its status list.

        Raises:
            ValueError: If the device was not created from a box listing.
        """
        if device.box is None:
            raise ValueError(
                f"Device {device.name!r} has no box; cannot query its status"
            )
        echonet = next(
            (
                e
                for e in device.box.echonet_data
                if e.device_id == device.device_id
            ),
            None,
        )
        props = await self.query_box_properties(device.box, echonet)
        device.replace_status(props.status)
        return device

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------

    @requires_authentication
    async def execute_queued_updates(
        self, device: Device, *, clear: bool = True
    ) -> dict[str, Any] | None:
        """Send the updates queued on ``device``.

        Args:
            device: Device whose pending updates should be sent.
            clear: Clear the queue once the gateway accepted the request.

        Returns:
            The gateway's response, or None if nothing was queued.

        Raises:
            APIError: If the request fails; the queue is kept intact.
        """
        if not device.has_queued_updates:
            _logger.debug("No queued updates for %s", device.name)
            return None

        payload = build_submission(device)
        _logger.info(
            f"Sending {len(device.property_updates)} update(s) to "
            f"{device.name}: {payload.status_map()}"
        )
        result = await self._make_request(
            "POST",
            "/control/deviceControl",
            params={
                "boxId": self.terminal_app_id,
                "appSecret": self._app_secret,
            },
            json_data=payload.to_request_body(),
        )
        if clear:
            device.clear_queued_updates()
        return result
