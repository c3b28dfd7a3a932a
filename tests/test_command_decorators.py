from unittest.mock import AsyncMock

import pytest

from cocoro.command_decorators import requires_authentication
from cocoro.exceptions import AuthenticationError


class FakeClient:
    def __init__(self, authenticated: bool = False):
        self.is_authenticated = authenticated
        self.login = AsyncMock(side_effect=self._login)

    async def _login(self):
        self.is_authenticated = True

    @requires_authentication
    async def query(self, value):
        return value


@pytest.mark.asyncio
async def test_logs_in_once():
    client = FakeClient()

    assert await client.query(1) == 1
    assert await client.query(2) == 2

    client.login.assert_awaited_once()


@pytest.mark.asyncio
async def test_skips_login_when_authenticated():
    client = FakeClient(authenticated=True)
    await client.query(1)
    client.login.assert_not_awaited()


@pytest.mark.asyncio
async def test_login_failure_propagates():
    client = FakeClient()
    client.login.side_effect = AuthenticationError("denied")

    with pytest.raises(AuthenticationError):
        await client.query(1)


def test_rejects_sync_functions():
    with pytest.raises(TypeError):

        @requires_authentication
        def query(self):
            return None
