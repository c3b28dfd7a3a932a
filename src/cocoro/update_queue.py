"""
Pending property update queue for Cocoro devices.

Changes to a device are not sent one by one. Each typed setter on
:class:`~cocoro.device.Device` validates the change and stores it here,
keyed by status code, until the caller submits the whole batch with
:meth:`cocoro.api_client.CocoroClient.execute_queued_updates`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from .models import PropertyStatus

_logger = logging.getLogger(__name__)


class PropertyUpdateQueue:
    """
    Pending updates for one device, keyed by status code.

    Queuing a second update for a status code replaces the first one; the
    entry keeps its original position, so iteration follows the order in
    which status codes were first queued.

    The queue performs no validation of its own (the owning device checks
    each update against its property list before calling :meth:`put`) and
    is never drained implicitly: entries stay until :meth:`clear` or
    :meth:`pop` is called.
    """

    def __init__(self) -> None:
        self._updates: dict[str, Any] = {}

    def put(self, status: PropertyStatus) -> None:
        """
        Store an update, replacing any earlier update for the same code.

        Args:
            status: Validated property status to send
        """
        replaced = status.status_code in self._updates
        self._updates[status.status_code] = status
        _logger.debug(
            f"{'Replaced' if replaced else 'Queued'} update for "
            f"{status.status_code}: {status.code} "
            f"(queue size: {len(self._updates)})"
        )

    def get(self, status_code: str) -> Any | None:
        """Return the pending update for ``status_code``, or None."""
        return self._updates.get(status_code)

    def pop(self, status_code: str) -> Any | None:
        """Remove and return the pending update for ``status_code``."""
        return self._updates.pop(status_code, None)

    def values(self) -> list[Any]:
        """Pending updates in queue order."""
        return list(self._updates.values())

    def as_dict(self) -> dict[str, Any]:
        return dict(self._updates)

    def clear(self) -> int:
        """
        Clear all pending updates.

        Returns:
            Number of updates cleared
        """
        cleared = len(self._updates)
        self._updates.clear()

        if cleared > 0:
            _logger.info(f"Cleared {cleared} queued update(s)")
        return cleared

    def __contains__(self, status_code: object) -> bool:
        return status_code in self._updates

    def __iter__(self) -> Iterator[str]:
        return iter(self._updates)

    def __len__(self) -> int:
        return len(self._updates)

    @property
    def count(self) -> int:
        """Get the number of pending updates."""
        return len(self._updates)

    @property
    def is_empty(self) -> bool:
        """Check if there is nothing to submit."""
        return len(self._updates) == 0
