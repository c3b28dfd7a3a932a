"""Shaping of queued device updates into a deviceControl request body."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .models import ControlEntry, SubmissionPayload

if TYPE_CHECKING:
    from .device import Device

_logger = logging.getLogger(__name__)

__all__ = ["build_submission"]


def build_submission(device: Device) -> SubmissionPayload:
    """Build the control payload for a device's pending updates.

    The pending updates are flattened in queue order and wrapped with the
    device's identity. An empty queue produces a valid payload with an
    empty status list. The queue itself is left untouched; clearing it
    after a confirmed submission is up to the caller.

    Args:
        device: Device whose pending updates should be sent.

    Returns:
        The request body model.

    Example:
        >>> payload = build_submission(device)  # doctest: +SKIP
        >>> payload.status_map()  # doctest: +SKIP
        {'80': '30'}
    """
    updates = device.property_updates.values()
    _logger.debug(
        "Building submission for device %s with %d update(s)",
        device.device_id,
        len(updates),
    )
    return SubmissionPayload(
        control_list=[
            ControlEntry(
                device_id=device.device_id,
                echonet_node=device.echonet_node,
                echonet_object=device.echonet_object,
                status=updates,
            )
        ]
    )
