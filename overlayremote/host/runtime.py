"""
Host event loop and result presentation.

The loop feeds captured events to the engine one at a time, in delivery order,
and reports each DispatchResult as user-facing log output.
"""

from __future__ import annotations

import logging
from typing import Protocol

from overlayremote.common.types import DispatchResult, DispatchStatus, PressEvent
from overlayremote.core.engine import RemoteEngine

logger = logging.getLogger(__name__)

__all__ = ["SessionLifecycle", "dispatchResult_report", "eventLoop_run"]


class EventSource(Protocol):
    """Anything that can produce PressEvents on demand."""

    def events_read(self, timeout: float) -> list[PressEvent]:
        """Return events that arrived within `timeout` seconds."""


class SessionLifecycle:
    """OverlayLifecycle implementation backed by a stop flag."""

    def __init__(self) -> None:
        """Initialize with no stop requested."""
        self._stop_requested: bool = False

    def stop_request(self) -> None:
        """Mark the session for shutdown."""
        logger.info("Overlay closed")
        self._stop_requested = True

    def stop_isRequested(self) -> bool:
        """Return True once a stop was requested."""
        return self._stop_requested


def dispatchResult_report(result: DispatchResult) -> None:
    """
    Present a dispatch result to the user.

    Args:
        result: Result of one action attempt.
    """
    if result.status == DispatchStatus.SUCCESS:
        logger.info("%s done", result.action.name)
        return
    if result.status == DispatchStatus.PERMISSION_DENIED:
        logger.error("Volume permission denied: %s", result.reason)
        return
    if result.status == DispatchStatus.DISPATCH_FAILED:
        logger.error("Error sending remote command %s: %s", result.action.name, result.reason)
        return
    logger.debug("No action for press")


def eventLoop_run(
    source: EventSource,
    engine: RemoteEngine,
    lifecycle: SessionLifecycle,
    poll_timeout: float,
) -> int:
    """
    Run until the overlay is closed.

    Events read in one batch after a stop request are not handled.

    Args:
        source: Event source.
        engine: Remote engine.
        lifecycle: Session lifecycle watched for stop.
        poll_timeout: Wait per read in seconds.

    Returns:
        Number of dispatched actions (unmapped presses are not counted).
    """
    actions: int = 0
    while not lifecycle.stop_isRequested():
        for event in source.events_read(poll_timeout):
            if lifecycle.stop_isRequested():
                break
            result: DispatchResult | None = engine.event_handle(event)
            if result is None:
                continue
            if result.status != DispatchStatus.NO_ACTION:
                actions += 1
            dispatchResult_report(result)
    return actions
