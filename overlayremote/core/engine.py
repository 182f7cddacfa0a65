"""Press/release/touch triage in front of the resolver and dispatcher"""

from __future__ import annotations

import logging

from overlayremote.common.types import DispatchResult, PressEvent, RemoteAction
from overlayremote.core.dispatcher import ActionDispatcher
from overlayremote.core.resolver import LayoutResolver

logger = logging.getLogger(__name__)


class RemoteEngine:
    """Routes each host event to resolve+dispatch or consumes it"""

    def __init__(self, resolver: LayoutResolver, dispatcher: ActionDispatcher) -> None:
        """
        Initialize engine

        Args:
            resolver: Layout resolver
            dispatcher: Action dispatcher
        """
        self._resolver: LayoutResolver = resolver
        self._dispatcher: ActionDispatcher = dispatcher

    def event_handle(self, event: PressEvent) -> DispatchResult | None:
        """
        Handle one input event to completion

        Non-pointer events and pointer releases are consumed without
        dispatch and return None.

        Args:
            event: Input event from the host

        Returns:
            DispatchResult for pointer presses, None for consumed events
        """
        if not event.isPointer_check():
            logger.debug("Ignoring %s %s event", event.source.value, event.phase.value)
            return None

        if not event.isPress_check():
            logger.debug("Button release detected")
            return None

        logger.debug("Primary button press detected at X=%s, Y=%s", event.x, event.y)
        action: RemoteAction = self._resolver.event_resolve(event)
        if action == RemoteAction.UNKNOWN:
            logger.warning("Button press coordinates not mapped: X=%s, Y=%s", event.x, event.y)
            return DispatchResult.noAction()

        logger.info("Action recognized: %s", action.name)
        return self._dispatcher.action_dispatch(action)
