"""
Action dispatch against injected output sinks.

This module executes a resolved RemoteAction against the volume, media-key and
overlay lifecycle sinks and converts every outcome, including sink failures,
into a DispatchResult value. Nothing raises past `action_dispatch`.
"""

from __future__ import annotations

import logging

from overlayremote.common.types import (
    DispatchResult,
    MediaKey,
    RemoteAction,
    VolumeDirection,
)
from overlayremote.sinks.backend import MediaKeySink, OverlayLifecycle, VolumeControl

logger = logging.getLogger(__name__)

__all__ = ["ActionDispatcher"]

_VOLUME_DIRECTIONS: dict[RemoteAction, VolumeDirection] = {
    RemoteAction.VOLUME_UP: VolumeDirection.RAISE,
    RemoteAction.VOLUME_DOWN: VolumeDirection.LOWER,
}


class ActionDispatcher:
    """Maps remote actions onto sink calls and reports per-attempt results."""

    def __init__(
        self,
        volume_control: VolumeControl,
        media_key_sink: MediaKeySink,
        overlay_lifecycle: OverlayLifecycle,
        show_volume_ui: bool = True,
    ) -> None:
        """
        Initialize dispatcher.

        Args:
            volume_control: Audio volume sink.
            media_key_sink: Media-key sink.
            overlay_lifecycle: Overlay termination sink.
            show_volume_ui: Ask for the system volume indicator on adjust.
        """
        self._volume_control: VolumeControl = volume_control
        self._media_key_sink: MediaKeySink = media_key_sink
        self._overlay_lifecycle: OverlayLifecycle = overlay_lifecycle
        self._show_volume_ui: bool = show_volume_ui

    def action_dispatch(self, action: RemoteAction) -> DispatchResult:
        """
        Execute one action attempt.

        Args:
            action: Resolved remote action.

        Returns:
            Result of the attempt; failures are not retried.
        """
        if action in _VOLUME_DIRECTIONS:
            return self.volume_adjust(action)

        media_key: MediaKey | None = MediaKey.forAction_get(action)
        if media_key is not None:
            return self.mediaKey_send(action, media_key)

        if action == RemoteAction.CLOSE_OVERLAY:
            return self.overlay_close()

        logger.warning("Attempted to perform UNKNOWN action")
        return DispatchResult.noAction()

    def volume_adjust(self, action: RemoteAction) -> DispatchResult:
        """
        Adjust volume for VOLUME_UP / VOLUME_DOWN.

        Args:
            action: Volume action.

        Returns:
            SUCCESS, PERMISSION_DENIED or DISPATCH_FAILED.
        """
        direction: VolumeDirection = _VOLUME_DIRECTIONS[action]
        logger.debug("Adjusting volume %s", direction.value)
        try:
            self._volume_control.volume_adjust(direction, self._show_volume_ui)
        except PermissionError as exc:
            logger.error("Permission denied for volume change: %s", exc)
            return DispatchResult.permissionDenied(action, str(exc))
        except Exception as exc:
            logger.error("Error adjusting volume %s: %s", direction.value, exc)
            return DispatchResult.dispatchFailed(action, str(exc) or type(exc).__name__)
        return DispatchResult.success(action)

    def mediaKey_send(self, action: RemoteAction, media_key: MediaKey) -> DispatchResult:
        """
        Emit a media key press/release pair.

        Args:
            action: Transport action.
            media_key: Key to emit.

        Returns:
            SUCCESS or DISPATCH_FAILED.
        """
        logger.debug("Dispatching media key: %s (%d)", media_key.name, media_key.value)
        try:
            self._media_key_sink.keyPair_send(media_key.value)
        except Exception as exc:
            logger.error("Error dispatching media key event %d: %s", media_key.value, exc)
            return DispatchResult.dispatchFailed(action, str(exc) or type(exc).__name__)
        logger.debug("Media key dispatched successfully")
        return DispatchResult.success(action)

    def overlay_close(self) -> DispatchResult:
        """Request overlay termination; always succeeds."""
        logger.info("Closing overlay by remote command")
        self._overlay_lifecycle.stop_request()
        return DispatchResult.success(RemoteAction.CLOSE_OVERLAY)
