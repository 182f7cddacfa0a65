"""Sink protocols for volume, media-key, and overlay lifecycle output.

Sinks report a missing authorization by raising ``PermissionError``; any other
exception is treated as a dispatch failure.
"""

from __future__ import annotations

from typing import Protocol

from overlayremote.common.types import VolumeDirection


class VolumeControl(Protocol):
    """Abstract audio volume interface."""

    def volume_adjust(self, direction: VolumeDirection, show_ui: bool) -> None:
        """
        Raise or lower the output volume by one step.

        Args:
            direction: Raise or lower.
            show_ui: Request the system volume indicator.

        Raises:
            PermissionError: When the audio subsystem refuses the change.
        """


class MediaKeySink(Protocol):
    """Abstract media-key emission interface."""

    def keyPair_send(self, key_code: int) -> None:
        """
        Emit a press followed by a release for one media key.

        Args:
            key_code: Linux input key code.
        """


class OverlayLifecycle(Protocol):
    """Abstract overlay termination interface."""

    def stop_request(self) -> None:
        """Ask the host to shut the overlay down."""
