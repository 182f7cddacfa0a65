"""Logging-only sinks for running without output devices."""

from __future__ import annotations

import logging

from overlayremote.common.types import VolumeDirection

logger = logging.getLogger(__name__)


class DryRunVolumeControl:
    """Records volume requests instead of changing the volume."""

    def __init__(self) -> None:
        self.requests: list[tuple[VolumeDirection, bool]] = []

    def volume_adjust(self, direction: VolumeDirection, show_ui: bool) -> None:
        logger.info("[dry-run] volume %s (show_ui=%s)", direction.value, show_ui)
        self.requests.append((direction, show_ui))


class DryRunMediaKeySink:
    """Records media keys instead of emitting them."""

    def __init__(self) -> None:
        self.key_codes: list[int] = []

    def keyPair_send(self, key_code: int) -> None:
        logger.info("[dry-run] media key %d press/release", key_code)
        self.key_codes.append(key_code)
