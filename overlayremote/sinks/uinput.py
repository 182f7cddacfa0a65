"""Media and volume key emission through a uinput virtual keyboard."""

from __future__ import annotations

import logging
import os
from typing import Optional

from evdev import UInput, UInputError, ecodes

from overlayremote.common.types import MediaKey, VolumeDirection

logger = logging.getLogger(__name__)


class UInputKeyboard:
    """Lazily created virtual keyboard limited to media and volume keys."""

    KEY_CODES: tuple[int, ...] = (
        MediaKey.REWIND.value,
        MediaKey.FAST_FORWARD.value,
        MediaKey.PLAY_PAUSE.value,
        ecodes.KEY_VOLUMEUP,
        ecodes.KEY_VOLUMEDOWN,
    )

    def __init__(self, device_node: str, name: str) -> None:
        """
        Initialize keyboard handle; the device is created on first use.

        Args:
            device_node: uinput device node, normally /dev/uinput.
            name: Name of the virtual input device.
        """
        self._device_node: str = device_node
        self._name: str = name
        self._device: Optional[UInput] = None

    def device_get(self) -> UInput:
        """
        Return the uinput device, creating it if needed.

        Returns:
            Open UInput device.

        Raises:
            PermissionError: If the device node is not writable.
            RuntimeError: If evdev fails to create the device.
        """
        if self._device is not None:
            return self._device

        if not os.access(self._device_node, os.W_OK):
            raise PermissionError(f"{self._device_node} is not writable")

        try:
            self._device = UInput(
                {ecodes.EV_KEY: sorted(self.KEY_CODES)},
                name=self._name,
                devnode=self._device_node,
            )
        except UInputError as exc:
            raise RuntimeError(f"Failed to create uinput device: {exc}") from exc
        logger.info("Created virtual keyboard '%s' on %s", self._name, self._device_node)
        return self._device

    def key_tap(self, key_code: int) -> None:
        """
        Write a press then a release for one key.

        Args:
            key_code: Linux input key code.
        """
        device = self.device_get()
        device.write(ecodes.EV_KEY, key_code, 1)
        device.syn()
        device.write(ecodes.EV_KEY, key_code, 0)
        device.syn()

    def close(self) -> None:
        """Release the uinput device if it was created."""
        if self._device is not None:
            self._device.close()
            self._device = None


class UInputMediaKeySink:
    """MediaKeySink backed by a virtual keyboard."""

    def __init__(self, keyboard: UInputKeyboard) -> None:
        self._keyboard: UInputKeyboard = keyboard

    def keyPair_send(self, key_code: int) -> None:
        """Emit press/release for a media key."""
        self._keyboard.key_tap(key_code)


class UInputVolumeControl:
    """VolumeControl that sends volume keys to the desktop's volume handler."""

    def __init__(self, keyboard: UInputKeyboard) -> None:
        self._keyboard: UInputKeyboard = keyboard

    def volume_adjust(self, direction: VolumeDirection, show_ui: bool) -> None:
        """
        Send KEY_VOLUMEUP or KEY_VOLUMEDOWN.

        Args:
            direction: Raise or lower.
            show_ui: Ignored; the desktop shows its own indicator for volume keys.
        """
        key_code = ecodes.KEY_VOLUMEUP if direction == VolumeDirection.RAISE else ecodes.KEY_VOLUMEDOWN
        logger.debug("Volume key %d (show_ui=%s)", key_code, show_ui)
        self._keyboard.key_tap(key_code)
