"""evdev pointer/touch capture producing PressEvents."""

from __future__ import annotations

import logging
import os
import select
from typing import Any, Iterable, Optional

from evdev import InputDevice, ecodes

from overlayremote.common.types import PressEvent, PressPhase, SourceKind

logger = logging.getLogger(__name__)

POINTER_BUTTONS: frozenset[int] = frozenset(
    {ecodes.BTN_LEFT, ecodes.BTN_RIGHT, ecodes.BTN_MIDDLE}
)


class PointerState:
    """Tracks pointer position from relative and absolute events."""

    def __init__(self, width: Optional[int], height: Optional[int]) -> None:
        """
        Initialize pointer state at the screen center.

        Args:
            width: Screen width in pixels
            height: Screen height in pixels
        """
        self._width: Optional[int] = width
        self._height: Optional[int] = height
        self._x: int = width // 2 if width else 0
        self._y: int = height // 2 if height else 0

    def update_rel(self, dx: int, dy: int) -> None:
        """
        Update pointer position using relative deltas.

        Args:
            dx: Relative x delta
            dy: Relative y delta
        """
        self._x += dx
        self._y += dy
        self._clamp()

    def update_abs(self, code: int, value: int, minimum: int, maximum: int) -> None:
        """
        Update one axis from an absolute device value.

        Args:
            code: ABS_X or ABS_Y
            value: Raw device value
            minimum: Device axis minimum
            maximum: Device axis maximum
        """
        if maximum == minimum:
            return
        if code == ecodes.ABS_X and self._width is not None:
            self._x = int((value - minimum) * (self._width - 1) / (maximum - minimum))
        elif code == ecodes.ABS_Y and self._height is not None:
            self._y = int((value - minimum) * (self._height - 1) / (maximum - minimum))
        self._clamp()

    def position_get(self) -> tuple[int, int]:
        """
        Return current pointer position.

        Returns:
            Tuple of (x, y).
        """
        return self._x, self._y

    def _clamp(self) -> None:
        """Clamp pointer position within screen bounds if known."""
        if self._width is not None:
            self._x = max(0, min(self._x, self._width - 1))
        if self._height is not None:
            self._y = max(0, min(self._y, self._height - 1))


def deviceIsPointer_check(capabilities: dict[int, Any]) -> bool:
    """
    Determine whether a device is pointer-like.

    Args:
        capabilities: evdev capability map.

    Returns:
        True when device has relative motion or mouse buttons.
    """
    rel_caps = capabilities.get(ecodes.EV_REL, [])
    if ecodes.REL_X in rel_caps or ecodes.REL_Y in rel_caps:
        return True
    key_caps = capabilities.get(ecodes.EV_KEY, [])
    return ecodes.BTN_LEFT in key_caps or ecodes.BTN_RIGHT in key_caps


def deviceIsTouch_check(capabilities: dict[int, Any]) -> bool:
    """Determine whether a device reports direct touch."""
    return ecodes.BTN_TOUCH in capabilities.get(ecodes.EV_KEY, [])


class DeviceRegistry:
    """Opens evdev devices and keeps the pointer and touch ones."""

    def __init__(self, device_paths: Optional[list[str]]) -> None:
        """
        Open and classify input devices.

        Args:
            device_paths: Optional explicit device paths.
        """
        self._devices: list[InputDevice] = [
            device
            for device in self._devices_open(device_paths)
            if self._deviceIsRelevant_check(device)
        ]

    def devices_all(self) -> list[InputDevice]:
        """Return tracked pointer and touch devices."""
        return self._devices

    def device_drop(self, device: InputDevice) -> None:
        """Stop tracking a device that went away."""
        if device in self._devices:
            self._devices.remove(device)

    def _devices_open(self, device_paths: Optional[list[str]]) -> list[InputDevice]:
        """
        Open evdev devices.

        Args:
            device_paths: Optional explicit device paths.

        Returns:
            Opened devices.
        """
        paths: list[str]
        if device_paths is None:
            paths = sorted(
                os.path.join("/dev/input", entry)
                for entry in os.listdir("/dev/input")
                if entry.startswith("event")
            )
        else:
            paths = device_paths

        devices: list[InputDevice] = []
        for path in paths:
            try:
                devices.append(InputDevice(path))
            except OSError as exc:
                logger.debug("Skipping %s: %s", path, exc)
        return devices

    def _deviceIsRelevant_check(self, device: InputDevice) -> bool:
        capabilities: dict[int, Any] = device.capabilities()
        if deviceIsPointer_check(capabilities) or deviceIsTouch_check(capabilities):
            logger.info("Using input device %s (%s)", device.path, device.name)
            return True
        device.close()
        return False


class PressCapturer:
    """Reads devices and turns button transitions into PressEvents."""

    def __init__(self, registry: DeviceRegistry, pointer_state: PointerState, grab: bool = False) -> None:
        """
        Initialize capturer.

        Args:
            registry: Device registry.
            pointer_state: Shared pointer position tracker.
            grab: Take exclusive use of the devices.
        """
        self._registry: DeviceRegistry = registry
        self._pointer_state: PointerState = pointer_state
        self._grab: bool = grab
        self._grabbed: bool = False

    def devices_grab(self) -> None:
        """Grab devices so other clients do not see the presses."""
        if not self._grab or self._grabbed:
            return
        for device in self._registry.devices_all():
            device.grab()
        self._grabbed = True

    def devices_ungrab(self) -> None:
        """Release device grabs."""
        if not self._grabbed:
            return
        for device in self._registry.devices_all():
            try:
                device.ungrab()
            except OSError as exc:
                logger.warning("Failed to ungrab %s: %s", device.path, exc)
        self._grabbed = False

    def events_read(self, timeout: float) -> list[PressEvent]:
        """
        Wait up to `timeout` for input and return produced events.

        Args:
            timeout: select() timeout in seconds.

        Returns:
            PressEvents in device read order.

        Raises:
            RuntimeError: If no devices remain.
        """
        devices = self._registry.devices_all()
        if not devices:
            raise RuntimeError("No pointer or touch input devices available")

        rlist, _, _ = select.select(devices, [], [], timeout)
        events: list[PressEvent] = []
        for device in rlist:
            try:
                events.extend(self.deviceEvents_process(device, device.read()))
            except BlockingIOError:
                continue
            except OSError as exc:
                logger.warning("Input device %s went away: %s", device.path, exc)
                self._registry.device_drop(device)
        return events

    def deviceEvents_process(self, device: Any, raw_events: Iterable[Any]) -> list[PressEvent]:
        """
        Convert raw evdev events from one device.

        Args:
            device: Device that produced the events (for absinfo).
            raw_events: evdev InputEvent iterable.

        Returns:
            PressEvents for button transitions.
        """
        events: list[PressEvent] = []
        for raw in raw_events:
            if raw.type == ecodes.EV_REL:
                if raw.code == ecodes.REL_X:
                    self._pointer_state.update_rel(raw.value, 0)
                elif raw.code == ecodes.REL_Y:
                    self._pointer_state.update_rel(0, raw.value)
            elif raw.type == ecodes.EV_ABS:
                self._absEvent_handle(device, raw)
            elif raw.type == ecodes.EV_KEY:
                press_event = self._keyEvent_convert(raw)
                if press_event is not None:
                    events.append(press_event)
        return events

    def close(self) -> None:
        """Ungrab and close all devices."""
        self.devices_ungrab()
        for device in self._registry.devices_all():
            device.close()

    def _absEvent_handle(self, device: Any, raw: Any) -> None:
        if raw.code not in (ecodes.ABS_X, ecodes.ABS_Y):
            return
        absinfo = device.absinfo(raw.code)
        if absinfo is None:
            return
        self._pointer_state.update_abs(raw.code, raw.value, absinfo.min, absinfo.max)

    def _keyEvent_convert(self, raw: Any) -> Optional[PressEvent]:
        # value 2 is autorepeat
        if raw.value not in (0, 1):
            return None
        if raw.code in POINTER_BUTTONS:
            source = SourceKind.POINTER
        elif raw.code == ecodes.BTN_TOUCH:
            source = SourceKind.TOUCH
        else:
            return None
        x, y = self._pointer_state.position_get()
        return PressEvent(
            x=float(x),
            y=float(y),
            source=source,
            phase=PressPhase.PRESS if raw.value == 1 else PressPhase.RELEASE,
        )
