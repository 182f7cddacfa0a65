"""Common types and data structures for overlayremote"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional


class SourceKind(Enum):
    """Classification of the device an input event came from"""
    POINTER = "pointer"  # mouse-like device with discrete buttons
    TOUCH = "touch"      # direct touch, never resolved


class PressPhase(Enum):
    """Phase of a button interaction"""
    PRESS = "press"
    RELEASE = "release"


class RemoteAction(Enum):
    """Remote-control commands a button can trigger"""
    VOLUME_UP = "volume_up"
    VOLUME_DOWN = "volume_down"
    REWIND = "rewind"
    FAST_FORWARD = "fast_forward"
    PLAY_PAUSE = "play_pause"
    CLOSE_OVERLAY = "close_overlay"
    UNKNOWN = "unknown"

    @classmethod
    def fromName_parse(cls, name: str) -> "RemoteAction":
        """
        Parse a configuration action name

        Args:
            name: Action name, e.g. "volume_up"

        Returns:
            Matching RemoteAction

        Raises:
            ValueError: If name is not a dispatchable action
        """
        clean = str(name).strip().lower()
        for member in cls:
            if member.value == clean and member is not cls.UNKNOWN:
                return member
        raise ValueError(f"Unknown remote action '{name}'")


class MediaKey(Enum):
    """Linux input key codes for transport commands"""
    REWIND = 168        # KEY_REWIND
    FAST_FORWARD = 208  # KEY_FASTFORWARD
    PLAY_PAUSE = 164    # KEY_PLAYPAUSE

    @classmethod
    def forAction_get(cls, action: RemoteAction) -> Optional["MediaKey"]:
        """Return the media key for a transport action, None otherwise"""
        return {
            RemoteAction.REWIND: cls.REWIND,
            RemoteAction.FAST_FORWARD: cls.FAST_FORWARD,
            RemoteAction.PLAY_PAUSE: cls.PLAY_PAUSE,
        }.get(action)


class VolumeDirection(Enum):
    """Direction of a volume adjustment"""
    RAISE = "raise"
    LOWER = "lower"


@dataclass(frozen=True)
class PressEvent:
    """Positional button event delivered by the host"""
    x: float
    y: float
    source: SourceKind = SourceKind.POINTER
    phase: PressPhase = PressPhase.PRESS

    def isPointer_check(self) -> bool:
        """Check if this event came from a pointer-class source"""
        return self.source == SourceKind.POINTER

    def isPress_check(self) -> bool:
        """Check if this is a press (vs release)"""
        return self.phase == PressPhase.PRESS


@dataclass(frozen=True)
class ButtonSpec:
    """A named button on the remote skin and the action it triggers"""
    name: str
    x: float
    y: float
    action: RemoteAction


@dataclass(frozen=True)
class ButtonLayout:
    """Ordered, immutable set of buttons; order is resolve priority"""
    buttons: tuple[ButtonSpec, ...]

    def __post_init__(self) -> None:
        """
        Validate layout invariants

        Raises:
            ValueError: On duplicate names or a button bound to UNKNOWN
        """
        seen: set[str] = set()
        for button in self.buttons:
            if button.name in seen:
                raise ValueError(f"Duplicate button name '{button.name}' in layout")
            if button.action is RemoteAction.UNKNOWN:
                raise ValueError(f"Button '{button.name}' cannot target the UNKNOWN action")
            seen.add(button.name)

    @classmethod
    def fromTriples_build(
        cls, entries: Iterable[tuple[str, float, float, RemoteAction]]
    ) -> "ButtonLayout":
        """
        Build a layout from (name, x, y, action) tuples

        Args:
            entries: Button entries in priority order

        Returns:
            ButtonLayout preserving entry order
        """
        return cls(
            buttons=tuple(
                ButtonSpec(name=name, x=float(x), y=float(y), action=action)
                for name, x, y, action in entries
            )
        )

    def __iter__(self):
        return iter(self.buttons)

    def __len__(self) -> int:
        return len(self.buttons)


@dataclass(frozen=True)
class ToleranceWindow:
    """Per-axis positional slack shared by all buttons"""
    radius: float

    def __post_init__(self) -> None:
        """Validate radius is positive"""
        if not self.radius > 0:
            raise ValueError(f"Tolerance radius must be positive, got {self.radius}")

    def contains(self, dx: float, dy: float) -> bool:
        """Check both axis deltas are strictly inside the radius"""
        return abs(dx) < self.radius and abs(dy) < self.radius


class DispatchStatus(Enum):
    """Outcome classification of a dispatch attempt"""
    SUCCESS = "success"
    PERMISSION_DENIED = "permission_denied"
    DISPATCH_FAILED = "dispatch_failed"
    NO_ACTION = "no_action"


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of executing a RemoteAction"""
    status: DispatchStatus
    action: RemoteAction = RemoteAction.UNKNOWN
    reason: Optional[str] = None

    @classmethod
    def success(cls, action: RemoteAction) -> "DispatchResult":
        return cls(status=DispatchStatus.SUCCESS, action=action)

    @classmethod
    def permissionDenied(cls, action: RemoteAction, reason: str) -> "DispatchResult":
        return cls(status=DispatchStatus.PERMISSION_DENIED, action=action, reason=reason)

    @classmethod
    def dispatchFailed(cls, action: RemoteAction, reason: str) -> "DispatchResult":
        return cls(status=DispatchStatus.DISPATCH_FAILED, action=action, reason=reason)

    @classmethod
    def noAction(cls) -> "DispatchResult":
        return cls(status=DispatchStatus.NO_ACTION)

    def isOk_check(self) -> bool:
        """Check if the action was carried out"""
        return self.status == DispatchStatus.SUCCESS
