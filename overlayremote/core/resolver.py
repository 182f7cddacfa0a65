"""Coordinate-to-action resolution over a fixed button layout"""

from typing import Optional

from overlayremote.common.types import (
    ButtonLayout,
    ButtonSpec,
    PressEvent,
    RemoteAction,
    ToleranceWindow,
)


def coordinates_match(
    x1: float, y1: float, x2: float, y2: float, tolerance: ToleranceWindow
) -> bool:
    """
    Independent per-axis hit test (not Euclidean)

    Args:
        x1, y1: Observed coordinate
        x2, y2: Button reference coordinate
        tolerance: Shared tolerance window

    Returns:
        True if both axis deltas are strictly below the radius
    """
    return tolerance.contains(x1 - x2, y1 - y2)


def button_find(
    x: float, y: float, layout: ButtonLayout, tolerance: ToleranceWindow
) -> Optional[ButtonSpec]:
    """
    Find the first button in layout order that matches a coordinate

    Args:
        x, y: Observed coordinate
        layout: Button layout (iteration order is priority)
        tolerance: Shared tolerance window

    Returns:
        Matching button, or None
    """
    for button in layout:
        if coordinates_match(x, y, button.x, button.y, tolerance):
            return button
    return None


def action_resolve(
    event: PressEvent, layout: ButtonLayout, tolerance: ToleranceWindow
) -> RemoteAction:
    """
    Resolve a pointer press to a remote action

    Overlapping windows resolve to the button listed first.

    Args:
        event: Pointer-class press event
        layout: Button layout
        tolerance: Shared tolerance window

    Returns:
        The matched button's action, or RemoteAction.UNKNOWN
    """
    button = button_find(event.x, event.y, layout, tolerance)
    if button is None:
        return RemoteAction.UNKNOWN
    return button.action


class LayoutResolver:
    """Holds the layout and tolerance for the lifetime of an engine"""

    def __init__(self, layout: ButtonLayout, tolerance: ToleranceWindow) -> None:
        """
        Initialize resolver

        Args:
            layout: Immutable button layout
            tolerance: Shared tolerance window
        """
        self._layout: ButtonLayout = layout
        self._tolerance: ToleranceWindow = tolerance

    @property
    def layout(self) -> ButtonLayout:
        return self._layout

    @property
    def tolerance(self) -> ToleranceWindow:
        return self._tolerance

    def event_resolve(self, event: PressEvent) -> RemoteAction:
        """Resolve an event against the held layout"""
        return action_resolve(event, self._layout, self._tolerance)

    def buttonAt_find(self, x: float, y: float) -> Optional[ButtonSpec]:
        """Return the button hit at (x, y), if any"""
        return button_find(x, y, self._layout, self._tolerance)
