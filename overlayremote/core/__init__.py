"""Resolution and dispatch core, free of any platform dependency."""

from overlayremote.core.dispatcher import ActionDispatcher
from overlayremote.core.engine import RemoteEngine
from overlayremote.core.resolver import LayoutResolver, action_resolve, coordinates_match

__all__ = [
    "ActionDispatcher",
    "LayoutResolver",
    "RemoteEngine",
    "action_resolve",
    "coordinates_match",
]
