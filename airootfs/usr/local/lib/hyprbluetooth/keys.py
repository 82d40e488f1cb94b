"""HyprBluetooth - Keyboard bindings.

Maps textual key names to the events fed into ``model.update``.
"""

from typing import Optional

from .events import (
    Activate, DisconnectSelected, Event, FullRefresh, MoveCursor, PairSelected,
    Quit, Refresh, RemoveSelected, StartScan, TogglePower,
)

KEYMAP = {
    'ctrl+c': Quit(),
    'q': Quit(),
    'up': MoveCursor(-1),
    'k': MoveCursor(-1),
    'down': MoveCursor(1),
    'j': MoveCursor(1),
    'enter': Activate(),
    'space': Activate(),
    's': StartScan(),
    'r': Refresh(),
    'd': DisconnectSelected(),
    'p': PairSelected(),
    'x': RemoveSelected(),
    'e': TogglePower(),
    'ctrl+r': FullRefresh(),
}


def event_for_key(key: str) -> Optional[Event]:
    """Return the event bound to *key*, or None if the key is unbound."""
    return KEYMAP.get(key)
