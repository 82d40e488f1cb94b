"""HyprBluetooth - Events delivered to the update loop.

Input events come from the keyboard, the mouse and timers.  Result
events are produced by background tasks when an adapter operation
finishes.  Each kind is its own frozen dataclass; ``model.update``
matches on the concrete type.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .interfaces import BluetoothDevice


class Event:
    """Base class of everything ``model.update`` accepts."""


# -- Input events -----------------------------------------------------------

@dataclass(frozen=True)
class MoveCursor(Event):
    delta: int


@dataclass(frozen=True)
class Click(Event):
    """Left click on screen row *y* (0 is the title line)."""
    y: int


@dataclass(frozen=True)
class Activate(Event):
    pass


@dataclass(frozen=True)
class DisconnectSelected(Event):
    pass


@dataclass(frozen=True)
class PairSelected(Event):
    pass


@dataclass(frozen=True)
class RemoveSelected(Event):
    pass


@dataclass(frozen=True)
class StartScan(Event):
    pass


@dataclass(frozen=True)
class Refresh(Event):
    pass


@dataclass(frozen=True)
class FullRefresh(Event):
    pass


@dataclass(frozen=True)
class TogglePower(Event):
    pass


@dataclass(frozen=True)
class AutoRefresh(Event):
    """Periodic timer tick."""


@dataclass(frozen=True)
class Quit(Event):
    pass


# -- Result events ----------------------------------------------------------

@dataclass(frozen=True)
class DevicesListed(Event):
    """A full device list refresh finished.

    *error* is set when the refresh follows a failed action.  The message
    on screen then stays, unless a newer action has already cleared it.
    """
    devices: Tuple[BluetoothDevice, ...]
    error: Optional[str] = None


@dataclass(frozen=True)
class ScanCompleted(Event):
    devices: Tuple[BluetoothDevice, ...]
    error: Optional[str] = None


@dataclass(frozen=True)
class DeviceStatus(Event):
    """Connection state of *address* after a connect or disconnect."""
    address: str
    connected: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class PowerStatus(Event):
    enabled: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class PairingFinished(Event):
    """A pair chain ended.  *error* is the pairing failure, if any."""
    address: str
    error: Optional[str] = None


@dataclass(frozen=True)
class DeviceRemoved(Event):
    address: str
    error: Optional[str] = None


@dataclass(frozen=True)
class AdapterFailed(Event):
    message: str
