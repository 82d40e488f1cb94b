"""HyprBluetooth - View model and update function.

The application owns exactly one ViewModel.  ``update`` takes it together
with one event and returns the next model plus at most one operation for
the application to run in the background.  It never blocks, never calls
the adapter and never raises.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .events import (
    Activate, AdapterFailed, AutoRefresh, Click, DeviceRemoved, DevicesListed,
    DeviceStatus, DisconnectSelected, Event, FullRefresh, MoveCursor,
    PairingFinished, PairSelected, PowerStatus, Quit, Refresh, RemoveSelected,
    ScanCompleted, StartScan, TogglePower,
)
from .interfaces import BluetoothDevice
from .operations import (
    Batch, Connect, Disconnect, Exit, ListDevices, Operation, Pair,
    PairAndConnect, QueryPower, Remove, ScanDevices, SetPower,
)
from .view import row_at


@dataclass(frozen=True)
class ViewModel:
    """Everything the view shows.

    ``cursor`` is kept inside ``[0, len(devices) - 1]`` and is 0 when
    there are no devices.  ``power_known`` never goes back to False.
    """

    devices: Tuple[BluetoothDevice, ...] = ()
    cursor: int = 0
    scanning: bool = False
    power_known: bool = False
    power_enabled: bool = False
    error: Optional[str] = None


def clamp_cursor(cursor: int, count: int) -> int:
    if count <= 0:
        return 0
    return max(0, min(cursor, count - 1))


def selected_device(model: ViewModel) -> Optional[BluetoothDevice]:
    """The device under the cursor, or None when the list is empty."""
    if not model.devices:
        return None
    return model.devices[clamp_cursor(model.cursor, len(model.devices))]


def _with_devices(model: ViewModel, devices, error: Optional[str]) -> ViewModel:
    devices = tuple(devices)
    return replace(
        model,
        devices=devices,
        cursor=clamp_cursor(model.cursor, len(devices)),
        scanning=False,
        error=error,
    )


def _start(model: ViewModel, operation: Operation) -> Tuple[ViewModel, Operation]:
    """A user action launches *operation*; the old error goes away."""
    return replace(model, error=None), operation


def _patch_connected(model: ViewModel, address: str, connected: bool) -> ViewModel:
    devices = tuple(
        replace(device, connected=connected) if device.address == address else device
        for device in model.devices
    )
    return replace(model, devices=devices)


def _on_input(model: ViewModel, event: Event) -> Tuple[ViewModel, Optional[Operation]]:
    if isinstance(event, MoveCursor):
        cursor = clamp_cursor(model.cursor + event.delta, len(model.devices))
        return replace(model, cursor=cursor), None

    if isinstance(event, Click):
        index = row_at(model, event.y)
        if index is None:
            return model, None
        return replace(model, cursor=index), None

    device = selected_device(model)

    if isinstance(event, Activate):
        if device is None:
            return model, None
        if device.connected:
            return _start(model, Disconnect(device.address))
        if device.paired:
            return _start(model, Connect(device.address))
        return _start(model, PairAndConnect(device.address))

    if isinstance(event, DisconnectSelected):
        if device is None or not device.connected:
            return model, None
        return _start(model, Disconnect(device.address))

    if isinstance(event, PairSelected):
        if device is None or device.paired:
            return model, None
        return _start(model, Pair(device.address))

    if isinstance(event, RemoveSelected):
        if device is None:
            return model, None
        return _start(model, Remove(device.address))

    if isinstance(event, StartScan):
        # Scanning is not re-entrant
        if model.scanning:
            return model, None
        return replace(model, scanning=True, error=None), ScanDevices()

    if isinstance(event, Refresh):
        return _start(model, ListDevices())

    if isinstance(event, FullRefresh):
        return _start(model, Batch((ListDevices(), QueryPower())))

    if isinstance(event, TogglePower):
        if not model.power_known:
            return model, None
        return _start(model, SetPower(not model.power_enabled))

    if isinstance(event, AutoRefresh):
        if model.scanning:
            return model, None
        return model, ListDevices(error=model.error)

    if isinstance(event, Quit):
        return model, Exit()

    return model, None


def _on_result(model: ViewModel, event: Event) -> Tuple[ViewModel, Optional[Operation]]:
    if isinstance(event, DevicesListed):
        # A carried error keeps the current message but never restores a
        # cleared one.
        error = model.error if event.error else None
        return _with_devices(model, event.devices, error), None

    if isinstance(event, ScanCompleted):
        if event.error:
            return replace(model, scanning=False, error=event.error), None
        return _with_devices(model, event.devices, None), None

    if isinstance(event, DeviceStatus):
        model = _patch_connected(model, event.address, event.connected)
        if event.error:
            model = replace(model, error=event.error)
        return model, ListDevices(error=event.error)

    if isinstance(event, PowerStatus):
        model = replace(model, power_known=True, power_enabled=event.enabled)
        if event.error:
            return replace(model, error=event.error), None
        return model, ListDevices()

    if isinstance(event, (PairingFinished, DeviceRemoved)):
        if event.error:
            model = replace(model, error=event.error)
        return model, ListDevices(error=event.error)

    if isinstance(event, AdapterFailed):
        return replace(model, error=event.message), None

    return model, None


_RESULT_EVENTS = (
    DevicesListed, ScanCompleted, DeviceStatus, PowerStatus,
    PairingFinished, DeviceRemoved, AdapterFailed,
)


def update(model: ViewModel, event: Event) -> Tuple[ViewModel, Optional[Operation]]:
    """Apply *event* to *model*.

    Returns:
        ``(new_model, operation)`` where operation is None when nothing
        has to run.  Unknown events leave the model unchanged.
    """
    if isinstance(event, _RESULT_EVENTS):
        return _on_result(model, event)
    return _on_input(model, event)
