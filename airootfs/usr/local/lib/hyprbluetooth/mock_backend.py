"""HyprBluetooth - Mock backend for testing.

Provides an in-memory implementation of BackendInterface that simulates
Bluetooth operations without requiring real hardware or calling
bluetoothctl.  Every call is recorded, and any operation can be told to
fail with AdapterError.
"""

import threading
from copy import copy
from typing import Dict, List, Tuple

from .config import SCAN_WINDOW
from .interfaces import AdapterError, BackendInterface, BluetoothDevice


class MockBluetoothBackend(BackendInterface):
    """Mock implementation for unit testing and HYPRBT_MODE=test.

    Simulates adapter power and device state.  Devices added with
    ``add_device`` are returned by ``list_devices`` in insertion order.
    """

    def __init__(self, powered: bool = True):
        """Initialize mock backend state."""
        self._powered = powered
        self._devices: List[BluetoothDevice] = []
        self._discoverable: List[BluetoothDevice] = []
        self._paired: set = set()
        self._connected: set = set()
        self._trusted: set = set()
        self._failures: Dict[str, str] = {}
        self._lock = threading.Lock()
        self.calls: List[Tuple] = []

    # -- Test controls -----------------------------------------------------

    def add_device(self, device: BluetoothDevice) -> None:
        """Manually add a known device for testing."""
        with self._lock:
            if device.address in [d.address for d in self._devices]:
                return
            self._devices.append(copy(device))
            if device.paired:
                self._paired.add(device.address)
            if device.connected:
                self._connected.add(device.address)
            if device.trusted:
                self._trusted.add(device.address)

    def add_discoverable(self, device: BluetoothDevice) -> None:
        """Add a device that only becomes known after a scan."""
        with self._lock:
            self._discoverable.append(copy(device))

    def fail(self, operation: str, message: str = "simulated failure") -> None:
        """Make every later call to *operation* raise AdapterError."""
        self._failures[operation] = message

    def call_names(self) -> List[str]:
        """Names of the operations called so far, in call order."""
        return [call[0] for call in self.calls]

    def _enter(self, operation: str, *args) -> None:
        self.calls.append((operation,) + args)
        message = self._failures.get(operation)
        if message is not None:
            raise AdapterError(message, command=[operation, *map(str, args)])

    def _snapshot(self, device: BluetoothDevice) -> BluetoothDevice:
        return BluetoothDevice(
            address=device.address,
            name=device.name,
            connected=device.address in self._connected,
            paired=device.address in self._paired,
            trusted=device.address in self._trusted,
            icon=device.icon,
        )

    def _require_known(self, address: str) -> None:
        if address not in [d.address for d in self._devices]:
            raise AdapterError(f"Device {address} not available", command=[address])

    # -- BackendInterface --------------------------------------------------

    def list_devices(self) -> List[BluetoothDevice]:
        """Get all known devices."""
        self._enter("list_devices")
        with self._lock:
            return [self._snapshot(dev) for dev in self._devices]

    def get_device_info(self, address: str) -> BluetoothDevice:
        """Get the state of one device."""
        self._enter("get_device_info", address)
        with self._lock:
            for dev in self._devices:
                if dev.address == address:
                    return self._snapshot(dev)
        raise AdapterError(f"Device {address} not available", command=["info", address])

    def scan_devices(self, scan_window=None, sleep=None) -> List[BluetoothDevice]:
        """Make discoverable devices known, then list all devices."""
        self._enter("scan_devices")
        if not self._powered:
            raise AdapterError("failed to start scan", command=["scan", "on"],
                               output="org.bluez.Error.NotReady")
        if sleep is not None:
            sleep(SCAN_WINDOW if scan_window is None else scan_window)
        with self._lock:
            known = {d.address for d in self._devices}
            for dev in self._discoverable:
                if dev.address not in known:
                    self._devices.append(dev)
            self._discoverable = []
        return self.list_devices()

    def connect_device(self, address: str) -> None:
        """Connect to a paired device."""
        self._enter("connect_device", address)
        self._require_known(address)
        if not self._powered or address not in self._paired:
            raise AdapterError(f"failed to connect to device {address}",
                               command=["connect", address],
                               output="Failed to connect: org.bluez.Error.Failed")
        with self._lock:
            self._connected.add(address)

    def disconnect_device(self, address: str) -> None:
        """Disconnect from a device."""
        self._enter("disconnect_device", address)
        self._require_known(address)
        with self._lock:
            self._connected.discard(address)

    def pair_device(self, address: str) -> None:
        """Pair with a device."""
        self._enter("pair_device", address)
        self._require_known(address)
        if not self._powered:
            raise AdapterError(f"failed to pair with device {address}",
                               command=["pair", address],
                               output="org.bluez.Error.NotReady")
        with self._lock:
            self._paired.add(address)

    def trust_device(self, address: str) -> None:
        """Trust a device."""
        self._enter("trust_device", address)
        self._require_known(address)
        with self._lock:
            self._trusted.add(address)

    def remove_device(self, address: str) -> None:
        """Remove (unpair) a device."""
        self._enter("remove_device", address)
        self._require_known(address)
        with self._lock:
            self._devices = [d for d in self._devices if d.address != address]
            self._paired.discard(address)
            self._connected.discard(address)
            self._trusted.discard(address)

    def set_power(self, on: bool) -> None:
        """Power adapter on or off."""
        self._enter("set_power", on)
        self._powered = on
        if not on:
            with self._lock:
                self._connected.clear()

    def is_powered(self) -> bool:
        """Check if adapter is powered on."""
        self._enter("is_powered")
        return self._powered
