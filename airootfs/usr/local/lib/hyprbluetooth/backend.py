"""HyprBluetooth - Backend using bluetoothctl.

All Bluetooth operations are performed by invoking bluetoothctl as a
subprocess.  Every function here blocks; the application runs them in
background threads and feeds their results back into the update loop.
No function keeps any state between calls.
"""

import logging
import subprocess
import time
from typing import Callable, List, Optional, Sequence

from .config import BLUETOOTHCTL, DEFAULT_TIMEOUT, LONG_TIMEOUT, SCAN_WINDOW
from .interfaces import AdapterError, BackendInterface, BluetoothDevice

logger = logging.getLogger(__name__)

BLUETOOTH_YES = 'yes'

# Starting or stopping discovery can leave bluetoothctl attached to the
# daemon, so these calls get a short timeout that counts as success.
SCAN_TOGGLE_TIMEOUT = 3


# ---------------------------------------------------------------------------
# Helper: run bluetoothctl
# ---------------------------------------------------------------------------

def _run_btctl(args: Sequence[str], timeout: int = DEFAULT_TIMEOUT) -> subprocess.CompletedProcess:
    """Execute a bluetoothctl command and return the result.

    Args:
        args: Arguments to pass after 'bluetoothctl'.
        timeout: Maximum seconds to wait.

    Returns:
        A subprocess.CompletedProcess instance.

    Raises:
        AdapterError: bluetoothctl is missing or did not finish in time.
    """
    cmd = [BLUETOOTHCTL] + list(args)
    logger.debug("running %s", ' '.join(cmd))
    try:
        return subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError as exc:
        raise AdapterError(f'{BLUETOOTHCTL} not found', command=args) from exc
    except subprocess.TimeoutExpired as exc:
        raise AdapterError(
            f'{BLUETOOTHCTL} {args[0]} timed out after {timeout}s', command=args,
        ) from exc


def _run_btctl_check(args: Sequence[str], action: str,
                     timeout: int = DEFAULT_TIMEOUT) -> str:
    """Run bluetoothctl, raise on failure, and return stdout.

    Args:
        args: Arguments to pass after 'bluetoothctl'.
        action: Human readable description used in the error message.
        timeout: Maximum seconds to wait.

    Returns:
        Raw stdout string.

    Raises:
        AdapterError: The command could not run or exited nonzero.
    """
    result = _run_btctl(args, timeout=timeout)
    if result.returncode != 0:
        output = ((result.stdout or '') + (result.stderr or '')).strip()
        logger.warning("%s failed with exit status %d", action, result.returncode)
        raise AdapterError(
            f'failed to {action} (exit status {result.returncode})',
            command=args,
            output=output,
        )
    return result.stdout or ''


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------

def _parse_device_list(output: str) -> List[BluetoothDevice]:
    """Parse bluetoothctl device list output.

    Expected format: 'Device AA:BB:CC:DD:EE:FF DeviceName'.  The name is
    optional.  Blank lines and lines that do not start with 'Device' are
    ignored.

    Args:
        output: Raw bluetoothctl output.

    Returns:
        A list of BluetoothDevice objects with address and name set.
    """
    devices: List[BluetoothDevice] = []
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        parts = line.split(' ', 2)
        if len(parts) < 2 or parts[0] != 'Device':
            continue
        name = parts[2].strip() if len(parts) > 2 else ''
        devices.append(BluetoothDevice(address=parts[1], name=name))
    return devices


def _field_value(line: str, prefix: str) -> Optional[str]:
    if line.startswith(prefix):
        return line[len(prefix):].strip()
    return None


def _parse_device_info(address: str, output: str) -> BluetoothDevice:
    """Parse the output of ``bluetoothctl info <mac>``.

    Only the Name, Connected, Paired, Trusted and Icon lines are read.
    Unknown lines and field order do not matter.
    """
    device = BluetoothDevice(address=address)
    for line in output.splitlines():
        line = line.strip()
        value = _field_value(line, 'Name:')
        if value is not None:
            device.name = value
            continue
        value = _field_value(line, 'Connected:')
        if value is not None:
            device.connected = value == BLUETOOTH_YES
            continue
        value = _field_value(line, 'Paired:')
        if value is not None:
            device.paired = value == BLUETOOTH_YES
            continue
        value = _field_value(line, 'Trusted:')
        if value is not None:
            device.trusted = value == BLUETOOTH_YES
            continue
        value = _field_value(line, 'Icon:')
        if value is not None:
            device.icon = value
    return device


def _parse_powered(output: str) -> Optional[bool]:
    """Return the Powered flag from ``bluetoothctl show``, None if absent."""
    for line in output.splitlines():
        value = _field_value(line.strip(), 'Powered:')
        if value is not None:
            return value == BLUETOOTH_YES
    return None


# ---------------------------------------------------------------------------
# Public API -- synchronous (call from threads)
# ---------------------------------------------------------------------------

def get_device_info(address: str) -> BluetoothDevice:
    """Fetch the detailed state of a single device.

    Args:
        address: The MAC address of the device.

    Returns:
        A BluetoothDevice parsed from ``bluetoothctl info``.
    """
    output = _run_btctl_check(['info', address], 'get device info')
    return _parse_device_info(address, output)


def list_devices() -> List[BluetoothDevice]:
    """Get all known Bluetooth devices.

    The order is the order bluetoothctl reports them in.  The state of
    each device is merged in from ``bluetoothctl info``; a device whose
    info cannot be fetched keeps its defaults.

    Returns:
        A list of BluetoothDevice objects.
    """
    output = _run_btctl_check(['devices'], 'get devices')

    devices = _parse_device_list(output)
    for device in devices:
        try:
            info = get_device_info(device.address)
        except AdapterError as exc:
            logger.debug("no info for %s: %s", device.address, exc)
            continue
        device.connected = info.connected
        device.paired = info.paired
        device.trusted = info.trusted
        device.icon = info.icon
    return devices


def _toggle_scan(state: str) -> None:
    try:
        result = _run_btctl(['scan', state], timeout=SCAN_TOGGLE_TIMEOUT)
    except AdapterError as exc:
        if isinstance(exc.__cause__, subprocess.TimeoutExpired):
            return
        raise
    if result.returncode != 0:
        output = ((result.stdout or '') + (result.stderr or '')).strip()
        verb = 'start' if state == 'on' else 'stop'
        raise AdapterError(
            f'failed to {verb} scan (exit status {result.returncode})',
            command=['scan', state],
            output=output,
        )


def scan_devices(scan_window: Optional[float] = None,
                 sleep: Optional[Callable[[float], None]] = None) -> List[BluetoothDevice]:
    """Run discovery for *scan_window* seconds and list all devices.

    Args:
        scan_window: Seconds to keep discovery on (default SCAN_WINDOW).
        sleep: Blocking sleep function, replaceable in tests.

    Returns:
        The device list gathered after discovery stopped.
    """
    if scan_window is None:
        scan_window = SCAN_WINDOW
    if sleep is None:
        sleep = time.sleep

    _toggle_scan('on')
    sleep(scan_window)
    _toggle_scan('off')
    return list_devices()


def connect_device(address: str) -> None:
    """Connect to a paired Bluetooth device."""
    _run_btctl_check(['connect', address], f'connect to device {address}',
                     timeout=LONG_TIMEOUT)


def disconnect_device(address: str) -> None:
    """Disconnect from a Bluetooth device."""
    _run_btctl_check(['disconnect', address], f'disconnect from device {address}')


def pair_device(address: str) -> None:
    """Pair with a Bluetooth device."""
    _run_btctl_check(['pair', address], f'pair with device {address}',
                     timeout=LONG_TIMEOUT)


def trust_device(address: str) -> None:
    """Trust a Bluetooth device so it may reconnect on its own."""
    _run_btctl_check(['trust', address], f'trust device {address}')


def remove_device(address: str) -> None:
    """Remove (unpair) a Bluetooth device."""
    _run_btctl_check(['remove', address], f'remove device {address}')


def set_adapter_power(on: bool) -> None:
    """Power the Bluetooth adapter on or off."""
    state = 'on' if on else 'off'
    _run_btctl_check(['power', state],
                     'enable bluetooth' if on else 'disable bluetooth')


def is_adapter_powered() -> bool:
    """Return True if the Bluetooth adapter is powered on.

    Raises:
        AdapterError: The status query failed or reported no power state.
    """
    output = _run_btctl_check(['show'], 'get bluetooth status')
    powered = _parse_powered(output)
    if powered is None:
        raise AdapterError('could not determine bluetooth status', command=['show'])
    return powered


class BluetoothctlBackend(BackendInterface):
    """BackendInterface implementation over the module functions."""

    def list_devices(self):
        return list_devices()

    def get_device_info(self, address):
        return get_device_info(address)

    def scan_devices(self, scan_window=None, sleep=None):
        return scan_devices(scan_window=scan_window, sleep=sleep)

    def connect_device(self, address):
        connect_device(address)

    def disconnect_device(self, address):
        disconnect_device(address)

    def pair_device(self, address):
        pair_device(address)

    def trust_device(self, address):
        trust_device(address)

    def remove_device(self, address):
        remove_device(address)

    def set_power(self, on):
        set_adapter_power(on)

    def is_powered(self):
        return is_adapter_powered()
