"""HyprBluetooth - Backend factory.

Factory pattern to create backend instances.
Enables dependency injection for testing.
"""

import logging
from typing import Optional

from .config import MODE_TEST, Settings
from .interfaces import BackendInterface

logger = logging.getLogger(__name__)


def create_backend(mode: Optional[str] = None) -> BackendInterface:
    """Create backend instance based on the configured mode.

    Args:
        mode: 'production' or 'test'.  Read from HYPRBT_MODE when omitted.

    Returns:
        Backend instance implementing BackendInterface.
    """
    if mode is None:
        mode = Settings.from_env().mode

    if mode == MODE_TEST:
        from .mock_backend import MockBluetoothBackend
        from .interfaces import BluetoothDevice

        logger.info("using in-memory test backend")
        backend = MockBluetoothBackend(powered=True)
        backend.add_device(BluetoothDevice(
            address="AA:BB:CC:DD:EE:01", name="Headphones",
            paired=True, trusted=True, icon="audio-headset",
        ))
        backend.add_device(BluetoothDevice(
            address="AA:BB:CC:DD:EE:02", name="Keyboard", icon="input-keyboard",
        ))
        backend.add_discoverable(BluetoothDevice(address="AA:BB:CC:DD:EE:03"))
        return backend

    from .backend import BluetoothctlBackend

    return BluetoothctlBackend()
