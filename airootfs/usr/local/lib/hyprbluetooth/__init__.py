"""HyprBluetooth - Bluetooth Device Manager.

A full-screen terminal utility for managing Bluetooth devices.  Uses
bluetoothctl as the backend for all Bluetooth operations and textual
for the interactive view.
"""

__version__ = "1.0.0"
__app_id__ = "hyprbluetooth"
