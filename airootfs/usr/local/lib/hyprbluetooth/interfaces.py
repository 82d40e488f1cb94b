"""HyprBluetooth - Abstract interfaces.

Defines the device record, the single adapter error kind and the
contract every backend implements, so the state machine and the task
runner can be exercised without real hardware or a terminal.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence


@dataclass
class BluetoothDevice:
    """Represents a Bluetooth device known to the adapter."""

    address: str
    name: str = ""
    connected: bool = False
    paired: bool = False
    trusted: bool = False
    icon: str = ""


class AdapterError(RuntimeError):
    """A bluetoothctl invocation failed.

    Attributes:
        command: The bluetoothctl arguments that were run.
        output: Combined stdout and stderr of the tool, may be empty.
    """

    def __init__(self, message: str, command: Sequence[str] = (), output: str = ""):
        super().__init__(message)
        self.command = list(command)
        self.output = output

    def __str__(self) -> str:
        message = super().__str__()
        if self.output:
            return f"{message}: {self.output}"
        return message


class BackendInterface(ABC):
    """Abstract interface for Bluetooth adapter operations.

    All methods block and must only be called from worker threads.
    Failures are raised as AdapterError.
    """

    @abstractmethod
    def list_devices(self) -> List[BluetoothDevice]:
        """Get all known devices in the order bluetoothctl lists them."""

    @abstractmethod
    def get_device_info(self, address: str) -> BluetoothDevice:
        """Get the detailed state of one device."""

    @abstractmethod
    def scan_devices(
        self,
        scan_window: Optional[float] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> List[BluetoothDevice]:
        """Run discovery for a fixed window, then list all devices."""

    @abstractmethod
    def connect_device(self, address: str) -> None:
        """Connect to a paired device."""

    @abstractmethod
    def disconnect_device(self, address: str) -> None:
        """Disconnect from a device."""

    @abstractmethod
    def pair_device(self, address: str) -> None:
        """Pair with a device."""

    @abstractmethod
    def trust_device(self, address: str) -> None:
        """Mark a device as trusted."""

    @abstractmethod
    def remove_device(self, address: str) -> None:
        """Remove (unpair) a device."""

    @abstractmethod
    def set_power(self, on: bool) -> None:
        """Power adapter on or off."""

    @abstractmethod
    def is_powered(self) -> bool:
        """Check if adapter is powered on."""
