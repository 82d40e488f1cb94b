"""HyprBluetooth - Side-effecting operations and the task runner.

``model.update`` never touches the adapter.  It returns one of the
operations below, and the application runs it in a background thread
with ``run_operation``, which turns the outcome into exactly one result
event.  Adapter failures never escape a task.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional, Tuple

from .config import PAIR_SETTLE, SCAN_WINDOW
from .events import (
    AdapterFailed, DeviceRemoved, DevicesListed, DeviceStatus, Event,
    PairingFinished, PowerStatus, ScanCompleted,
)
from .interfaces import AdapterError, BackendInterface

logger = logging.getLogger(__name__)


class Operation:
    """Base class of everything ``model.update`` can ask to run."""


@dataclass(frozen=True)
class ListDevices(Operation):
    """Refresh the device list.

    *error* is handed through to the resulting DevicesListed event.
    """
    error: Optional[str] = None


@dataclass(frozen=True)
class ScanDevices(Operation):
    pass


@dataclass(frozen=True)
class Connect(Operation):
    address: str


@dataclass(frozen=True)
class Disconnect(Operation):
    address: str


@dataclass(frozen=True)
class Pair(Operation):
    """Pair, then trust on a best-effort basis."""
    address: str


@dataclass(frozen=True)
class PairAndConnect(Operation):
    """Pair, best-effort trust, settle, best-effort connect."""
    address: str


@dataclass(frozen=True)
class Remove(Operation):
    address: str


@dataclass(frozen=True)
class QueryPower(Operation):
    pass


@dataclass(frozen=True)
class SetPower(Operation):
    on: bool


@dataclass(frozen=True)
class Batch(Operation):
    """Several operations launched concurrently, one task each."""
    operations: Tuple[Operation, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Exit(Operation):
    pass


@dataclass(frozen=True)
class Delays:
    """Fixed real-time waits used by tasks."""

    scan_window: float = SCAN_WINDOW
    pair_settle: float = PAIR_SETTLE
    sleep: Callable[[float], None] = time.sleep


NO_DELAYS = Delays(scan_window=0.0, pair_settle=0.0, sleep=lambda seconds: None)


def iter_operations(operation: Optional[Operation]) -> Iterator[Operation]:
    """Flatten *operation* into the operations that each get a task."""
    if operation is None:
        return
    if isinstance(operation, Batch):
        for child in operation.operations:
            yield from iter_operations(child)
    else:
        yield operation


def _attempt(step: Callable[[str], None], address: str) -> None:
    """Run a best-effort chain step; its failure does not stop the chain."""
    try:
        step(address)
    except AdapterError as exc:
        logger.info("ignoring failed best-effort step for %s: %s", address, exc)


def _pair_chain(backend: BackendInterface, address: str,
                delays: Delays, connect: bool) -> PairingFinished:
    try:
        backend.pair_device(address)
    except AdapterError as exc:
        return PairingFinished(address=address, error=str(exc))

    _attempt(backend.trust_device, address)
    if connect:
        delays.sleep(delays.pair_settle)
        _attempt(backend.connect_device, address)
    return PairingFinished(address=address)


def run_operation(operation: Operation, backend: BackendInterface,
                  delays: Delays = Delays()) -> Event:
    """Execute *operation* synchronously and return its result event.

    Must be called off the update loop.  ``Batch`` and ``Exit`` are
    handled by the application and are not accepted here.
    """
    logger.debug("running %s", operation)

    if isinstance(operation, ListDevices):
        try:
            devices = backend.list_devices()
        except AdapterError as exc:
            return AdapterFailed(message=str(exc))
        return DevicesListed(devices=tuple(devices), error=operation.error)

    if isinstance(operation, ScanDevices):
        try:
            devices = backend.scan_devices(scan_window=delays.scan_window,
                                           sleep=delays.sleep)
        except AdapterError as exc:
            return ScanCompleted(devices=(), error=str(exc))
        return ScanCompleted(devices=tuple(devices))

    if isinstance(operation, Connect):
        try:
            backend.connect_device(operation.address)
        except AdapterError as exc:
            return DeviceStatus(address=operation.address, connected=False,
                                error=str(exc))
        return DeviceStatus(address=operation.address, connected=True)

    if isinstance(operation, Disconnect):
        try:
            backend.disconnect_device(operation.address)
        except AdapterError as exc:
            return DeviceStatus(address=operation.address, connected=True,
                                error=str(exc))
        return DeviceStatus(address=operation.address, connected=False)

    if isinstance(operation, Pair):
        return _pair_chain(backend, operation.address, delays, connect=False)

    if isinstance(operation, PairAndConnect):
        return _pair_chain(backend, operation.address, delays, connect=True)

    if isinstance(operation, Remove):
        try:
            backend.remove_device(operation.address)
        except AdapterError as exc:
            return DeviceRemoved(address=operation.address, error=str(exc))
        return DeviceRemoved(address=operation.address)

    if isinstance(operation, QueryPower):
        try:
            enabled = backend.is_powered()
        except AdapterError as exc:
            return PowerStatus(enabled=False, error=str(exc))
        return PowerStatus(enabled=enabled)

    if isinstance(operation, SetPower):
        try:
            backend.set_power(operation.on)
        except AdapterError as exc:
            return PowerStatus(enabled=not operation.on, error=str(exc))
        return PowerStatus(enabled=operation.on)

    raise ValueError(f"cannot run {operation!r} as a task")
