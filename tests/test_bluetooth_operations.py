#!/usr/bin/env python3
"""
Unit tests for the background task runner.

Operations are run against the in-memory mock backend with zero delays,
so the pair chains and status polarity can be checked without waiting.
"""

import unittest

from test_helpers import MAC_A, MAC_B, make_device

from hyprbluetooth.events import (
    AdapterFailed, DeviceRemoved, DevicesListed, DeviceStatus, PairingFinished,
    PowerStatus, ScanCompleted,
)
from hyprbluetooth.mock_backend import MockBluetoothBackend
from hyprbluetooth.operations import (
    NO_DELAYS, Batch, Connect, Delays, Disconnect, Exit, ListDevices, Pair,
    PairAndConnect, QueryPower, Remove, ScanDevices, SetPower, iter_operations,
    run_operation,
)


def _backend(*devices, powered=True):
    backend = MockBluetoothBackend(powered=powered)
    for device in devices:
        backend.add_device(device)
    return backend


class TestListAndScan(unittest.TestCase):

    def test_list_devices(self):
        backend = _backend(make_device(MAC_A), make_device(MAC_B, "Phone"))
        event = run_operation(ListDevices(), backend, NO_DELAYS)
        self.assertIsInstance(event, DevicesListed)
        self.assertEqual([d.address for d in event.devices], [MAC_A, MAC_B])
        self.assertIsNone(event.error)

    def test_list_carries_error_through(self):
        event = run_operation(ListDevices(error="pair failed"), _backend(), NO_DELAYS)
        self.assertEqual(event.error, "pair failed")

    def test_list_failure_becomes_adapter_failed(self):
        backend = _backend()
        backend.fail("list_devices", "No default controller available")
        event = run_operation(ListDevices(), backend, NO_DELAYS)
        self.assertIsInstance(event, AdapterFailed)
        self.assertIn("No default controller", event.message)

    def test_scan_uses_injected_delay(self):
        backend = _backend(make_device(MAC_A))
        backend.add_discoverable(make_device(MAC_B, "Speaker"))
        slept = []
        delays = Delays(scan_window=5.0, pair_settle=1.0, sleep=slept.append)

        event = run_operation(ScanDevices(), backend, delays)

        self.assertIsInstance(event, ScanCompleted)
        self.assertEqual(slept, [5.0])
        self.assertEqual([d.address for d in event.devices], [MAC_A, MAC_B])

    def test_scan_failure_still_completes(self):
        event = run_operation(ScanDevices(), _backend(powered=False), NO_DELAYS)
        self.assertIsInstance(event, ScanCompleted)
        self.assertEqual(event.devices, ())
        self.assertIsNotNone(event.error)


class TestConnectDisconnect(unittest.TestCase):
    """Verify the connected flag polarity of device status events."""

    def test_connect_success(self):
        backend = _backend(make_device(MAC_A, paired=True))
        event = run_operation(Connect(MAC_A), backend, NO_DELAYS)
        self.assertEqual(event, DeviceStatus(address=MAC_A, connected=True))

    def test_connect_failure(self):
        backend = _backend(make_device(MAC_A))
        event = run_operation(Connect(MAC_A), backend, NO_DELAYS)
        self.assertFalse(event.connected)
        self.assertIsNotNone(event.error)

    def test_disconnect_success_means_disconnected(self):
        backend = _backend(make_device(MAC_A, paired=True, connected=True))
        event = run_operation(Disconnect(MAC_A), backend, NO_DELAYS)
        self.assertEqual(event, DeviceStatus(address=MAC_A, connected=False))

    def test_disconnect_failure_means_still_connected(self):
        backend = _backend(make_device(MAC_A, connected=True))
        backend.fail("disconnect_device")
        event = run_operation(Disconnect(MAC_A), backend, NO_DELAYS)
        self.assertTrue(event.connected)
        self.assertIsNotNone(event.error)


class TestPairChains(unittest.TestCase):
    """Verify pair chains: best-effort trust and connect, settle delay."""

    def test_pair_and_connect_full_chain(self):
        backend = _backend(make_device(MAC_A))
        slept = []
        delays = Delays(scan_window=0.0, pair_settle=1.0, sleep=slept.append)

        event = run_operation(PairAndConnect(MAC_A), backend, delays)

        self.assertEqual(event, PairingFinished(address=MAC_A))
        self.assertEqual(
            backend.call_names(), ["pair_device", "trust_device", "connect_device"]
        )
        self.assertEqual(slept, [1.0])
        state = backend.list_devices()[0]
        self.assertTrue(state.paired and state.trusted and state.connected)

    def test_pair_failure_stops_chain(self):
        backend = _backend(make_device(MAC_A))
        backend.fail("pair_device", "Failed to pair: org.bluez.Error.AuthenticationFailed")

        event = run_operation(PairAndConnect(MAC_A), backend, NO_DELAYS)

        self.assertEqual(event.address, MAC_A)
        self.assertIn("AuthenticationFailed", event.error)
        self.assertEqual(backend.call_names(), ["pair_device"])

    def test_trust_failure_does_not_block_connect(self):
        backend = _backend(make_device(MAC_A))
        backend.fail("trust_device")

        event = run_operation(PairAndConnect(MAC_A), backend, NO_DELAYS)

        self.assertIsNone(event.error)
        self.assertIn("connect_device", backend.call_names())

    def test_connect_failure_is_discarded(self):
        backend = _backend(make_device(MAC_A))
        backend.fail("connect_device")

        event = run_operation(PairAndConnect(MAC_A), backend, NO_DELAYS)

        self.assertEqual(event, PairingFinished(address=MAC_A))

    def test_pair_key_path_never_connects(self):
        backend = _backend(make_device(MAC_A))
        slept = []
        delays = Delays(scan_window=0.0, pair_settle=1.0, sleep=slept.append)

        event = run_operation(Pair(MAC_A), backend, delays)

        self.assertEqual(event, PairingFinished(address=MAC_A))
        self.assertEqual(backend.call_names(), ["pair_device", "trust_device"])
        self.assertEqual(slept, [])


class TestRemoveAndPower(unittest.TestCase):

    def test_remove(self):
        backend = _backend(make_device(MAC_A))
        event = run_operation(Remove(MAC_A), backend, NO_DELAYS)
        self.assertEqual(event, DeviceRemoved(address=MAC_A))
        self.assertEqual(backend.list_devices(), [])

    def test_remove_unknown_device(self):
        event = run_operation(Remove(MAC_A), _backend(), NO_DELAYS)
        self.assertIsNotNone(event.error)

    def test_query_power(self):
        event = run_operation(QueryPower(), _backend(powered=False), NO_DELAYS)
        self.assertEqual(event, PowerStatus(enabled=False))

    def test_query_power_failure(self):
        backend = _backend()
        backend.fail("is_powered", "could not determine bluetooth status")
        event = run_operation(QueryPower(), backend, NO_DELAYS)
        self.assertFalse(event.enabled)
        self.assertEqual(event.error, "could not determine bluetooth status")

    def test_set_power(self):
        backend = _backend(powered=False)
        self.assertEqual(run_operation(SetPower(True), backend, NO_DELAYS),
                         PowerStatus(enabled=True))
        self.assertTrue(backend.is_powered())

    def test_set_power_failure_reports_previous_state(self):
        backend = _backend(powered=True)
        backend.fail("set_power")
        event = run_operation(SetPower(False), backend, NO_DELAYS)
        self.assertTrue(event.enabled)
        self.assertIsNotNone(event.error)


class TestIterOperations(unittest.TestCase):

    def test_none(self):
        self.assertEqual(list(iter_operations(None)), [])

    def test_batch_is_flattened(self):
        op = Batch((ListDevices(), Batch((QueryPower(),))))
        self.assertEqual(list(iter_operations(op)), [ListDevices(), QueryPower()])

    def test_exit_cannot_run_as_task(self):
        with self.assertRaises(ValueError):
            run_operation(Exit(), _backend(), NO_DELAYS)


if __name__ == "__main__":
    unittest.main()
