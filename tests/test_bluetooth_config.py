#!/usr/bin/env python3
"""
Tests for configuration, key bindings, translations, logging and the
backend factory.
"""

import logging
import os
import tempfile
import unittest
from unittest import mock

from test_helpers import MAC_A

from hyprbluetooth import config
from hyprbluetooth.backend import BluetoothctlBackend
from hyprbluetooth.config import Settings
from hyprbluetooth.events import (
    Activate, FullRefresh, MoveCursor, Quit, RemoveSelected, StartScan, TogglePower,
)
from hyprbluetooth.factory import create_backend
from hyprbluetooth.interfaces import AdapterError
from hyprbluetooth.keys import event_for_key
from hyprbluetooth.log import setup_logging
from hyprbluetooth.mock_backend import MockBluetoothBackend
from hyprbluetooth.translations import (
    TRANSLATIONS, detect_system_language, get_text, resolve_language,
)


class TestSettings(unittest.TestCase):

    def test_defaults(self):
        settings = Settings.from_env({})
        self.assertEqual(settings.mode, config.MODE_PRODUCTION)
        self.assertEqual(settings.auto_refresh, config.AUTO_REFRESH_INTERVAL)
        self.assertIsNone(settings.log_file)
        self.assertEqual(settings.log_level, 'INFO')
        self.assertIsNone(settings.language)

    def test_values(self):
        settings = Settings.from_env({
            'HYPRBT_MODE': 'TEST',
            'HYPRBT_AUTO_REFRESH': '0',
            'HYPRBT_LOG_FILE': '/tmp/bt.log',
            'LOGLEVEL': 'debug',
            'HYPRBT_LANG': 'es',
        })
        self.assertEqual(settings.mode, config.MODE_TEST)
        self.assertEqual(settings.auto_refresh, 0.0)
        self.assertEqual(settings.log_file, '/tmp/bt.log')
        self.assertEqual(settings.log_level, 'DEBUG')
        self.assertEqual(settings.language, 'es')

    def test_invalid_values_fall_back(self):
        settings = Settings.from_env({
            'HYPRBT_MODE': 'staging',
            'HYPRBT_AUTO_REFRESH': 'soon',
            'LOGLEVEL': 'LOUD',
        })
        self.assertEqual(settings.mode, config.MODE_PRODUCTION)
        self.assertEqual(settings.auto_refresh, config.AUTO_REFRESH_INTERVAL)
        self.assertEqual(settings.log_level, 'INFO')

    def test_negative_interval_falls_back(self):
        settings = Settings.from_env({'HYPRBT_AUTO_REFRESH': '-3'})
        self.assertEqual(settings.auto_refresh, config.AUTO_REFRESH_INTERVAL)


class TestKeymap(unittest.TestCase):

    def test_bindings(self):
        expected = {
            'q': Quit(), 'ctrl+c': Quit(),
            'k': MoveCursor(-1), 'up': MoveCursor(-1),
            'j': MoveCursor(1), 'down': MoveCursor(1),
            'enter': Activate(), 'space': Activate(),
            's': StartScan(), 'x': RemoveSelected(),
            'e': TogglePower(), 'ctrl+r': FullRefresh(),
        }
        for key, event in expected.items():
            with self.subTest(key=key):
                self.assertEqual(event_for_key(key), event)

    def test_unbound_key(self):
        self.assertIsNone(event_for_key('z'))


class TestTranslations(unittest.TestCase):

    def test_same_keys_in_every_language(self):
        english = set(TRANSLATIONS['English'])
        for language, strings in TRANSLATIONS.items():
            with self.subTest(language=language):
                self.assertEqual(set(strings), english)

    def test_fallbacks(self):
        self.assertEqual(get_text('title', 'Klingon'), get_text('title'))
        self.assertEqual(get_text('no_such_key'), 'no_such_key')

    def test_detect_from_environment(self):
        with mock.patch.dict(os.environ, {'LC_ALL': 'es_ES.UTF-8'}):
            self.assertEqual(detect_system_language(), 'Español')
        with mock.patch.dict(os.environ, {'LC_ALL': 'C'}):
            self.assertEqual(detect_system_language(), 'English')

    def test_resolve_language(self):
        self.assertEqual(resolve_language('es'), 'Español')
        self.assertEqual(resolve_language('Español'), 'Español')
        self.assertEqual(resolve_language('fr_FR'), 'English')


class TestFactory(unittest.TestCase):

    def test_test_mode_returns_seeded_mock(self):
        backend = create_backend('test')
        self.assertIsInstance(backend, MockBluetoothBackend)
        self.assertEqual(len(backend.list_devices()), 2)

    def test_production_mode(self):
        self.assertIsInstance(create_backend('production'), BluetoothctlBackend)

    def test_mode_from_environment(self):
        with mock.patch.dict(os.environ, {'HYPRBT_MODE': 'test'}):
            self.assertIsInstance(create_backend(), MockBluetoothBackend)


class TestAdapterError(unittest.TestCase):

    def test_message_includes_output(self):
        err = AdapterError('failed to connect', command=['connect', MAC_A],
                           output='Failed to connect: org.bluez.Error.Failed')
        self.assertEqual(str(err), 'failed to connect: Failed to connect: org.bluez.Error.Failed')
        self.assertEqual(err.command, ['connect', MAC_A])

    def test_message_without_output(self):
        self.assertEqual(str(AdapterError('bluetoothctl not found')), 'bluetoothctl not found')


class TestLogging(unittest.TestCase):

    def tearDown(self):
        logger = logging.getLogger('hyprbluetooth')
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    def test_file_logging(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'bt.log')
            logger = setup_logging('DEBUG', path)
            logging.getLogger('hyprbluetooth.backend').debug('running bluetoothctl devices')
            for handler in logger.handlers:
                handler.flush()
            with open(path, encoding='utf-8') as f:
                self.assertIn('running bluetoothctl devices', f.read())
            self.tearDown()

    def test_handlers_replaced_not_stacked(self):
        setup_logging('INFO')
        logger = setup_logging('WARNING')
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.WARNING)
        self.assertFalse(logger.propagate)


if __name__ == "__main__":
    unittest.main()
