"""HyprBluetooth - Runtime configuration.

There is no configuration file.  Everything that can be tuned is read
from the environment once at startup.

Environment:
    HYPRBT_MODE: 'production' (default) or 'test' (in-memory backend)
    HYPRBT_AUTO_REFRESH: seconds between background list refreshes, 0 disables
    HYPRBT_LOG_FILE: write log records to this file
    HYPRBT_LANG: force a UI language instead of detecting it from the locale
    LOGLEVEL: logging level name (default INFO)
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional


BLUETOOTHCTL = 'bluetoothctl'

# Subprocess timeouts in seconds
DEFAULT_TIMEOUT = 15
LONG_TIMEOUT = 30

# Discovery stays active this long during a scan
SCAN_WINDOW = 5.0
# Time the daemon needs to register a new pairing before connecting
PAIR_SETTLE = 1.0

AUTO_REFRESH_INTERVAL = 15.0

MODE_PRODUCTION = 'production'
MODE_TEST = 'test'

LOG_LEVELS = ('CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG')


def _float_env(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name, '').strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


@dataclass(frozen=True)
class Settings:
    """Process-wide settings resolved from the environment."""

    mode: str = MODE_PRODUCTION
    auto_refresh: float = AUTO_REFRESH_INTERVAL
    log_file: Optional[str] = None
    log_level: str = 'INFO'
    language: Optional[str] = None

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> 'Settings':
        """Build settings from *env* (defaults to ``os.environ``)."""
        if env is None:
            env = os.environ

        mode = env.get('HYPRBT_MODE', MODE_PRODUCTION).strip().lower()
        if mode not in (MODE_PRODUCTION, MODE_TEST):
            mode = MODE_PRODUCTION

        log_level = env.get('LOGLEVEL', 'INFO').strip().upper()
        if log_level not in LOG_LEVELS:
            log_level = 'INFO'

        return cls(
            mode=mode,
            auto_refresh=_float_env(env, 'HYPRBT_AUTO_REFRESH', AUTO_REFRESH_INTERVAL),
            log_file=env.get('HYPRBT_LOG_FILE') or None,
            log_level=log_level,
            language=env.get('HYPRBT_LANG') or None,
        )
