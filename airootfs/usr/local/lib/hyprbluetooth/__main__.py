#!/usr/bin/env python3
"""HyprBluetooth - Entry point."""

import sys

from .app import BluetoothApp
from .config import Settings
from .factory import create_backend
from .log import setup_logging


def main():
    """Launch the HyprBluetooth terminal application.

    Returns:
        Process exit code: 0 on normal quit, 1 if the UI failed.
    """
    settings = Settings.from_env()
    setup_logging(settings.log_level, settings.log_file)

    try:
        app = BluetoothApp(backend=create_backend(settings.mode), settings=settings)
        app.run()
    except Exception as exc:
        print(f"Error running program: {exc}", file=sys.stderr)
        return 1

    # textual reports failures inside run() through the return code
    if app.return_code:
        print(f"Error running program: exit status {app.return_code}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
