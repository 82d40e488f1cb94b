"""HyprBluetooth - Full-screen terminal application.

Owns the single ViewModel.  Keyboard, mouse and timer input is turned
into events and applied with ``model.update``; the returned operation
runs in a daemon thread and its result event is marshalled back onto
the textual event loop with ``call_from_thread``.
"""

import logging
import threading
from typing import Optional

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from .config import Settings
from .events import AdapterFailed, AutoRefresh, Click, Event, MoveCursor, Quit
from .factory import create_backend
from .interfaces import BackendInterface
from .keys import event_for_key
from .model import ViewModel, update
from .operations import (
    Batch, Delays, Exit, ListDevices, Operation, QueryPower, iter_operations,
    run_operation,
)
from .theme import DEFAULT_THEME, NORD, Theme
from .translations import resolve_language
from .view import render

logger = logging.getLogger(__name__)


class DeviceView(Static):
    """The whole screen as one block of text; row 0 is the title."""

    DEFAULT_CSS = """
    DeviceView {
        padding: 0;
        text-wrap: nowrap;
        text-overflow: ellipsis;
    }
    """

    def on_click(self, event: events.Click) -> None:
        if event.button != 1:
            return
        event.stop()
        self.app.apply_event(Click(y=event.y))

    def on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        event.stop()
        self.app.apply_event(MoveCursor(-1))

    def on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        event.stop()
        self.app.apply_event(MoveCursor(1))


class BluetoothApp(App):
    """Main Bluetooth device manager."""

    TITLE = "HyprBluetooth"
    CSS = f"""
    Screen {{
        background: {NORD['nord0']};
        color: {NORD['nord4']};
    }}
    """
    BINDINGS = [
        Binding("ctrl+c", "quit_app", "Quit", show=False, priority=True),
    ]

    def __init__(self, backend: Optional[BackendInterface] = None,
                 settings: Optional[Settings] = None,
                 delays: Delays = Delays(),
                 theme: Theme = DEFAULT_THEME):
        super().__init__()
        self._settings = settings or Settings.from_env()
        self._backend = backend or create_backend(self._settings.mode)
        self._delays = delays
        self._view_theme = theme
        self._language = resolve_language(self._settings.language)
        self.model = ViewModel()

    def compose(self) -> ComposeResult:
        yield DeviceView(id="view")

    def on_mount(self) -> None:
        self._redraw()
        self._launch(Batch((ListDevices(), QueryPower())))
        if self._settings.auto_refresh > 0:
            self.set_interval(self._settings.auto_refresh, self._auto_refresh)

    # -- Input -------------------------------------------------------------

    def on_key(self, event: events.Key) -> None:
        mapped = event_for_key(event.key)
        if mapped is None:
            return
        event.stop()
        event.prevent_default()
        self.apply_event(mapped)

    def action_quit_app(self) -> None:
        self.apply_event(Quit())

    def _auto_refresh(self) -> None:
        self.apply_event(AutoRefresh())

    # -- Update loop -------------------------------------------------------

    def apply_event(self, event: Event) -> None:
        """Single entry point of the update loop; runs on the app thread."""
        self.model, operation = update(self.model, event)
        self._redraw()
        self._launch(operation)

    def _redraw(self) -> None:
        self.query_one(DeviceView).update(
            render(self.model, self._view_theme, self._language)
        )

    def _launch(self, operation: Optional[Operation]) -> None:
        for op in iter_operations(operation):
            if isinstance(op, Exit):
                self.exit()
                return
            thread = threading.Thread(target=self._run_task, args=(op,), daemon=True)
            thread.start()

    def _run_task(self, operation: Operation) -> None:
        """Worker thread body: run one operation, deliver one event."""
        try:
            result = run_operation(operation, self._backend, self._delays)
        except Exception as exc:
            logger.exception("task %s crashed", operation)
            result = AdapterFailed(message=str(exc) or type(exc).__name__)

        try:
            self.call_from_thread(self.apply_event, result)
        except RuntimeError:
            logger.debug("dropped %s, application is not running", result)
