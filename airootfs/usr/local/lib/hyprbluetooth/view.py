"""HyprBluetooth - Rendering of the view model.

``render`` is a pure function of the model and returns rich markup, one
screen row per line.  The rows above the device list come from
``_header_lines``, which is also what ``list_offset`` counts, so mouse
hit-testing always matches what is drawn.
"""

from typing import List, Optional

from rich.markup import escape

from .theme import DEFAULT_THEME, Theme
from .translations import get_text

GLYPH_CONNECTED = '●'
GLYPH_PAIRED = '◐'
GLYPH_UNPAIRED = '○'


def _styled(text: str, style: str) -> str:
    if not style:
        return text
    return f'[{style}]{text}[/]'


def _header_lines(model, theme: Theme, language: str) -> List[str]:
    lines = [_styled(escape(f" {get_text('title', language)} "), theme.title)]

    if model.power_known:
        if model.power_enabled:
            lines.append(_styled(f"🔵 {get_text('bt_on', language)}", theme.power_on))
        else:
            lines.append(_styled(f"🔴 {get_text('bt_off', language)}", theme.power_off))
    lines.append('')

    if model.scanning:
        lines.append(_styled(f"🔍 {get_text('scanning', language)}", theme.scanning))
        lines.append('')
    return lines


def devices_visible(model) -> bool:
    """True when the device rows, not a notice, are drawn."""
    if model.power_known and not model.power_enabled:
        return False
    return bool(model.devices)


def list_offset(model) -> int:
    """Screen row of the first device line."""
    return len(_header_lines(model, DEFAULT_THEME, 'English'))


def row_at(model, y: int) -> Optional[int]:
    """Return the index of the device drawn on screen row *y*, or None."""
    if not devices_visible(model):
        return None
    index = y - list_offset(model)
    if 0 <= index < len(model.devices):
        return index
    return None


def _device_line(model, index: int, theme: Theme, language: str) -> str:
    device = model.devices[index]
    selected = index == model.cursor
    cursor = '>' if selected else ' '

    if device.connected:
        glyph = _styled(GLYPH_CONNECTED, theme.connected)
    elif device.paired:
        glyph = _styled(GLYPH_PAIRED, theme.paired)
    else:
        glyph = _styled(GLYPH_UNPAIRED, theme.unpaired)

    name = device.name or get_text('unknown_device', language)
    line = f'{cursor} {glyph} {escape(name)} ({device.address})'
    if selected:
        return _styled(line, theme.selected)
    return line


def render(model, theme: Theme = DEFAULT_THEME, language: str = 'English') -> str:
    """Render *model* as rich markup.

    Args:
        model: The current ViewModel.
        theme: Style table used for colours.
        language: Translation name used for all strings.

    Returns:
        The full screen as newline separated markup.
    """
    lines = _header_lines(model, theme, language)

    if model.power_known and not model.power_enabled:
        lines.append(_styled(escape(get_text('disabled', language)), theme.disabled))
    elif not model.devices:
        lines.append(_styled(escape(get_text('no_devices', language)), theme.empty))
    else:
        for index in range(len(model.devices)):
            lines.append(_device_line(model, index, theme, language))

    if model.error:
        # bluetoothctl output can span lines; the status line cannot
        message = ' '.join(model.error.split())
        lines.append('')
        lines.append(_styled(
            escape(f"{get_text('error', language)}: {message}"), theme.error))

    lines.extend(['', ''])
    for key in ('controls', 'help_nav', 'help_actions'):
        lines.append(_styled(escape(get_text(key, language)), theme.help))
    lines.append('')
    lines.append(_styled(escape(get_text('legend', language)), theme.help))
    return '\n'.join(lines)
