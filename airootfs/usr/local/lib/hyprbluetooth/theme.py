"""HyprBluetooth - Nord colour table for the terminal view.

The view is rendered as rich markup, so a theme is just an immutable
table of style strings passed to ``view.render``.
"""

from dataclasses import dataclass

# Nord Color Palette
NORD_POLAR_NIGHT = {
    'nord0': '#2E3440',
    'nord1': '#3B4252',
    'nord2': '#434C5E',
    'nord3': '#4C566A',
}

NORD_SNOW_STORM = {
    'nord4': '#D8DEE9',
    'nord5': '#E5E9F0',
    'nord6': '#ECEFF4',
}

NORD_FROST = {
    'nord7': '#8FBCBB',
    'nord8': '#88C0D0',
    'nord9': '#81A1C1',
    'nord10': '#5E81AC',
}

NORD_AURORA = {
    'nord11': '#BF616A',
    'nord12': '#D08770',
    'nord13': '#EBCB8B',
    'nord14': '#A3BE8C',
    'nord15': '#B48EAD',
}

# Convenient flat access
NORD = {**NORD_POLAR_NIGHT, **NORD_SNOW_STORM, **NORD_FROST, **NORD_AURORA}


@dataclass(frozen=True)
class Theme:
    """Rich style strings for each element of the view."""

    title: str
    power_on: str
    power_off: str
    scanning: str
    disabled: str
    empty: str
    connected: str
    paired: str
    unpaired: str
    selected: str
    error: str
    help: str


DEFAULT_THEME = Theme(
    title=f"bold {NORD['nord6']} on {NORD['nord10']}",
    power_on=f"bold {NORD['nord14']}",
    power_off=f"bold {NORD['nord11']}",
    scanning=f"bold {NORD['nord14']}",
    disabled=f"italic {NORD['nord11']}",
    empty=f"italic {NORD['nord3']}",
    connected=NORD['nord14'],
    paired=NORD['nord12'],
    unpaired=NORD['nord3'],
    selected=f"on {NORD['nord1']}",
    error=f"bold {NORD['nord11']}",
    help=NORD['nord3'],
)

# No colours at all, for dumb terminals and tests
PLAIN_THEME = Theme(*([''] * 12))
