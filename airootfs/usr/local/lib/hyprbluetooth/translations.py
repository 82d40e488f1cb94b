"""HyprBluetooth - Internationalization translations.

Provides the view strings in English and Spanish.
"""

import locale
import os

TRANSLATIONS = {
    'English': {
        'title': 'HyprBluetooth - Bluetooth Device Manager',
        'bt_on': 'Bluetooth: ON',
        'bt_off': 'Bluetooth: OFF',
        'scanning': 'Scanning for devices...',
        'disabled': "Bluetooth is disabled. Press 'e' to enable.",
        'no_devices': "No devices found. Press 's' to scan for devices.",
        'unknown_device': 'Unknown Device',
        'error': 'Error',
        'controls': 'Controls:',
        'help_nav': ('↑/k, ↓/j: Navigate  Enter/Space: Connect/Disconnect  '
                     's: Scan  r: Refresh'),
        'help_actions': ('p: Pair  d: Disconnect  x: Remove  e: Enable/Disable Bluetooth  '
                         'Ctrl+r: Full Refresh  q: Quit'),
        'legend': 'Status: ● Connected  ◐ Paired  ○ Unpaired',
    },

    'Español': {
        'title': 'HyprBluetooth - Gestor de dispositivos Bluetooth',
        'bt_on': 'Bluetooth: ACTIVADO',
        'bt_off': 'Bluetooth: DESACTIVADO',
        'scanning': 'Buscando dispositivos...',
        'disabled': "Bluetooth está desactivado. Pulsa 'e' para activarlo.",
        'no_devices': "No se encontraron dispositivos. Pulsa 's' para buscar.",
        'unknown_device': 'Dispositivo desconocido',
        'error': 'Error',
        'controls': 'Controles:',
        'help_nav': ('↑/k, ↓/j: Navegar  Enter/Espacio: Conectar/Desconectar  '
                     's: Buscar  r: Actualizar'),
        'help_actions': ('p: Emparejar  d: Desconectar  x: Eliminar  e: Activar/Desactivar  '
                         'Ctrl+r: Actualizar todo  q: Salir'),
        'legend': 'Estado: ● Conectado  ◐ Emparejado  ○ Sin emparejar',
    },
}


LANGUAGE_CODES = {
    'en': 'English',
    'es': 'Español',
}


def detect_system_language():
    """Detect the system language from environment variables.

    Returns:
        The language name matching available translations, or 'English'.
    """
    lang_code = None
    for var in ['LC_ALL', 'LC_MESSAGES', 'LANG', 'LANGUAGE']:
        lang_code = os.environ.get(var)
        if lang_code:
            break

    if not lang_code:
        try:
            lang_tuple = locale.getlocale()
            if lang_tuple and lang_tuple[0]:
                lang_code = lang_tuple[0]
        except ValueError:
            pass

    if not lang_code:
        return 'English'

    lang_prefix = lang_code.split('_')[0].split('.')[0].lower()

    return LANGUAGE_CODES.get(lang_prefix, 'English')


def resolve_language(name):
    """Map a HYPRBT_LANG value ('es', 'Español', ...) to a translation name."""
    if not name:
        return detect_system_language()
    if name in TRANSLATIONS:
        return name
    prefix = name.split('_')[0].split('.')[0].lower()
    return LANGUAGE_CODES.get(prefix, 'English')


def get_text(key, language='English'):
    """Retrieve a translated string for the given key and language.

    Args:
        key: The translation key to look up.
        language: The language name (default: 'English').

    Returns:
        The translated string, or the English fallback, or the key itself.
    """
    lang_dict = TRANSLATIONS.get(language, TRANSLATIONS['English'])
    return lang_dict.get(key, TRANSLATIONS['English'].get(key, key))
