from __future__ import annotations
import os


_FALSE_VALUES = ('0', 'false', 'no', 'off')

# Name under which generated code reaches the runtime helpers
RUNTIME_ALIAS = '__eta__'

_DEFAULT_PPRINT_WIDTH = 80


def flag_from_env(var: str, default: bool) -> bool:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() not in _FALSE_VALUES


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_auto_import() -> bool:
    # Import dotted namespaces such as math in (math.sqrt 2) on first use
    return flag_from_env('ETA_AUTO_IMPORT', True)


def get_pprint_width() -> int:
    return int_from_env('ETA_PPRINT_WIDTH', _DEFAULT_PPRINT_WIDTH)
