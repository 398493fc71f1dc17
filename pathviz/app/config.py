# pathviz/app/config.py
#!/usr/bin/env python3
"""
Viewer settings.

Defaults give a 20x50 grid with the start at row 10 col 15 and the finish
at row 10 col 35. Each value can be overridden by an environment
variable and then by a command line flag:

    PATHVIZ_ROWS        --rows=20
    PATHVIZ_COLS        --cols=50
    PATHVIZ_START       --start=10,15
    PATHVIZ_FINISH      --finish=10,35
    PATHVIZ_CELL_SIZE   --cell-size=24
                        --verbose  (or --verbose=true|false)
"""

import os
from dataclasses import dataclass, replace
from typing import Dict, List, Mapping, Optional

from pathviz.core.types import Cell


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    rows: int = 20
    cols: int = 50
    start: Cell = (10, 15)
    finish: Cell = (10, 35)
    cell_size: int = 24
    visited_delay_ms: int = 10
    path_delay_ms: int = 50
    verbose: bool = False


_ENV_KEYS = {
    "PATHVIZ_ROWS": "rows",
    "PATHVIZ_COLS": "cols",
    "PATHVIZ_START": "start",
    "PATHVIZ_FINISH": "finish",
    "PATHVIZ_CELL_SIZE": "cell_size",
}

_FLAGS = {
    "--rows": "rows",
    "--cols": "cols",
    "--start": "start",
    "--finish": "finish",
    "--cell-size": "cell_size",
}


def _parse_int(name: str, raw: str, minimum: int) -> int:
    try:
        v = int(raw.strip())
    except ValueError:
        raise ConfigError(f"{name}: expected an integer, got {raw!r}") from None
    if v < minimum:
        raise ConfigError(f"{name}: must be >= {minimum}, got {v}")
    return v


def parse_cell(name: str, raw: str) -> Cell:
    parts = raw.replace(" ", "").split(",")
    if len(parts) != 2:
        raise ConfigError(f"{name}: expected 'row,col', got {raw!r}")
    return (_parse_int(name, parts[0], 0), _parse_int(name, parts[1], 0))


def _coerce(field_name: str, raw: str):
    if field_name in ("start", "finish"):
        return parse_cell(field_name, raw)
    minimum = 4 if field_name == "cell_size" else 1
    return _parse_int(field_name, raw, minimum)


_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


def _parse_bool(name: str, raw: str) -> bool:
    v = raw.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ConfigError(f"{name}: expected one of {_TRUE + _FALSE}, got {raw!r}")


def resolve_settings(argv: Optional[List[str]] = None,
                     environ: Optional[Mapping[str, str]] = None) -> Settings:
    environ = os.environ if environ is None else environ
    argv = [] if argv is None else argv

    overrides: Dict[str, object] = {}
    for key, field_name in _ENV_KEYS.items():
        if environ.get(key):
            overrides[field_name] = _coerce(field_name, environ[key])

    for arg in argv:
        if not arg.startswith("--"):
            raise ConfigError(f"unexpected argument {arg!r}; options look like --name=value")
        flag, sep, value = arg.partition("=")
        if flag == "--verbose":
            overrides["verbose"] = _parse_bool("verbose", value) if sep else True
        elif flag in _FLAGS:
            if not sep:
                raise ConfigError(f"{flag} needs a value, e.g. {flag}=...")
            overrides[_FLAGS[flag]] = _coerce(_FLAGS[flag], value)
        else:
            raise ConfigError(f"unknown option {arg}")

    return replace(Settings(), **overrides)
