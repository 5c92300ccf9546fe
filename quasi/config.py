from __future__ import annotations
import os

from quasi.types.errors import ConfigError

# Default truncation width for names synthesized from expression text
_DEFAULT_NAME_WIDTH = 60


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ConfigError(f"{var} must be a non-negative integer, got {raw!r}") from None
    if value < 0:
        raise ConfigError(f"{var} must be a non-negative integer, got {value}")
    return value


def get_name_width() -> int:
    return int_from_env('QUASI_NAME_WIDTH', _DEFAULT_NAME_WIDTH)
