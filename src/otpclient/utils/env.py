"""Environment helper utilities."""

from __future__ import annotations

import os
from typing import Optional

_FALSE_VALUES = {"0", "false", "no", "off"}


def get_bool_env(name: str, *, default: bool = False) -> bool:
    """Return True/False for an environment flag."""
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if not value:
        return default
    return value not in _FALSE_VALUES


def get_str_env(name: str) -> Optional[str]:
    """Return a stripped environment value, or None when unset or blank."""
    raw = os.getenv(name)
    if raw is None:
        return None
    value = raw.strip()
    return value or None
