"""Property reads for Expr Core."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .config import DEFAULT_OPTIONS, EvalOptions
from .operators import to_string
from .values import Blocked, Undefined


def _index(key: Any) -> int | None:
    """Integral numeric key (or canonical index string) → int, else None."""
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key
    if isinstance(key, float) and key.is_integer():
        return int(key)
    if isinstance(key, str) and key.isascii() and key.isdecimal():
        # "01" is a property name, not an index
        if str(int(key)) == key:
            return int(key)
    return None


def apply_getter(value: Any, key: Any, options: EvalOptions = DEFAULT_OPTIONS) -> Any:
    """Read property *key* of *value*.

    - Mapping: the key itself, then its string form; missing → Undefined
    - list / tuple / str: ``length`` and 0-based integral indexes, then
      attributes (so string methods stay reachable)
    - anything else: attributes; refused names → Blocked, missing → Undefined

    Callers have already rejected nullish and callable values and the
    blocked property names.
    """
    if isinstance(value, Mapping):
        try:
            if key in value:
                return value[key]
        except TypeError:
            # unhashable key
            return Undefined
        return value.get(to_string(key), Undefined)

    if isinstance(value, (list, tuple, str)):
        if key == "length":
            return len(value)
        idx = _index(key)
        if idx is not None:
            return value[idx] if 0 <= idx < len(value) else Undefined

    if not isinstance(key, str):
        return Undefined
    if key in options.blocked_attributes:
        return Blocked
    if key.startswith("_") and not options.allow_private_attributes:
        return Blocked
    return getattr(value, key, Undefined)
