"""Operator semantics over Python values.

Expressions are written in a JavaScript-flavoured syntax, so coercions follow
that language: ``"a" + 1`` is ``"a1"``, ``1 / 0`` is ``inf`` and ``"3" == 3``
holds. Values themselves stay plain Python objects.
"""

from __future__ import annotations

import math
import operator
import re
from collections.abc import Mapping
from typing import Any, Callable

from .values import _Undefined, is_nullish


_INT_RE = re.compile(r"^[+-]?\d+$", re.ASCII)
_FLOAT_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$", re.ASCII)
_HEX_RE = re.compile(r"^0[xX][0-9a-fA-F]+$")

# integers past this magnitude are carried as floats
_MAX_SAFE_INTEGER = 2 ** 53


# ---------------------------------------------------------------------------
# Coercions
# ---------------------------------------------------------------------------

def truthy(value: Any) -> bool:
    if is_nullish(value):
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return not (value == 0 or value != value)
    if isinstance(value, str):
        return value != ""
    return True


def _to_float(n: int | float) -> float:
    try:
        return float(n)
    except OverflowError:
        return math.inf if n > 0 else -math.inf


def _number(n: int | float) -> int | float:
    """Keep *n* exact while it is a safe integer, else use a float."""
    if isinstance(n, int) and not -_MAX_SAFE_INTEGER <= n <= _MAX_SAFE_INTEGER:
        return _to_float(n)
    return n


def to_number(value: Any) -> int | float:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return _number(value)
    if value is None:
        return 0
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        if _INT_RE.match(text):
            return _number(int(text))
        if _FLOAT_RE.match(text):
            return float(text)
        if _HEX_RE.match(text):
            return _number(int(text, 16))
        if text in ("Infinity", "+Infinity"):
            return math.inf
        if text == "-Infinity":
            return -math.inf
    return math.nan


def to_int32(value: Any) -> int:
    n = to_number(value)
    if math.isnan(n) or math.isinf(n):
        return 0
    n = int(n) & 0xFFFFFFFF
    return n - 0x100000000 if n & 0x80000000 else n


def _number_to_string(n: int | float) -> str:
    if isinstance(n, int):
        return str(n)
    if math.isnan(n):
        return "NaN"
    if math.isinf(n):
        return "Infinity" if n > 0 else "-Infinity"
    if n.is_integer() and abs(n) < 1e21:
        return str(int(n))
    return repr(n)


def to_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    if isinstance(value, _Undefined):
        return "undefined"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _number_to_string(value)
    if isinstance(value, (list, tuple)):
        return ",".join("" if is_nullish(v) else to_string(v) for v in value)
    if isinstance(value, Mapping):
        return "[object Object]"
    return str(value)


def _is_primitive(value: Any) -> bool:
    return isinstance(value, (bool, int, float, str))


def _category(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, _Undefined):
        return "undefined"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if callable(value):
        return "function"
    return "object"


# ---------------------------------------------------------------------------
# Equality
# ---------------------------------------------------------------------------

def loose_equals(left: Any, right: Any) -> bool:
    if is_nullish(left) or is_nullish(right):
        return is_nullish(left) and is_nullish(right)
    if _is_primitive(left) and _is_primitive(right):
        if _category(left) != _category(right):
            return to_number(left) == to_number(right)
    return left == right


def strict_equals(left: Any, right: Any) -> bool:
    if _category(left) != _category(right):
        return False
    return left == right


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------

def add(left: Any, right: Any) -> Any:
    if _is_primitive(left) or is_nullish(left):
        if _is_primitive(right) or is_nullish(right):
            if not isinstance(left, str) and not isinstance(right, str):
                return _number(to_number(left) + to_number(right))
    return to_string(left) + to_string(right)


def subtract(left: Any, right: Any) -> int | float:
    return _number(to_number(left) - to_number(right))


def multiply(left: Any, right: Any) -> int | float:
    return _number(to_number(left) * to_number(right))


def divide(left: Any, right: Any) -> float:
    x, y = _to_float(to_number(left)), _to_float(to_number(right))
    if y == 0:
        if x == 0 or math.isnan(x):
            return math.nan
        return math.copysign(math.inf, x) * math.copysign(1.0, y)
    return x / y


def remainder(left: Any, right: Any) -> int | float:
    """Remainder with the sign of the dividend."""
    x, y = to_number(left), to_number(right)
    if isinstance(x, int) and isinstance(y, int):
        if y == 0:
            return math.nan
        r = abs(x) % abs(y)
        return -r if x < 0 else r
    x, y = _to_float(x), _to_float(y)
    if math.isnan(x) or math.isnan(y) or math.isinf(x) or y == 0:
        return math.nan
    if math.isinf(y):
        return x
    return math.fmod(x, y)


def _relational(compare: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    def apply(left: Any, right: Any) -> bool:
        if isinstance(left, str) and isinstance(right, str):
            return compare(left, right)
        return compare(to_number(left), to_number(right))
    return apply


def _bitwise(combine: Callable[[int, int], int]) -> Callable[[Any, Any], int]:
    def apply(left: Any, right: Any) -> int:
        return to_int32(combine(to_int32(left), to_int32(right)))
    return apply


# ---------------------------------------------------------------------------
# Operator tables
# ---------------------------------------------------------------------------

UNARY_OPERATORS: dict[str, Callable[[Any], Any]] = {
    "+": to_number,
    "-": lambda v: -to_number(v),
    "~": lambda v: ~to_int32(v),
    "!": lambda v: not truthy(v),
}

BINARY_OPERATORS: dict[str, Callable[[Any, Any], Any]] = {
    "==": loose_equals,
    "===": strict_equals,
    "!=": lambda l, r: not loose_equals(l, r),
    "!==": lambda l, r: not strict_equals(l, r),
    "+": add,
    "-": subtract,
    "*": multiply,
    "/": divide,
    "%": remainder,
    "<": _relational(operator.lt),
    "<=": _relational(operator.le),
    ">": _relational(operator.gt),
    ">=": _relational(operator.ge),
    "|": _bitwise(operator.or_),
    "&": _bitwise(operator.and_),
    "^": _bitwise(operator.xor),
}
