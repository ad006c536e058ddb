"""Runtime markers for Expr Core.

Every evaluation result falls into one of three classes, told apart by type:

- ``Blocked``  : the sandbox refused to produce a value
- ``Undefined``: a legitimate "no value" (JS ``undefined``)
- anything else: a concrete value (``None`` is JS ``null``)
"""

from __future__ import annotations


class _Undefined:
    """Singleton for the host "no value"."""

    _instance: "_Undefined | None" = None

    def __new__(cls) -> "_Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Undefined"

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return "undefined"


class _Blocked:
    """Singleton returned by the evaluator for refused sub-expressions.

    Never handed to callers: the resolver turns it into an error.
    """

    _instance: "_Blocked | None" = None

    def __new__(cls) -> "_Blocked":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Blocked"

    def __bool__(self) -> bool:
        return False


Undefined = _Undefined()
Blocked = _Blocked()


def is_blocked(value: object) -> bool:
    return isinstance(value, _Blocked)


def is_nullish(value: object) -> bool:
    """True for ``None`` (null) and ``Undefined``."""
    return value is None or isinstance(value, _Undefined)
