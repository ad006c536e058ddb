"""Error taxonomy for Expr Core.

Only the resolver boundary (and sandboxed function invocation) raises these;
the evaluator itself reports refusals through ``Blocked``.
"""

from __future__ import annotations


class ExprCoreError(Exception):
    """Base class for all Expr Core errors."""

    def __init__(self, message: str, name: str | None = None) -> None:
        super().__init__(message)
        self.name = name


class ExprSyntaxError(ExprCoreError):
    """Raised when expression text cannot be parsed."""

    def __init__(self, name: str | None = None) -> None:
        super().__init__("expression syntax error", name)


class CircularReferenceError(ExprCoreError):
    """Raised when resolving a variable re-enters a variable already in flight."""

    def __init__(self, name: str, path: list[str]) -> None:
        super().__init__(
            "circular variable reference: " + " -> ".join(path), name
        )
        self.path = path


class UndefinedVariableError(ExprCoreError):
    """Raised when evaluation produces no value.

    Covers unknown identifiers, unsupported syntax and refused property or
    call targets alike; the message does not say which.
    """

    def __init__(self, name: str | None = None) -> None:
        message = "use of undefined variable"
        if name is not None:
            message += f" while resolving {name!r}"
        super().__init__(message, name)
