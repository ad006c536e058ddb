"""Workspace — a stateful table of named values and expressions."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from .config import DEFAULT_OPTIONS, EvalOptions
from .errors import UndefinedVariableError
from .resolver import evaluate, resolve, resolve_all


class Workspace:
    """Accumulates variable definitions and evaluates expressions against them.

    Usage::

        ws = Workspace()
        ws.define("price", 12.5)
        ws.define("qty", 4)
        ws.define("total", "price * qty")
        ws.resolve("total")              # → 50.0
        ws.eval("total > 40 ? 'bulk' : 'retail'")   # → 'bulk'
        ws.reset()                        # clear definitions

    String values are expression text; quote them (``"'text'"``) to define a
    plain string.
    """

    def __init__(
        self,
        bindings: Mapping[str, Any] | None = None,
        options: EvalOptions | None = None,
    ) -> None:
        self._bindings: dict[str, Any] = dict(bindings or {})
        self.options = options or DEFAULT_OPTIONS

    @property
    def bindings(self) -> Mapping[str, Any]:
        """Read-only view of the current definitions."""
        return MappingProxyType(self._bindings)

    def define(self, name: str, value: Any) -> None:
        self._bindings[name] = value

    def undefine(self, name: str) -> None:
        self._bindings.pop(name, None)

    def eval(self, text: str) -> Any:
        """Evaluate *text* against the current definitions."""
        return evaluate(text, self._bindings, self.options)

    def resolve(self, name: str) -> Any:
        """Resolve the definition of *name*.

        Non-string definitions are returned as they are. Raises
        ``UndefinedVariableError`` when *name* is not defined.
        """
        if name not in self._bindings:
            raise UndefinedVariableError(name)
        value = self._bindings[name]
        if not isinstance(value, str):
            return value
        return resolve(name, value, self._bindings, options=self.options)

    def resolve_all(self) -> dict[str, Any]:
        return resolve_all(self._bindings, self.options)

    def reset(self) -> None:
        """Clear all definitions."""
        self._bindings = {}
