"""Binding tables and resolution state."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .config import DEFAULT_OPTIONS, EvalOptions


@dataclass
class ResolutionChain:
    """Names of the variables currently being resolved, outermost first.

    One instance per top-level call, passed by reference to every nested
    resolution so cycle detection covers the whole call.
    """

    names: list[str] = field(default_factory=list)

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def __len__(self) -> int:
        return len(self.names)

    def push(self, name: str) -> None:
        self.names.append(name)

    def pop(self, name: str) -> None:
        # Innermost occurrence; there is at most one.
        for i in range(len(self.names) - 1, -1, -1):
            if self.names[i] == name:
                del self.names[i]
                return

    def cycle(self, name: str) -> list[str]:
        """The path from the first occurrence of *name* back to *name*."""
        start = self.names.index(name)
        return self.names[start:] + [name]


@dataclass
class Environment:
    """Everything an evaluation can see.

    ``bindings`` is the caller's table: string values are expression text.
    ``locals_`` holds concrete values introduced by function parameters and
    the call receiver; they shadow bindings and are never re-resolved.
    """

    bindings: Mapping[str, Any] = field(default_factory=dict)
    locals_: dict[str, Any] = field(default_factory=dict)
    chain: ResolutionChain = field(default_factory=ResolutionChain)
    options: EvalOptions = DEFAULT_OPTIONS

    # -- Lookup ---------------------------------------------------------

    def has_local(self, name: str) -> bool:
        return name in self.locals_

    def get_local(self, name: str) -> Any:
        return self.locals_[name]

    def has_binding(self, name: str) -> bool:
        return name in self.bindings

    def get_binding(self, name: str) -> Any:
        return self.bindings[name]

    # -- Scopes ---------------------------------------------------------

    def extend(self, names: Mapping[str, Any]) -> Environment:
        """A child scope with *names* added as locals; ``self`` is untouched."""
        return Environment(
            bindings=self.bindings,
            locals_={**self.locals_, **names},
            chain=self.chain,
            options=self.options,
        )

    def global_scope(self) -> Environment:
        """The same bindings and chain without any locals."""
        if not self.locals_:
            return self
        return Environment(
            bindings=self.bindings, chain=self.chain, options=self.options
        )

    def snapshot(self) -> Environment:
        """A copy whose tables no longer follow later changes to this one."""
        return Environment(
            bindings=dict(self.bindings),
            locals_=dict(self.locals_),
            chain=self.chain,
            options=self.options,
        )
