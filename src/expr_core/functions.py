"""Function expressions: validate the whole body, then build a closure.

A function expression only produces a value after every statement of its body
has been evaluated once in dry-run mode with the parameters bound to
placeholders. The resulting callable re-enters the evaluator on each call with
the scope captured at construction and nothing else.
"""

from __future__ import annotations

import logging
from typing import Any

from .environment import Environment
from .errors import UndefinedVariableError
from .grammar import child, node_type
from .unparse import UnparseError, unparse
from .values import Blocked, Undefined, is_blocked

logger = logging.getLogger(__name__)


def _param_names(node: Any) -> list[str] | None:
    """Declared parameter names, or None if any is not a plain identifier."""
    names = []
    for param in child(node, "params", []):
        if node_type(param) != "Identifier":
            return None
        names.append(child(param, "name"))
    return names


def _body(node: Any) -> list:
    return child(child(node, "body"), "body", [])


class SandboxedFunction:
    """A validated function expression closed over its defining scope."""

    __slots__ = ("node", "params", "scope", "source")

    def __init__(self, node: Any, params: list[str], scope: Environment, source: str) -> None:
        self.node = node
        self.params = params
        self.scope = scope
        self.source = source

    def __call__(self, *args: Any) -> Any:
        return self.invoke(None, args)

    def invoke(self, receiver: Any, args: list[Any] | tuple[Any, ...]) -> Any:
        """Run the body with *args* bound to the parameters.

        *receiver* (if not None) is visible as ``this``. Returns the value of
        the first ``return`` statement reached, else ``Undefined``.
        """
        from .evaluator import evaluate_node

        names = {
            name: args[i] if i < len(args) else Undefined
            for i, name in enumerate(self.params)
        }
        if receiver is not None:
            names["this"] = receiver
        env = self.scope.extend(names)

        logger.debug("invoking %s with %d argument(s)", self.source, len(args))
        for statement in _body(self.node):
            value = evaluate_node(statement, env)
            if is_blocked(value):
                raise UndefinedVariableError()
            if node_type(statement) == "ReturnStatement":
                return value
        return Undefined

    def __repr__(self) -> str:
        return f"<SandboxedFunction {self.source}>"


def evaluate_function(node: Any, env: Environment, dry_run: bool = False) -> Any:
    """Evaluate a FunctionExpression node to a SandboxedFunction or Blocked."""
    from .evaluator import evaluate_node

    if (
        child(node, "generator", False)
        or child(node, "isAsync", False)
        or child(node, "async", False)
    ):
        return Blocked
    params = _param_names(node)
    if params is None:
        return Blocked

    # Pass 1: the body must be clean before any value can come out of it.
    placeholders = {name: Undefined for name in params}
    placeholders.setdefault("this", Undefined)
    scratch = env.extend(placeholders)
    for statement in _body(node):
        if is_blocked(evaluate_node(statement, scratch, dry_run=True)):
            logger.debug("function expression rejected during validation")
            return Blocked

    # Pass 2: build the callable over the unextended scope.
    try:
        source = unparse(node)
    except UnparseError:
        logger.debug("function expression could not be unparsed")
        return Blocked
    return SandboxedFunction(node, params, env.snapshot(), source)
