"""Resolver: the public entry points and the error boundary."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from .config import DEFAULT_OPTIONS, EvalOptions
from .environment import Environment, ResolutionChain
from .errors import CircularReferenceError, ExprSyntaxError, UndefinedVariableError
from .evaluator import evaluate_node
from .grammar import GrammarError, parse_expression
from .values import _Blocked, _Undefined

logger = logging.getLogger(__name__)

# Whole-text quoted literals bypass the parser, which rejects some of them.
_SINGLE_QUOTED_RE = re.compile(r"'.*'")
_DOUBLE_QUOTED_RE = re.compile(r'".*"')


def is_quoted_literal(text: str) -> bool:
    return bool(
        _SINGLE_QUOTED_RE.fullmatch(text) or _DOUBLE_QUOTED_RE.fullmatch(text)
    )


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def resolve(
    name: str | None,
    text: str,
    bindings: Mapping[str, Any] | None = None,
    chain: ResolutionChain | None = None,
    options: EvalOptions | None = None,
) -> Any:
    """Resolve variable *name* whose definition is expression *text*.

    *bindings* maps variable names to concrete values or to further
    expression text. *chain* is the set of variables already being resolved;
    pass the same instance to nested calls, or leave it out for a new
    top-level resolution. A *name* of None resolves an anonymous expression.

    Raises CircularReferenceError, ExprSyntaxError or UndefinedVariableError.
    """
    env = Environment(
        bindings=bindings if bindings is not None else {},
        chain=chain if chain is not None else ResolutionChain(),
        options=options or DEFAULT_OPTIONS,
    )
    return resolve_in(name, text, env)


def evaluate(
    text: str,
    bindings: Mapping[str, Any] | None = None,
    options: EvalOptions | None = None,
) -> Any:
    """Evaluate expression *text* against *bindings*."""
    return resolve(None, text, bindings, options=options)


def resolve_all(
    bindings: Mapping[str, Any],
    options: EvalOptions | None = None,
) -> dict[str, Any]:
    """Resolve every entry of *bindings*; text values are evaluated."""
    resolved: dict[str, Any] = {}
    for name, value in bindings.items():
        if isinstance(value, str):
            resolved[name] = resolve(name, value, bindings, options=options)
        else:
            resolved[name] = value
    return resolved


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

def resolve_in(name: str | None, text: str, env: Environment) -> Any:
    """Resolve *text* within an existing environment (shares its chain)."""
    chain = env.chain
    if name is not None:
        if name in chain:
            raise CircularReferenceError(name, chain.cycle(name))
        chain.push(name)
    try:
        result = _evaluate_text(name, text, env)
    finally:
        if name is not None:
            chain.pop(name)

    if isinstance(result, (_Blocked, _Undefined)):
        logger.debug("expression for %r produced no value", name)
        raise UndefinedVariableError(name)
    return result


def _evaluate_text(name: str | None, text: str, env: Environment) -> Any:
    logger.debug("resolving %r (depth %d)", name, len(env.chain))
    if is_quoted_literal(text):
        return text[1:-1]
    try:
        node = parse_expression(text)
    except GrammarError:
        logger.debug("syntax error in expression for %r", name)
        raise ExprSyntaxError(name) from None
    return evaluate_node(node, env)
