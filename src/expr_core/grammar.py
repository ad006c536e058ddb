"""Grammar adapter: expression text → ESTree node, via esprima."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import esprima


class GrammarError(Exception):
    """Raised when text is not exactly one expression."""


# ---------------------------------------------------------------------------
# Node access
# ---------------------------------------------------------------------------

def child(node: Any, key: str, default: Any = None) -> Any:
    """Read field *key* of a node (attribute-style or mapping-style)."""
    if node is None:
        return default
    if isinstance(node, Mapping):
        value = node.get(key)
    else:
        value = getattr(node, key, None)
    return default if value is None else value


def node_type(node: Any) -> str | None:
    return child(node, "type")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def parse_program(text: str) -> Any:
    try:
        return esprima.parseScript(text)
    except Exception as exc:
        raise GrammarError(str(exc)) from exc


def parse_expression(text: str) -> Any:
    """Parse *text* and return the node of its single expression statement."""
    program = parse_program(text)
    body = child(program, "body") or []
    if len(body) != 1:
        raise GrammarError(f"expected one statement, got {len(body)}")
    statement = body[0]
    if node_type(statement) != "ExpressionStatement":
        raise GrammarError(f"expected an expression, got {node_type(statement)}")
    return child(statement, "expression")
