"""Unparse: ESTree node → expression text.

Compound expressions are fully parenthesised, so the output re-parses to an
equivalent tree without any precedence bookkeeping.
"""

from __future__ import annotations

import json
from typing import Any, Callable

from .grammar import child, node_type
from .operators import to_string


class UnparseError(Exception):
    """Raised for node kinds the expression language does not support."""


def unparse(node: Any) -> str:
    kind = node_type(node)
    handler = _HANDLERS.get(kind)
    if handler is None:
        raise UnparseError(f"cannot unparse {kind}")
    return handler(node)


def _literal(node: Any) -> str:
    raw = child(node, "raw")
    if raw is not None:
        return raw
    value = child(node, "value")
    if isinstance(value, str):
        return json.dumps(value)
    return to_string(value)


def _unary(node: Any) -> str:
    op = child(node, "operator")
    sep = " " if op.isalpha() else ""
    return f"({op}{sep}{unparse(child(node, 'argument'))})"


def _array(node: Any) -> str:
    items = ["" if el is None else unparse(el) for el in child(node, "elements", [])]
    return "[" + ", ".join(items) + "]"


def _property(node: Any) -> str:
    key = child(node, "key")
    if child(node, "computed", False):
        key_text = "[" + unparse(key) + "]"
    elif node_type(key) == "Identifier":
        key_text = child(key, "name")
    else:
        key_text = _literal(key)
    value = child(node, "value")
    if value is None:
        return f"{key_text}: null"
    return f"{key_text}: {unparse(value)}"


def _object(node: Any) -> str:
    props = [_property(p) for p in child(node, "properties", [])]
    return "({" + ", ".join(props) + "})"


def _binary(node: Any) -> str:
    left = unparse(child(node, "left"))
    right = unparse(child(node, "right"))
    return f"({left} {child(node, 'operator')} {right})"


def _call(node: Any) -> str:
    args = ", ".join(unparse(a) for a in child(node, "arguments", []))
    return f"{unparse(child(node, 'callee'))}({args})"


def _member(node: Any) -> str:
    obj = unparse(child(node, "object"))
    if node_type(child(node, "object")) == "Literal":
        obj = f"({obj})"
    prop = child(node, "property")
    if child(node, "computed", False):
        return f"{obj}[{unparse(prop)}]"
    return f"{obj}.{child(prop, 'name')}"


def _conditional(node: Any) -> str:
    test = unparse(child(node, "test"))
    consequent = unparse(child(node, "consequent"))
    alternate = unparse(child(node, "alternate"))
    return f"({test} ? {consequent} : {alternate})"


def _return(node: Any) -> str:
    argument = child(node, "argument")
    if argument is None:
        return "return;"
    return f"return {unparse(argument)};"


def _block(node: Any) -> str:
    body = " ".join(unparse(s) for s in child(node, "body", []))
    return "{ " + body + " }" if body else "{}"


def _function(node: Any) -> str:
    params = ", ".join(unparse(p) for p in child(node, "params", []))
    name = child(child(node, "id"), "name")
    head = f"function {name}" if name else "function "
    return f"({head}({params}) {_block(child(node, 'body'))})"


def _template_element(node: Any) -> str:
    return child(child(node, "value"), "raw", "")


def _template(node: Any) -> str:
    quasis = child(node, "quasis", [])
    expressions = child(node, "expressions", [])
    parts = []
    for i, quasi in enumerate(quasis):
        parts.append(_template_element(quasi))
        if i < len(expressions):
            parts.append("${" + unparse(expressions[i]) + "}")
    return "`" + "".join(parts) + "`"


def _tagged_template(node: Any) -> str:
    return unparse(child(node, "tag")) + _template(child(node, "quasi"))


_HANDLERS: dict[str, Callable[[Any], str]] = {
    "Literal": _literal,
    "UnaryExpression": _unary,
    "ArrayExpression": _array,
    "ObjectExpression": _object,
    "BinaryExpression": _binary,
    "LogicalExpression": _binary,
    "Identifier": lambda node: child(node, "name"),
    "ThisExpression": lambda node: "this",
    "CallExpression": _call,
    "MemberExpression": _member,
    "ConditionalExpression": _conditional,
    "ExpressionStatement": lambda node: unparse(child(node, "expression")) + ";",
    "ReturnStatement": _return,
    "BlockStatement": _block,
    "FunctionExpression": _function,
    "TemplateLiteral": _template,
    "TaggedTemplateExpression": _tagged_template,
}
