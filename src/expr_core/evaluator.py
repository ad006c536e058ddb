"""Evaluator: sandboxed walk of an expression tree."""

from __future__ import annotations

import logging
from typing import Any, Callable

from .environment import Environment
from .functions import SandboxedFunction, evaluate_function
from .getter import apply_getter
from .grammar import child, node_type
from .operators import BINARY_OPERATORS, UNARY_OPERATORS, to_string, truthy
from .values import Blocked, Undefined, _Blocked, _Undefined, is_nullish

logger = logging.getLogger(__name__)

Handler = Callable[[Any, Environment, bool], Any]


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def evaluate_node(node: Any, env: Environment, dry_run: bool = False) -> Any:
    """Evaluate *node* against *env* and return its value, or ``Blocked``.

    Unsupported syntax and sandbox violations both come back as ``Blocked``;
    nothing here raises for them. Errors from nested variable resolution and
    from invoked callables propagate.

    With *dry_run* set, calls are checked but not made (they yield
    ``Undefined``); used to validate function bodies.
    """
    kind = node_type(node)
    handler = _HANDLERS.get(kind)
    if handler is None:
        logger.debug("unsupported node kind %s", kind)
        return Blocked
    return handler(node, env, dry_run)


# ---------------------------------------------------------------------------
# Literals and constructors
# ---------------------------------------------------------------------------

def _eval_literal(node: Any, env: Environment, dry_run: bool) -> Any:
    return child(node, "value")


def _eval_array(node: Any, env: Environment, dry_run: bool) -> Any:
    items: list[Any] = []
    for element in child(node, "elements", []):
        if element is None:
            items.append(Undefined)
            continue
        value = evaluate_node(element, env, dry_run)
        if isinstance(value, _Blocked):
            return Blocked
        items.append(value)
    return items


def _property_key(key: Any) -> str | None:
    kind = node_type(key)
    if kind == "Identifier":
        return child(key, "name")
    if kind == "Literal":
        return to_string(child(key, "value"))
    return None


def _eval_object(node: Any, env: Environment, dry_run: bool) -> Any:
    obj: dict[str, Any] = {}
    for prop in child(node, "properties", []):
        if (
            node_type(prop) != "Property"
            or child(prop, "computed", False)
            or child(prop, "kind", "init") != "init"
        ):
            return Blocked
        key = _property_key(child(prop, "key"))
        if key is None:
            return Blocked
        value_node = child(prop, "value")
        value = None if value_node is None else evaluate_node(value_node, env, dry_run)
        if isinstance(value, _Blocked):
            return Blocked
        obj[key] = value
    return obj


# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------

def _eval_unary(node: Any, env: Environment, dry_run: bool) -> Any:
    apply = UNARY_OPERATORS.get(child(node, "operator"))
    if apply is None:
        return Blocked
    value = evaluate_node(child(node, "argument"), env, dry_run)
    if isinstance(value, _Blocked):
        return Blocked
    return apply(value)


def _eval_logical(node: Any, env: Environment, dry_run: bool) -> Any:
    op = child(node, "operator")
    left = evaluate_node(child(node, "left"), env, dry_run)
    if isinstance(left, _Blocked):
        return Blocked
    take_right = truthy(left) if op == "&&" else not truthy(left)

    if dry_run and env.options.validate_all_branches:
        right = evaluate_node(child(node, "right"), env, dry_run)
        if isinstance(right, _Blocked):
            return Blocked
        return right if take_right else left

    if not take_right:
        return left
    return evaluate_node(child(node, "right"), env, dry_run)


def _eval_binary(node: Any, env: Environment, dry_run: bool) -> Any:
    op = child(node, "operator")
    if op in ("&&", "||"):
        return _eval_logical(node, env, dry_run)
    apply = BINARY_OPERATORS.get(op)
    if apply is None:
        return Blocked
    left = evaluate_node(child(node, "left"), env, dry_run)
    if isinstance(left, _Blocked):
        return Blocked
    right = evaluate_node(child(node, "right"), env, dry_run)
    if isinstance(right, _Blocked):
        return Blocked
    return apply(left, right)


def _eval_conditional(node: Any, env: Environment, dry_run: bool) -> Any:
    test = evaluate_node(child(node, "test"), env, dry_run)
    if isinstance(test, _Blocked):
        return Blocked

    if dry_run and env.options.validate_all_branches:
        consequent = evaluate_node(child(node, "consequent"), env, dry_run)
        alternate = evaluate_node(child(node, "alternate"), env, dry_run)
        if isinstance(consequent, _Blocked) or isinstance(alternate, _Blocked):
            return Blocked
        return consequent if truthy(test) else alternate

    branch = child(node, "consequent") if truthy(test) else child(node, "alternate")
    return evaluate_node(branch, env, dry_run)


# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------

def _eval_identifier(node: Any, env: Environment, dry_run: bool) -> Any:
    name = child(node, "name")
    if env.has_local(name):
        return env.get_local(name)
    if not env.has_binding(name):
        return Blocked
    value = env.get_binding(name)
    if isinstance(value, str):
        from .resolver import resolve_in
        return resolve_in(name, value, env.global_scope())
    return value


def _eval_this(node: Any, env: Environment, dry_run: bool) -> Any:
    if env.has_local("this"):
        return env.get_local("this")
    if env.has_binding("this"):
        return env.get_binding("this")
    return Blocked


# ---------------------------------------------------------------------------
# Member access
# ---------------------------------------------------------------------------

def _read_member(obj: Any, node: Any, env: Environment, dry_run: bool) -> Any:
    """Read the property named by member node *node* from the evaluated *obj*."""
    # Properties of functions are never reachable.
    if isinstance(obj, _Blocked) or callable(obj):
        return Blocked

    prop = child(node, "property")
    if child(node, "computed", False):
        key = evaluate_node(prop, env, dry_run)
        if isinstance(key, _Blocked) or key is None:
            return Blocked
        if to_string(key) in env.options.blocked_properties:
            return Blocked
    else:
        key = child(prop, "name")
        if key in env.options.blocked_properties:
            return Blocked

    if is_nullish(obj):
        # A parameter placeholder has unknown members while validating.
        if dry_run and isinstance(obj, _Undefined):
            return Undefined
        return Blocked
    return apply_getter(obj, key, env.options)


def _eval_member(node: Any, env: Environment, dry_run: bool) -> Any:
    obj = evaluate_node(child(node, "object"), env, dry_run)
    return _read_member(obj, node, env, dry_run)


# ---------------------------------------------------------------------------
# Calls
# ---------------------------------------------------------------------------

def _eval_callee(node: Any, env: Environment, dry_run: bool) -> tuple[Any, Any]:
    """Evaluate a callee once; return ``(callee, receiver)``."""
    if node_type(node) == "MemberExpression":
        obj = evaluate_node(child(node, "object"), env, dry_run)
        callee = _read_member(obj, node, env, dry_run)
        return callee, None if isinstance(obj, _Blocked) else obj
    return evaluate_node(node, env, dry_run), None


def _is_invocable(callee: Any, env: Environment, dry_run: bool) -> bool:
    if callable(callee):
        return True
    return (
        dry_run
        and not env.options.eager_validation
        and isinstance(callee, _Undefined)
    )


def _invoke(callee: Any, receiver: Any, args: list[Any]) -> Any:
    if isinstance(callee, SandboxedFunction):
        return callee.invoke(receiver, args)
    return callee(*args)


def _eval_arguments(nodes: list, env: Environment, dry_run: bool) -> list[Any] | None:
    args: list[Any] = []
    for arg in nodes:
        value = evaluate_node(arg, env, dry_run)
        if isinstance(value, _Blocked):
            return None
        args.append(value)
    return args


def _eval_call(node: Any, env: Environment, dry_run: bool) -> Any:
    callee, receiver = _eval_callee(child(node, "callee"), env, dry_run)
    if not _is_invocable(callee, env, dry_run):
        return Blocked
    args = _eval_arguments(child(node, "arguments", []), env, dry_run)
    if args is None:
        return Blocked
    if dry_run:
        return Undefined
    return _invoke(callee, receiver, args)


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------

def _eval_expression_statement(node: Any, env: Environment, dry_run: bool) -> Any:
    return evaluate_node(child(node, "expression"), env, dry_run)


def _eval_return(node: Any, env: Environment, dry_run: bool) -> Any:
    argument = child(node, "argument")
    if argument is None:
        return Undefined
    return evaluate_node(argument, env, dry_run)


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

def _eval_template_element(node: Any, env: Environment, dry_run: bool) -> Any:
    cooked = child(child(node, "value"), "cooked")
    return Undefined if cooked is None else cooked


def _eval_template(node: Any, env: Environment, dry_run: bool) -> Any:
    quasis = child(node, "quasis", [])
    expressions = child(node, "expressions", [])
    parts: list[str] = []
    for i, quasi in enumerate(quasis):
        parts.append(to_string(evaluate_node(quasi, env, dry_run)))
        if i < len(expressions):
            value = evaluate_node(expressions[i], env, dry_run)
            if isinstance(value, _Blocked):
                return Blocked
            parts.append(to_string(value))
    return "".join(parts)


def _eval_tagged_template(node: Any, env: Environment, dry_run: bool) -> Any:
    tag, receiver = _eval_callee(child(node, "tag"), env, dry_run)
    if not _is_invocable(tag, env, dry_run):
        return Blocked
    quasi = child(node, "quasi")
    strings = [evaluate_node(q, env, dry_run) for q in child(quasi, "quasis", [])]
    values = _eval_arguments(child(quasi, "expressions", []), env, dry_run)
    if values is None:
        return Blocked
    if dry_run:
        return Undefined
    return _invoke(tag, receiver, [strings, *values])


# ---------------------------------------------------------------------------
# Dispatch table
# ---------------------------------------------------------------------------

_HANDLERS: dict[str, Handler] = {
    "Literal": _eval_literal,
    "UnaryExpression": _eval_unary,
    "ArrayExpression": _eval_array,
    "ObjectExpression": _eval_object,
    "BinaryExpression": _eval_binary,
    "LogicalExpression": _eval_binary,
    "Identifier": _eval_identifier,
    "ThisExpression": _eval_this,
    "CallExpression": _eval_call,
    "MemberExpression": _eval_member,
    "ConditionalExpression": _eval_conditional,
    "ExpressionStatement": _eval_expression_statement,
    "ReturnStatement": _eval_return,
    "FunctionExpression": evaluate_function,
    "TemplateLiteral": _eval_template,
    "TaggedTemplateExpression": _eval_tagged_template,
    "TemplateElement": _eval_template_element,
}
