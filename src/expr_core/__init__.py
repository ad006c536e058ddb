"""Expr Core — sandboxed evaluation engine for expression ASTs."""

import logging

from .config import EvalOptions
from .environment import Environment, ResolutionChain
from .errors import (
    CircularReferenceError,
    ExprCoreError,
    ExprSyntaxError,
    UndefinedVariableError,
)
from .evaluator import evaluate_node
from .functions import SandboxedFunction
from .resolver import evaluate, resolve, resolve_all
from .values import Blocked, Undefined
from .workspace import Workspace

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "evaluate",
    "resolve",
    "resolve_all",
    "evaluate_node",
    "Environment",
    "ResolutionChain",
    "EvalOptions",
    "Blocked",
    "Undefined",
    "SandboxedFunction",
    "Workspace",
    "ExprCoreError",
    "ExprSyntaxError",
    "CircularReferenceError",
    "UndefinedVariableError",
]
