"""Evaluation options."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class EvalOptions:
    """Sandbox policy knobs shared by one evaluation.

    eager_validation
        When validating a function body (dry run), require every callee to be
        callable. When false, a callee that is still an unbound parameter
        placeholder is accepted and only checked on invocation.
    validate_all_branches
        When validating a function body, evaluate both sides of ``&&``/``||``
        and both branches of ``?:`` instead of following truthiness. Names on
        the untaken side are then resolved too.
    blocked_properties
        Property names that are never read, whatever the object.
    blocked_attributes
        Python attribute names that are never read from host objects.
        ``str.format`` performs its own attribute lookups; generator,
        coroutine, frame and traceback attributes lead to interpreter globals.
    allow_private_attributes
        Allow reading ``_``-prefixed attributes from host objects.
    """

    eager_validation: bool = True
    validate_all_branches: bool = False
    blocked_properties: frozenset[str] = field(
        default_factory=lambda: frozenset({"constructor", "__proto__"})
    )
    blocked_attributes: frozenset[str] = field(
        default_factory=lambda: frozenset({
            "format", "format_map",
            "gi_frame", "gi_code", "cr_frame", "cr_code", "ag_frame", "ag_code",
            "f_back", "f_builtins", "f_globals", "f_locals", "tb_frame",
        })
    )
    allow_private_attributes: bool = False


DEFAULT_OPTIONS = EvalOptions()
