"""Tests for function expressions (expr_core.functions)."""

import pytest

from expr_core import (
    CircularReferenceError,
    EvalOptions,
    SandboxedFunction,
    Undefined,
    UndefinedVariableError,
    evaluate,
)

LENIENT = EvalOptions(eager_validation=False)
ALL_BRANCHES = EvalOptions(validate_all_branches=True)


# ---------------------------------------------------------------------------
# Construction and invocation
# ---------------------------------------------------------------------------

class TestInvocation:
    def test_immediate_call(self):
        assert evaluate("(function(a, b) { return a + b })(2, 3)") == 5

    def test_returned_to_host(self):
        fn = evaluate("(function(x) { return x * k })", {"k": 3})
        assert isinstance(fn, SandboxedFunction)
        assert fn(2) == 6

    def test_source_is_unparsed_text(self):
        fn = evaluate("(function(x) { return x * k })", {"k": 3})
        assert fn.source.startswith("(function (x)")
        assert "return (x * k);" in fn.source

    def test_missing_argument_is_undefined(self):
        fn = evaluate("(function(a, b) { return b })")
        assert fn(1) is Undefined

    def test_no_return(self):
        fn = evaluate("(function(a) { a + 1 })")
        assert fn(1) is Undefined

    def test_first_return_wins(self):
        assert evaluate("(function() { return 1; return 2 })()") == 1

    def test_string_argument_is_not_expression_text(self):
        assert evaluate("(function(s) { return s })('1+1')") == "1+1"

    def test_passed_to_host(self):
        assert evaluate("apply(function(x) { return x + 1 }, 4)", {
            "apply": lambda fn, value: fn(value),
        }) == 5

    def test_method_receives_this(self):
        text = "({n: 2, double: function() { return this.n * 2 }}).double()"
        assert evaluate(text) == 4

    def test_closure_scope_is_a_snapshot(self):
        bindings = {"k": 1}
        fn = evaluate("(function() { return k })", bindings)
        bindings["k"] = 2
        assert fn() == 1

    def test_blocked_at_invocation_raises(self):
        fn = evaluate("(function(p) { return p.x.y })")
        assert fn({"x": {"y": 1}}) == 1
        with pytest.raises(UndefinedVariableError):
            fn({"x": None})


# ---------------------------------------------------------------------------
# Validation pass
# ---------------------------------------------------------------------------

class TestValidation:
    def test_unbound_identifier_rejected_without_call(self):
        with pytest.raises(UndefinedVariableError):
            evaluate("(function() { return zzz })")

    def test_statement_outside_grammar_rejected(self):
        with pytest.raises(UndefinedVariableError):
            evaluate("(function() { var x = 1; return x })()")

    @pytest.mark.parametrize(
        "text",
        [
            "(function({a}) { return a })",
            "(function(a = 1) { return a })",
            "(function*() { return 1 })",
        ],
    )
    def test_refused_signatures(self, text):
        with pytest.raises(UndefinedVariableError):
            evaluate(text)

    def test_blocked_property_in_body(self):
        with pytest.raises(UndefinedVariableError):
            evaluate("(function(o) { return o.__proto__ })")

    def test_parameters_do_not_leak(self):
        with pytest.raises(UndefinedVariableError):
            evaluate("(function(a) { return a })(1) + a")

    def test_validation_does_not_invoke_calls(self):
        calls = []

        def f():
            calls.append(1)
            return 7

        fn = evaluate("(function() { return f() })", {"f": f})
        assert calls == []
        assert fn() == 7
        assert calls == [1]

    def test_parameter_members_allowed(self):
        fn = evaluate("(function(p) { return p.x + p['y'] })")
        assert fn({"x": 1, "y": 2}) == 3

    def test_variable_text_resolved_without_locals(self):
        # b's own text cannot see the function's parameter a
        with pytest.raises(UndefinedVariableError):
            evaluate("(function(a) { return b })", {"b": "a + 1"})

    def test_cycle_through_function_body(self):
        bindings = {"f": "(function() { return g })", "g": "f()"}
        with pytest.raises(CircularReferenceError):
            evaluate("g", bindings)


# ---------------------------------------------------------------------------
# eager_validation option
# ---------------------------------------------------------------------------

class TestEagerValidation:
    def test_calling_parameter_rejected_by_default(self):
        with pytest.raises(UndefinedVariableError):
            evaluate("(function(f) { return f(1) })")

    def test_calling_parameter_allowed_when_lenient(self):
        result = evaluate(
            "(function(f) { return f(1) })(g)",
            {"g": lambda x: x + 10},
            options=LENIENT,
        )
        assert result == 11

    def test_lenient_still_checks_at_invocation(self):
        with pytest.raises(UndefinedVariableError):
            evaluate("(function(f) { return f(1) })(5)", options=LENIENT)

    def test_branches_follow_truthiness_by_default(self):
        assert evaluate("(function(a) { return a ? zzz : 1 })(0)") == 1
        assert evaluate("(function(a) { return a && zzz })(0)") == 0
        with pytest.raises(UndefinedVariableError):
            evaluate("(function(a) { return a ? zzz : 1 })(1)")

    def test_untaken_branch_not_resolved(self):
        assert evaluate("(function() { return a ? 1 : bad })()", {"a": 1, "bad": "1 +"}) == 1
        assert evaluate("(function() { return a ? 1 : missing })()", {"a": 1}) == 1
        assert evaluate("(function() { return a || missing })()", {"a": 2}) == 2

    def test_branches_follow_truthiness_when_lenient(self):
        assert evaluate("(function(a) { return a ? zzz : 1 })(0)", options=LENIENT) == 1
        with pytest.raises(UndefinedVariableError):
            evaluate("(function(a) { return a ? zzz : 1 })(1)", options=LENIENT)


class TestValidateAllBranches:
    def test_both_branches_checked(self):
        with pytest.raises(UndefinedVariableError):
            evaluate("(function(a) { return a ? zzz : 1 })(0)", options=ALL_BRANCHES)
        with pytest.raises(UndefinedVariableError):
            evaluate("(function(a) { return a && zzz })(0)", options=ALL_BRANCHES)

    def test_valid_branches_pass(self):
        text = "(function(a) { return a ? a + 1 : 0 })(2)"
        assert evaluate(text, options=ALL_BRANCHES) == 3

    def test_outside_functions_one_branch(self):
        assert evaluate("a ? 1 : zzz", {"a": 1}, options=ALL_BRANCHES) == 1
