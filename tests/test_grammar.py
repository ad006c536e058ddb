"""Tests for the esprima grammar adapter."""

import pytest

from expr_core.grammar import GrammarError, child, node_type, parse_expression


class TestParseExpression:
    def test_binary(self):
        node = parse_expression("1 + a")
        assert node_type(node) == "BinaryExpression"
        assert child(node, "operator") == "+"
        assert child(child(node, "right"), "name") == "a"

    def test_function_expression(self):
        node = parse_expression("(function(a) { return a })")
        assert node_type(node) == "FunctionExpression"
        assert [child(p, "name") for p in child(node, "params")] == ["a"]

    def test_template(self):
        node = parse_expression("`x${a}y`")
        assert node_type(node) == "TemplateLiteral"
        assert len(child(node, "quasis")) == 2

    @pytest.mark.parametrize("text", ["", "   ", "1 +", "1; 2", "var a = 1", "if (a) b"])
    def test_rejected(self, text):
        with pytest.raises(GrammarError):
            parse_expression(text)


class TestChild:
    def test_mapping_node(self):
        node = {"type": "Identifier", "name": "a"}
        assert node_type(node) == "Identifier"
        assert child(node, "name") == "a"
        assert child(node, "missing", 5) == 5

    def test_none_node(self):
        assert child(None, "type") is None
        assert child(None, "body", []) == []

    def test_false_field_kept(self):
        assert child({"computed": False}, "computed", True) is False
