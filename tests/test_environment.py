"""Tests for expr_core.environment."""

from expr_core.environment import Environment, ResolutionChain


class TestResolutionChain:
    def test_push_and_contains(self):
        chain = ResolutionChain()
        chain.push("a")
        assert "a" in chain
        assert "b" not in chain
        assert len(chain) == 1

    def test_pop(self):
        chain = ResolutionChain(["a", "b"])
        chain.pop("b")
        assert chain.names == ["a"]

    def test_pop_missing_is_noop(self):
        chain = ResolutionChain(["a"])
        chain.pop("z")
        assert chain.names == ["a"]

    def test_cycle(self):
        chain = ResolutionChain(["top", "a", "b"])
        assert chain.cycle("a") == ["a", "b", "a"]


class TestEnvironment:
    def test_extend_leaves_parent_untouched(self):
        env = Environment(bindings={"a": 1})
        child = env.extend({"x": 2})
        assert child.has_local("x")
        assert not env.has_local("x")
        assert child.bindings is env.bindings
        assert child.chain is env.chain

    def test_extend_shadows_locals(self):
        env = Environment(locals_={"x": 1}).extend({"x": 2})
        assert env.get_local("x") == 2

    def test_global_scope_drops_locals(self):
        env = Environment(bindings={"a": 1}).extend({"x": 2})
        scope = env.global_scope()
        assert not scope.has_local("x")
        assert scope.has_binding("a")
        assert scope.chain is env.chain

    def test_snapshot_is_independent(self):
        bindings = {"a": 1}
        snap = Environment(bindings=bindings).snapshot()
        bindings["a"] = 2
        assert snap.get_binding("a") == 1

    def test_separate_chains_by_default(self):
        assert Environment().chain is not Environment().chain
