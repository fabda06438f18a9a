"""
Tests for variables, lexical scopes and value substitution.
"""

import pytest

from recordtree.exceptions import InvalidValueError, UnresolvedVariableError
from recordtree.schema.variables import EMPTY_SCOPE, Variable, substitute


def lookup_from(**values):
    return values.get


class TestVariableScope:
    """Tests for the immutable lexical scope chain."""

    def test_empty_scope_finds_nothing(self):
        assert EMPTY_SCOPE.find("x") is None
        assert list(EMPTY_SCOPE) == []

    def test_innermost_binding_wins(self):
        outer = EMPTY_SCOPE.bind(Variable("Ns", "System"))
        inner = outer.bind(Variable("ns", "System.Linq"))

        assert inner.find("NS").value == "System.Linq"
        assert outer.find("Ns").value == "System"

    def test_bind_does_not_modify_parent(self):
        outer = EMPTY_SCOPE.bind(Variable("A", "1"))
        outer.bind(Variable("B", "2"))

        assert outer.find("B") is None
        assert [variable.name for variable in outer] == ["A"]

    def test_iteration_is_innermost_first(self):
        scope = EMPTY_SCOPE.bind(Variable("A", "1")).bind(Variable("B", "2"))

        assert [variable.name for variable in scope] == ["B", "A"]


class TestSubstitute:
    """Tests for $(Name) substitution."""

    def test_text_without_references_is_unchanged(self):
        assert substitute("plain text", lookup_from()) == "plain text"

    def test_reference_is_replaced(self):
        assert substitute("$(Ns).Text", lookup_from(Ns="System")) == "System.Text"

    def test_several_references(self):
        result = substitute("$(A)-$(B)-$(A)", lookup_from(A="1", B="2"))

        assert result == "1-2-1"

    def test_doubled_marker_is_literal(self):
        assert substitute("cost: $$5", lookup_from()) == "cost: $5"

    def test_lone_marker_is_literal(self):
        assert substitute("a $ b $", lookup_from()) == "a $ b $"

    def test_substituted_values_are_not_rescanned(self):
        assert substitute("$(A)", lookup_from(A="$(B)")) == "$(B)"

    def test_unresolved_reference(self):
        with pytest.raises(UnresolvedVariableError) as exc_info:
            substitute("$(Missing)", lookup_from())

        assert "Missing" in str(exc_info.value)

    @pytest.mark.parametrize("text", ["$(Open", "$()", "$(  )"])
    def test_malformed_reference(self, text):
        with pytest.raises(InvalidValueError):
            substitute(text, lookup_from())
