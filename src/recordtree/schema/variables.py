"""
Variables and value substitution for record documents.

Variables are named string bindings. Entity variables are declared once per
entity and inherited through the base-entity chain; lexical variables are
bound by Variable container elements inside a records subtree and apply to
everything nested beneath them.

Attribute values reference variables as $(Name). A doubled $$ produces a
literal dollar sign.
"""

from collections.abc import Iterator

from attrs import frozen

from recordtree.core.names import name_equals
from recordtree.core.types import VariableLookup
from recordtree.exceptions import InvalidValueError, UnresolvedVariableError

VARIABLE_MARKER = "$"


@frozen
class Variable:
    """Named string binding; immutable once created."""

    name: str
    value: str


class VariableScope:
    """
    Lexical chain of variable bindings, innermost first.

    Scopes are immutable: bind() returns a new child scope and leaves the
    receiver untouched, so unbinding is simply returning to the parent.
    """

    __slots__ = ("variable", "parent")

    def __init__(
        self,
        variable: Variable | None = None,
        parent: "VariableScope | None" = None,
    ):
        self.variable = variable
        self.parent = parent

    def bind(self, variable: Variable) -> "VariableScope":
        """Return a child scope with the given binding innermost."""
        return VariableScope(variable, self)

    def __iter__(self) -> Iterator[Variable]:
        scope: VariableScope | None = self
        while scope is not None:
            if scope.variable is not None:
                yield scope.variable
            scope = scope.parent

    def find(self, name: str) -> Variable | None:
        """Find the innermost binding with the given name."""
        for variable in self:
            if name_equals(variable.name, name):
                return variable
        return None


EMPTY_SCOPE = VariableScope()


def substitute(text: str, lookup: VariableLookup) -> str:
    """
    Replace variable references in an attribute value.

    Params:
        text: Raw attribute text
        lookup: Resolves a variable name to its value, or None when unbound

    Returns:
        Text with every $(Name) reference replaced and $$ collapsed to $

    Raises:
        InvalidValueError: If a reference is unterminated or has an empty name
        UnresolvedVariableError: If a referenced variable is not bound
    """
    if VARIABLE_MARKER not in text:
        return text

    parts: list[str] = []
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char != VARIABLE_MARKER or index + 1 >= length:
            parts.append(char)
            index += 1
            continue

        following = text[index + 1]
        if following == VARIABLE_MARKER:
            parts.append(VARIABLE_MARKER)
            index += 2
        elif following == "(":
            end = text.find(")", index + 2)
            if end == -1:
                raise InvalidValueError(
                    f"Unterminated variable reference in value '{text}'."
                )
            name = text[index + 2 : end].strip()
            if not name:
                raise InvalidValueError(
                    f"Empty variable reference in value '{text}'."
                )
            value = lookup(name)
            if value is None:
                raise UnresolvedVariableError(f"Variable '{name}' is not defined.")
            parts.append(value)
            index = end + 1
        else:
            parts.append(char)
            index += 1

    return "".join(parts)
