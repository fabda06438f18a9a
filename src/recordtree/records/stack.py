"""
Scoped operation stack.

With, Without, Prefix and Postfix container elements declare operations that
apply to every record nested beneath them. The stack keeps, per property,
the ordered list of currently active operations (outermost scope first).

Leaving a scope is a filtered removal by depth rather than a literal pop,
because one container can contribute operations for several properties at
once and all of them must be retracted together.
"""

from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from recordtree.core.names import fold_name
from recordtree.records.operations import Operation
from recordtree.schema.properties import PropertyDefinition


class ScopedOperationStack:
    """
    Per-property lists of active scoped operations keyed by declaration depth.

    Depth 0 is the records root. Entering any container element increases
    the depth by one; leaving it retracts every operation declared at that
    depth and decreases the depth by one.
    """

    def __init__(self):
        self.depth = 0
        self._operations: dict[str, list[Operation]] = {}
        self._properties: dict[str, PropertyDefinition] = {}

    def __len__(self) -> int:
        return sum(len(operations) for operations in self._operations.values())

    @property
    def next_depth(self) -> int:
        """Depth that the next entered scope will have."""
        return self.depth + 1

    def push_scope(self, operations: Iterable[Operation] = ()) -> None:
        """
        Enter a new scope and activate its operations.

        Params:
            operations: Operations declared by the scope element; each must carry next_depth

        Raises:
            ValueError: If an operation was created for a different depth
        """
        operations = list(operations)
        depth = self.next_depth
        for operation in operations:
            if operation.depth != depth:
                raise ValueError(f"Operation {operation} does not belong to depth {depth}")

        self.depth = depth
        for operation in operations:
            key = fold_name(operation.property_name)
            if key not in self._operations:
                self._operations[key] = []
                self._properties[key] = operation.property
            self._operations[key].append(operation)

    def pop_scope(self) -> None:
        """
        Leave the current scope, retracting every operation declared at its depth.

        Raises:
            RuntimeError: If no scope is active
        """
        if self.depth <= 0:
            raise RuntimeError("Cannot leave the records root scope")

        for operations in self._operations.values():
            for index in range(len(operations) - 1, -1, -1):
                if operations[index].depth == self.depth:
                    del operations[index]

        self.depth -= 1

    @contextmanager
    def scope(self, operations: Iterable[Operation] = ()) -> Iterator[None]:
        """Context manager pairing push_scope with pop_scope."""
        self.push_scope(operations)
        try:
            yield
        finally:
            self.pop_scope()

    def operations_for(self, prop: PropertyDefinition | str) -> tuple[Operation, ...]:
        """Active operations for a property, outermost scope first."""
        name = prop if isinstance(prop, str) else prop.name
        return tuple(self._operations.get(fold_name(name), ()))

    def active_properties(self) -> Iterator[tuple[PropertyDefinition, tuple[Operation, ...]]]:
        """Iterate over properties with at least one active operation, in first-use order."""
        for key, operations in self._operations.items():
            if operations:
                yield self._properties[key], tuple(operations)
