"""
Operations applied to records.

Every With, Without, Prefix and Postfix attribute in a records subtree turns
into an Operation carrying the target property, the resolved value and the
depth of the element that declared it. The depth is the key used to retract
scoped operations when their declaring element has been fully processed.
"""

from enum import Enum

from attrs import frozen

from recordtree.records.record import Record
from recordtree.schema.properties import PropertyDefinition


class OperationKind(Enum):
    """Kind of a record operation."""

    WITH = "with"
    WITHOUT = "without"
    PREFIX = "prefix"
    POSTFIX = "postfix"

    @property
    def is_affix(self) -> bool:
        return self in (OperationKind.PREFIX, OperationKind.POSTFIX)


@frozen
class Operation:
    """One operation on one property, declared at a given depth."""

    kind: OperationKind
    property: PropertyDefinition
    value: str
    depth: int

    def __str__(self) -> str:
        return f"{self.kind.value} {self.property.name}={self.value!r}@{self.depth}"

    @property
    def property_name(self) -> str:
        return self.property.name

    def execute(self, record: Record) -> None:
        """Apply this operation to a record immediately."""
        match self.kind:
            case OperationKind.WITH:
                assign_value(record, self.property, self.value)
            case OperationKind.WITHOUT:
                remove_value(record, self.property, self.value)
            case OperationKind.PREFIX | OperationKind.POSTFIX:
                apply_affix(record, self.property, self.kind, self.value)


def assign_value(record: Record, prop: PropertyDefinition, value: str) -> None:
    """
    Assign a value to a property.

    Scalars are overwritten. For collections the value is split on the
    property's separators and every non-empty item is appended; for Tags the
    items are added to the tag set.
    """
    if not prop.is_collection:
        record.set_scalar(prop.name, value)
        return

    items = prop.split(value)
    if prop.is_tags:
        record.tags.update(items)
    else:
        record.get_or_add_collection(prop.name).extend(items)


def remove_value(record: Record, prop: PropertyDefinition, value: str) -> None:
    """
    Remove items from a collection property.

    The value is split on the property's separators; for each item the first
    matching entry is removed. Items that are not present, or a collection
    that was never set, are left alone.
    """
    items = prop.split(value)
    if prop.is_tags:
        record.tags.difference_update(items)
        return

    collection = record.get_collection(prop.name)
    if collection is None:
        return
    for item in items:
        if item in collection:
            collection.remove(item)


def apply_affix(
    record: Record, prop: PropertyDefinition, kind: OperationKind, text: str
) -> None:
    """
    Prepend or append text to a property's current value.

    A scalar without a value is treated as empty, so affixing creates it.
    For collections every item is affixed independently; a collection that
    was never set is left alone.

    Params:
        record: Record to modify
        prop: Target property
        kind: PREFIX or POSTFIX
        text: Text to prepend or append
    """
    if kind is OperationKind.PREFIX:

        def affix(current: str) -> str:
            return text + current

    else:

        def affix(current: str) -> str:
            return current + text

    if prop.is_tags:
        if record.tags:
            record.tags = {affix(tag) for tag in record.tags}
    elif prop.is_collection:
        collection = record.get_collection(prop.name)
        if collection is not None:
            collection[:] = [affix(item) for item in collection]
    else:
        record.set_scalar(prop.name, affix(record.get_scalar(prop.name) or ""))
