"""
Materialized records.

A Record is a mutable bag of resolved property values plus a tag set. Values
are stored under each property's declared name; accessors resolve names
case-insensitively through the owning entity.
"""

import copy
from dataclasses import dataclass, field
from typing import Any

from recordtree.core.names import fold_name
from recordtree.core.types import PropertyValue
from recordtree.schema.entities import EntityDefinition
from recordtree.schema.properties import ID_NAME, TAGS_NAME


@dataclass
class Record:
    """
    One concrete instance of an entity.

    Params:
        entity: Entity the record belongs to
        id: Optional identifier (unique among template records only)
        scalar_values: Property name to scalar value
        collection_values: Property name to ordered items
        tags: Tag set
    """

    entity: EntityDefinition
    id: str | None = None
    scalar_values: dict[str, str] = field(default_factory=dict)
    collection_values: dict[str, list[str]] = field(default_factory=dict)
    tags: set[str] = field(default_factory=set)

    def __repr__(self) -> str:
        return (
            f"Record(entity={self.entity.name!r}, id={self.id!r}, "
            f"values={self.values()!r}, tags={sorted(self.tags)!r})"
        )

    @property
    def entity_name(self) -> str:
        return self.entity.name

    def _canonical_name(self, name: str) -> str:
        prop = self.entity.find_property(name)
        if prop is not None:
            return prop.name
        key = fold_name(name)
        for stored in (*self.scalar_values, *self.collection_values):
            if fold_name(stored) == key:
                return stored
        return name

    def contains_property(self, name: str) -> bool:
        """Check whether a scalar or collection value (possibly empty) has been set."""
        name = self._canonical_name(name)
        return name in self.scalar_values or name in self.collection_values

    def __contains__(self, name: str) -> bool:
        return self.contains_property(name)

    def __getitem__(self, name: str) -> PropertyValue:
        name = self._canonical_name(name)
        if name in self.scalar_values:
            return self.scalar_values[name]
        if name in self.collection_values:
            return self.collection_values[name]
        raise KeyError(name)

    def get(self, name: str, default: Any = None) -> Any:
        try:
            return self[name]
        except KeyError:
            return default

    def get_scalar(self, name: str) -> str | None:
        return self.scalar_values.get(self._canonical_name(name))

    def set_scalar(self, name: str, value: str) -> None:
        self.scalar_values[self._canonical_name(name)] = value

    def get_collection(self, name: str) -> list[str] | None:
        """Get the live item list of a collection property, or None when unset."""
        return self.collection_values.get(self._canonical_name(name))

    def get_or_add_collection(self, name: str) -> list[str]:
        """Get the live item list of a collection property, creating it when unset."""
        return self.collection_values.setdefault(self._canonical_name(name), [])

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def values(self) -> dict[str, PropertyValue]:
        """Property values in entity declaration order, base properties first."""
        result: dict[str, PropertyValue] = {}
        for prop in self.entity.all_properties():
            if prop.name in self.scalar_values:
                result[prop.name] = self.scalar_values[prop.name]
            elif prop.name in self.collection_values:
                result[prop.name] = list(self.collection_values[prop.name])
        return result

    def with_entity(self, entity: EntityDefinition) -> "Record":
        """
        Clone this record and bind the clone to another entity.

        The clone never aliases the receiver's mutable state.

        Params:
            entity: Entity the clone belongs to

        Returns:
            Deep copy of this record owned by entity
        """
        return Record(
            entity=entity,
            id=self.id,
            scalar_values=dict(self.scalar_values),
            collection_values=copy.deepcopy(self.collection_values),
            tags=set(self.tags),
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping for rendering collaborators: Id, Entity, Tags, then values."""
        result: dict[str, Any] = {
            ID_NAME: self.id,
            "Entity": self.entity.name,
            TAGS_NAME: sorted(self.tags),
        }
        result.update(self.values())
        return result

