"""
Entity schema components.

This package provides property, variable and entity definitions and the
parsing of Declarations elements into them.
"""

from recordtree.schema.entities import (
    GLOBAL_ENTITY,
    EntityDefinition,
    parse_declarations,
    parse_property,
)
from recordtree.schema.properties import (
    ID_PROPERTY,
    TAGS_PROPERTY,
    PropertyDefinition,
    is_reserved_name,
)
from recordtree.schema.variables import (
    EMPTY_SCOPE,
    Variable,
    VariableScope,
    substitute,
)

__all__ = [
    "EntityDefinition",
    "GLOBAL_ENTITY",
    "parse_declarations",
    "parse_property",
    "PropertyDefinition",
    "ID_PROPERTY",
    "TAGS_PROPERTY",
    "is_reserved_name",
    "Variable",
    "VariableScope",
    "EMPTY_SCOPE",
    "substitute",
]
