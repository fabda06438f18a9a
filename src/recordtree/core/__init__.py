"""
Core record document components.

This package provides the generic document tree, schema names and shared
type definitions used by every reader.
"""

from recordtree.core.names import (
    AttributeNames,
    ElementKind,
    ElementNames,
    fold_name,
    name_equals,
)
from recordtree.core.tree import DocumentElement
from recordtree.core.types import PropertyValue, VariableLookup, VersionTuple

__all__ = [
    "DocumentElement",
    "ElementKind",
    "ElementNames",
    "AttributeNames",
    "fold_name",
    "name_equals",
    "PropertyValue",
    "VariableLookup",
    "VersionTuple",
]
