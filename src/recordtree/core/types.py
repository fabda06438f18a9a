"""
Core type definitions for record documents.

This module contains type aliases shared across the schema, reader and
record modules.
"""

from collections.abc import Callable

# Value of a record property: scalar string or ordered collection of strings
PropertyValue = str | list[str]

# Looks up a variable value by name, returning None when it is not bound
VariableLookup = Callable[[str], str | None]

# Semantic version triple (major, minor, patch)
VersionTuple = tuple[int, int, int]
