"""
Element and attribute names of the record document schema.

Names are matched case-insensitively; the constants below are the canonical
spelling used when documents are written and when errors are reported.
"""

from enum import Enum


class ElementNames:
    """Canonical element names."""

    DOCUMENT = "Document"
    ENTITIES = "Entities"
    ENTITY = "Entity"
    DECLARATIONS = "Declarations"
    PROPERTY = "Property"
    VARIABLE = "Variable"
    WITH = "With"
    RECORDS = "Records"
    NEW = "New"
    WITHOUT = "Without"
    PREFIX = "Prefix"
    POSTFIX = "Postfix"


class AttributeNames:
    """Canonical attribute names."""

    NAME = "Name"
    VALUE = "Value"
    ID = "Id"
    IS_COLLECTION = "IsCollection"
    IS_REQUIRED = "IsRequired"
    DEFAULT_VALUE = "DefaultValue"
    DESCRIPTION = "Description"
    SEPARATORS = "Separators"
    VERSION = "Version"


class ElementKind(Enum):
    """Kind of a document element, derived from its name."""

    DOCUMENT = ElementNames.DOCUMENT
    ENTITIES = ElementNames.ENTITIES
    ENTITY = ElementNames.ENTITY
    DECLARATIONS = ElementNames.DECLARATIONS
    PROPERTY = ElementNames.PROPERTY
    VARIABLE = ElementNames.VARIABLE
    WITH = ElementNames.WITH
    RECORDS = ElementNames.RECORDS
    NEW = ElementNames.NEW
    WITHOUT = ElementNames.WITHOUT
    PREFIX = ElementNames.PREFIX
    POSTFIX = ElementNames.POSTFIX
    UNKNOWN = ""

    @classmethod
    def from_name(cls, name: str) -> "ElementKind":
        """Classify an element name, returning UNKNOWN for anything unrecognised."""
        return _KINDS_BY_NAME.get(fold_name(name), cls.UNKNOWN)


def fold_name(name: str) -> str:
    """Normalize a name for case-insensitive comparison."""
    return name.casefold()


def name_equals(left: str | None, right: str | None) -> bool:
    """Compare two names case-insensitively; None only equals None."""
    if left is None or right is None:
        return left is right
    return fold_name(left) == fold_name(right)


_KINDS_BY_NAME = {
    fold_name(kind.value): kind for kind in ElementKind if kind is not ElementKind.UNKNOWN
}
