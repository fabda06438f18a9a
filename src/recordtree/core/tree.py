"""
Generic document tree for record documents.

This module contains the DocumentElement model that every reader walks.
Any front end (XML, YAML, hand-built fixtures) only has to produce this tree:
named elements with ordered children and named string attributes, each
carrying a location usable for diagnostics.
"""

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field

from recordtree.core.names import ElementKind, name_equals
from recordtree.exceptions import (
    ErrorContext,
    ErrorLevel,
    InvalidDocumentError,
    MissingAttributeError,
)


class DocumentElement(BaseModel):
    """
    One element of a parsed document.

    Attributes keep insertion order so operations derived from them execute
    in the order the author wrote them.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    attributes: dict[str, str] = Field(default_factory=dict)
    children: list["DocumentElement"] = Field(default_factory=list)
    location: str | None = None

    @property
    def kind(self) -> ElementKind:
        """Element kind derived from the element name."""
        return ElementKind.from_name(self.name)

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    def iter_attributes(self) -> Iterator[tuple[str, str]]:
        """Iterate over (name, value) pairs in document order."""
        yield from self.attributes.items()

    def get_attribute(self, name: str) -> str | None:
        """
        Get an attribute value by case-insensitive name.

        Params:
            name: Attribute name to look up

        Returns:
            The attribute value, or None when the attribute is absent
        """
        for attribute_name, value in self.attributes.items():
            if name_equals(attribute_name, name):
                return value
        return None

    def require_attribute(
        self, name: str, error_level: ErrorLevel = ErrorLevel.USER
    ) -> str:
        """
        Get an attribute value that must be present.

        Params:
            name: Attribute name to look up
            error_level: Detail level for the error message

        Returns:
            The attribute value

        Raises:
            MissingAttributeError: If the attribute is absent
        """
        value = self.get_attribute(name)
        if value is None:
            raise MissingAttributeError(
                f"Element '{self.name}' is missing required attribute '{name}'.",
                self.context(),
                error_level,
            )
        return value

    def context(self, attribute_name: str | None = None) -> ErrorContext:
        """Build an error context pointing at this element or one of its attributes."""
        return ErrorContext(
            location=self.location or self.name,
            element_name=self.name,
            attribute_name=attribute_name,
        )

    def fail(
        self,
        error_type: type[InvalidDocumentError],
        message: str,
        error_level: ErrorLevel = ErrorLevel.USER,
        attribute_name: str | None = None,
    ) -> InvalidDocumentError:
        """
        Create an error located at this element.

        Callers raise the returned exception so control flow stays visible
        at the call site.
        """
        return error_type(message, self.context(attribute_name), error_level)
