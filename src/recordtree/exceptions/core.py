"""
Exception classes for record document processing.

This module defines the single "invalid document" error family raised while
reading entity documents and materializing records. Every failure is fatal
to the current pass; the first violation in document order is reported.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorLevel(Enum):
    """Error message detail level for end users vs developers."""

    USER = "user"  # Element location only
    DEVELOPER = "developer"  # Location plus element and attribute names


@dataclass
class ErrorContext:
    """
    Context information for error messages.

    Captures where in the document tree an error occurred so the message can
    point the author at the offending element or attribute.

    Params:
        location: Human-readable element identity (e.g. "/Document/Entities/Entity[2]")
        element_name: Name of the offending element
        attribute_name: Name of the offending attribute, if any
    """

    location: str | None = None
    element_name: str | None = None
    attribute_name: str | None = None

    def format_location(self, error_level: ErrorLevel) -> str:
        """
        Format location information based on error level.

        Params:
            error_level: Whether to show USER or DEVELOPER level details

        Returns:
            Formatted location string with appropriate detail level
        """
        lines = []

        if self.location:
            if self.attribute_name:
                lines.append(f"  at {self.location}/@{self.attribute_name}")
            else:
                lines.append(f"  at {self.location}")

        if error_level == ErrorLevel.DEVELOPER:
            if self.element_name:
                lines.append(f"  element: {self.element_name}")
            if self.attribute_name:
                lines.append(f"  attribute: {self.attribute_name}")

        return "\n".join(lines)


class InvalidDocumentError(Exception):
    """Base exception for all invalid document errors."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            message: Human-readable description of the violation
            context: Optional location of the offending element or attribute
            error_level: Level of detail to show in the error message
        """
        self.message = message
        self.context = context
        self.error_level = error_level

        location_info = context.format_location(error_level) if context else ""
        if location_info:
            super().__init__(f"{message}\n{location_info}")
        else:
            super().__init__(message)

    @property
    def location(self) -> str | None:
        """Location of the offending element, when known."""
        return self.context.location if self.context else None


class StructuralError(InvalidDocumentError):
    """Raised when the element layout of a document is invalid."""

    pass


class UnknownElementError(StructuralError):
    """Raised when an element kind is not allowed at its position."""

    pass


class DuplicateElementError(StructuralError):
    """Raised when a singleton child element appears more than once."""

    pass


class MissingAttributeError(StructuralError):
    """Raised when a required attribute is missing from an element."""

    pass


class DocumentLoadError(StructuralError):
    """Raised when raw document text cannot be parsed into a tree."""

    pass


class SchemaError(InvalidDocumentError):
    """Raised when entity declarations are inconsistent."""

    pass


class DuplicateDefinitionError(SchemaError):
    """Raised when a property or variable name is declared twice."""

    pass


class ReservedNameError(SchemaError):
    """Raised when a declaration uses a reserved property name."""

    pass


class UnsupportedVersionError(SchemaError):
    """Raised when the document schema version is missing, malformed or too new."""

    pass


class ReferenceResolutionError(InvalidDocumentError):
    """Raised when a name in the document does not resolve."""

    pass


class UndefinedPropertyError(ReferenceResolutionError):
    """Raised when an attribute name does not match any known property."""

    pass


class UnresolvedVariableError(ReferenceResolutionError):
    """Raised when a variable reference does not resolve in any scope."""

    pass


class InvalidValueError(InvalidDocumentError):
    """Raised when an attribute value is malformed."""

    pass


class OperationError(InvalidDocumentError):
    """Raised when an operation cannot be applied."""

    pass


class RequiredPropertyError(OperationError):
    """Raised when a required property has no value on a final record."""

    def __init__(
        self,
        property_name: str,
        context: ErrorContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        self.property_name = property_name
        super().__init__(
            f"Property '{property_name}' is required.", context, error_level
        )


class DuplicateIdError(OperationError):
    """Raised when a template library defines the same id twice."""

    def __init__(
        self,
        record_id: str,
        context: ErrorContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        self.record_id = record_id
        super().__init__(
            f"Id '{record_id}' is already defined.", context, error_level
        )


class MissingIdError(OperationError):
    """Raised when a template library entry has no id."""

    pass
