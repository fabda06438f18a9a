"""
Record document exception classes.

This package provides all exception types raised while reading entity
documents, for consistent error handling and reporting.
"""

from recordtree.exceptions.core import (
    DocumentLoadError,
    DuplicateDefinitionError,
    DuplicateElementError,
    DuplicateIdError,
    ErrorContext,
    ErrorLevel,
    InvalidDocumentError,
    InvalidValueError,
    MissingAttributeError,
    MissingIdError,
    OperationError,
    ReferenceResolutionError,
    RequiredPropertyError,
    ReservedNameError,
    SchemaError,
    StructuralError,
    UndefinedPropertyError,
    UnknownElementError,
    UnresolvedVariableError,
    UnsupportedVersionError,
)

__all__ = [
    "ErrorContext",
    "ErrorLevel",
    "InvalidDocumentError",
    "StructuralError",
    "UnknownElementError",
    "DuplicateElementError",
    "MissingAttributeError",
    "DocumentLoadError",
    "SchemaError",
    "DuplicateDefinitionError",
    "ReservedNameError",
    "UnsupportedVersionError",
    "ReferenceResolutionError",
    "UndefinedPropertyError",
    "UnresolvedVariableError",
    "InvalidValueError",
    "OperationError",
    "RequiredPropertyError",
    "DuplicateIdError",
    "MissingIdError",
]
