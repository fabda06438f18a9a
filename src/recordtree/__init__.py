"""
RecordTree - materialize flat record lists from hierarchical entity documents.

Entities declare typed properties and variables; records are composed from
With, Without, Prefix and Postfix operations declared at every enclosing
scope of the document tree.
"""

from importlib.metadata import version

from recordtree.document import (
    SCHEMA_VERSION,
    DocumentReader,
    read_document,
    read_records,
    read_records_string,
)
from recordtree.exceptions import ErrorLevel, InvalidDocumentError
from recordtree.options import DocumentOptions
from recordtree.records import Record
from recordtree.schema import EntityDefinition, PropertyDefinition

__version__ = version("recordtree")

__all__ = [
    "__version__",
    "SCHEMA_VERSION",
    "DocumentReader",
    "DocumentOptions",
    "EntityDefinition",
    "ErrorLevel",
    "InvalidDocumentError",
    "PropertyDefinition",
    "Record",
    "read_document",
    "read_records",
    "read_records_string",
]
