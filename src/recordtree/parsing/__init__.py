"""
Document front ends.

This package converts raw document text into the generic DocumentElement
tree consumed by the readers.
"""

from recordtree.parsing.xml_loader import (
    from_etree,
    load_document,
    load_document_string,
)

__all__ = [
    "from_etree",
    "load_document",
    "load_document_string",
]
