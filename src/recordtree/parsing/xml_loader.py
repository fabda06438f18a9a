"""
XML front end for record documents.

Converts XML text into the generic DocumentElement tree. Namespaces are
reduced to local names and each element gets a positional location such as
"/Document/Entities/Entity[2]" for error reporting.
"""

import xml.etree.ElementTree as ET
from collections import Counter
from pathlib import Path

from recordtree.core.tree import DocumentElement
from recordtree.exceptions import DocumentLoadError


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1] if tag.startswith("{") else tag


def _convert(node: ET.Element, location: str) -> DocumentElement:
    totals = Counter(_local_name(child.tag) for child in node)
    seen: Counter[str] = Counter()
    children = []
    for child in node:
        name = _local_name(child.tag)
        seen[name] += 1
        child_location = f"{location}/{name}"
        if totals[name] > 1:
            child_location += f"[{seen[name]}]"
        children.append(_convert(child, child_location))

    return DocumentElement(
        name=_local_name(node.tag),
        attributes={_local_name(key): value for key, value in node.attrib.items()},
        children=children,
        location=location,
    )


def from_etree(root: ET.Element) -> DocumentElement:
    """Convert an already parsed ElementTree element into a DocumentElement tree."""
    return _convert(root, f"/{_local_name(root.tag)}")


def load_document_string(text: str) -> DocumentElement:
    """
    Parse XML text into a DocumentElement tree.

    Params:
        text: XML document text

    Returns:
        Root element of the document

    Raises:
        DocumentLoadError: If the text is not well-formed XML
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise DocumentLoadError(f"Document is not well-formed XML: {e}") from e
    return from_etree(root)


def load_document(path: str | Path) -> DocumentElement:
    """
    Parse an XML file into a DocumentElement tree.

    Raises:
        DocumentLoadError: If the file cannot be read or is not well-formed XML
    """
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as e:
        raise DocumentLoadError(f"Document '{path}' is not well-formed XML: {e}") from e
    except OSError as e:
        raise DocumentLoadError(f"Document '{path}' cannot be read: {e}") from e
    return from_etree(root)
