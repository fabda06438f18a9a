"""
Tests for the XML front end.
"""

import pytest

from recordtree.core import ElementKind
from recordtree.exceptions import DocumentLoadError
from recordtree.parsing import load_document, load_document_string


class TestLoadDocumentString:
    """Tests for converting XML text into a DocumentElement tree."""

    def test_tree_shape_and_attributes(self):
        root = load_document_string(
            '<Document Version="0.1.0"><Entities><Entity Name="A" /></Entities></Document>'
        )

        assert root.kind is ElementKind.DOCUMENT
        assert root.get_attribute("Version") == "0.1.0"
        (entities,) = root.children
        assert entities.children[0].attributes == {"Name": "A"}

    def test_locations_index_repeated_siblings(self):
        root = load_document_string(
            "<Records><New /><With><New /></With><New /></Records>"
        )

        first, scope, last = root.children

        assert root.location == "/Records"
        assert first.location == "/Records/New[1]"
        assert scope.location == "/Records/With"
        assert scope.children[0].location == "/Records/With/New"
        assert last.location == "/Records/New[2]"

    def test_namespaces_are_stripped(self):
        root = load_document_string(
            '<d:Document xmlns:d="urn:records" Version="0.1.0"><d:Entities /></d:Document>'
        )

        assert root.name == "Document"
        assert root.children[0].name == "Entities"

    def test_malformed_xml(self):
        with pytest.raises(DocumentLoadError):
            load_document_string("<Document>")


class TestLoadDocument:
    """Tests for loading XML files."""

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "records.xml"
        path.write_text('<Document Version="0.1.0" />', encoding="utf-8")

        root = load_document(path)

        assert root.name == "Document"
        assert not root.has_children

    def test_missing_file(self, tmp_path):
        with pytest.raises(DocumentLoadError):
            load_document(tmp_path / "missing.xml")
