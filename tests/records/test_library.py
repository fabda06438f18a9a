"""
Tests for the template ("with") library and template cloning.
"""

import pytest

from recordtree.core import DocumentElement
from recordtree.exceptions import DuplicateIdError, MissingIdError, RequiredPropertyError
from recordtree.records import Record, TemplateLibrary, build_template_library
from recordtree.records.reader import RecordReader
from recordtree.schema import GLOBAL_ENTITY, EntityDefinition, PropertyDefinition

SNIPPET = EntityDefinition(
    "Snippet",
    GLOBAL_ENTITY,
    [
        PropertyDefinition("Title", is_required=True),
        PropertyDefinition("Keywords", is_collection=True),
    ],
)


def new(**attributes):
    return DocumentElement(name="New", attributes=attributes)


class TestTemplateLibrary:
    """Tests for building the id-keyed library."""

    def test_records_are_keyed_by_id(self):
        element = DocumentElement(
            name="With", children=[new(Id="a", Title="A"), new(Id="b")]
        )

        library = build_template_library(element, SNIPPET)

        assert len(library) == 2
        assert list(library) == ["a", "b"]
        assert library["a"]["Title"] == "A"
        assert library.find("missing") is None

    def test_ids_are_compared_exactly(self):
        library = build_template_library(
            DocumentElement(name="With", children=[new(Id="a"), new(Id="A")]), SNIPPET
        )

        assert library.find("a") is not library.find("A")

    def test_missing_id(self):
        element = DocumentElement(name="With", children=[new(Title="A")])

        with pytest.raises(MissingIdError):
            build_template_library(element, SNIPPET)

    def test_duplicate_id(self):
        element = DocumentElement(name="With", children=[new(Id="a"), new(Id="a")])

        with pytest.raises(DuplicateIdError) as exc_info:
            build_template_library(element, SNIPPET)

        assert exc_info.value.record_id == "a"

    def test_scoped_operations_apply_to_templates(self):
        element = DocumentElement(
            name="With",
            children=[
                DocumentElement(
                    name="With",
                    attributes={"Keywords": "shared"},
                    children=[new(Id="a"), new(Id="b", Keywords="own")],
                )
            ],
        )

        library = build_template_library(element, SNIPPET)

        assert library["a"]["Keywords"] == ["shared"]
        assert library["b"]["Keywords"] == ["own", "shared"]

    def test_constructor_rejects_records_without_id(self):
        with pytest.raises(ValueError):
            TemplateLibrary([Record(SNIPPET)])


class TestTemplateCloning:
    """Records whose Id matches a template start from a clone of it."""

    def test_template_values_seed_the_record(self, read_snippets):
        (record,) = read_snippets(
            '<New Id="linq" Keywords="query" />',
            templates='<New Id="linq" Title="Linq" Keywords="base" />',
        )

        assert record.id == "linq"
        assert record["Title"] == "Linq"
        assert record["Keywords"] == ["base", "query"]

    def test_partial_template_is_completed_by_record(self, read_snippets):
        (record,) = read_snippets(
            '<New Id="partial" Title="Done" />',
            templates='<New Id="partial" Keywords="k" />',
        )

        assert record["Title"] == "Done"
        assert record["Keywords"] == ["k"]

    def test_partial_template_used_alone_fails_required_check(self, read_snippets):
        with pytest.raises(RequiredPropertyError):
            read_snippets(
                '<New Id="partial" />',
                templates='<New Id="partial" Keywords="k" />',
            )

    def test_unmatched_id_creates_fresh_record(self, read_snippets):
        (record,) = read_snippets(
            '<New Id="other" Title="T" />',
            templates='<New Id="linq" Title="Linq" Keywords="base" />',
        )

        assert record.id == "other"
        assert not record.contains_property("Keywords")

    def test_clone_is_affixed_without_touching_template(self):
        library = build_template_library(
            DocumentElement(
                name="With", children=[new(Id="base", Title="T", Keywords="a,b")]
            ),
            SNIPPET,
        )
        records_element = DocumentElement(
            name="Records",
            children=[
                DocumentElement(
                    name="Postfix", attributes={"Keywords": "!"}, children=[new(Id="base")]
                ),
                new(Id="base"),
            ],
        )

        first, second = RecordReader(records_element, SNIPPET, templates=library).read()

        assert first["Keywords"] == ["a!", "b!"]
        assert second["Keywords"] == ["a", "b"]
        assert library["base"]["Keywords"] == ["a", "b"]
        assert first.entity is SNIPPET
