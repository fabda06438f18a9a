"""
Tests for direct operation execution on records.
"""

from recordtree.records import Operation, OperationKind, Record, apply_affix
from recordtree.schema import GLOBAL_ENTITY, TAGS_PROPERTY, EntityDefinition, PropertyDefinition

TITLE = PropertyDefinition("Title")
KEYWORDS = PropertyDefinition("Keywords", is_collection=True)
ENTITY = EntityDefinition("Snippet", GLOBAL_ENTITY, [TITLE, KEYWORDS])


def run(record, kind, prop, value):
    Operation(kind, prop, value, 1).execute(record)


class TestWith:
    """Tests for With operations."""

    def test_scalar_is_overwritten(self):
        record = Record(ENTITY)
        run(record, OperationKind.WITH, TITLE, "a")
        run(record, OperationKind.WITH, TITLE, "b")

        assert record["Title"] == "b"

    def test_collection_is_split_and_appended(self):
        record = Record(ENTITY)
        run(record, OperationKind.WITH, KEYWORDS, "a,b,,c")
        run(record, OperationKind.WITH, KEYWORDS, "d")

        assert record["Keywords"] == ["a", "b", "c", "d"]

    def test_empty_value_creates_empty_collection(self):
        record = Record(ENTITY)
        run(record, OperationKind.WITH, KEYWORDS, "")

        assert record.contains_property("Keywords")
        assert record["Keywords"] == []

    def test_tags_are_added_to_tag_set(self):
        record = Record(ENTITY)
        run(record, OperationKind.WITH, TAGS_PROPERTY, "a,b,a")

        assert record.tags == {"a", "b"}
        assert not record.contains_property("Tags")


class TestWithout:
    """Tests for Without operations."""

    def test_removes_first_occurrence_of_each_item(self):
        record = Record(ENTITY, collection_values={"Keywords": ["a", "b", "a", "c"]})
        run(record, OperationKind.WITHOUT, KEYWORDS, "a,c")

        assert record["Keywords"] == ["b", "a"]

    def test_missing_items_are_ignored(self):
        record = Record(ENTITY, collection_values={"Keywords": ["a"]})
        run(record, OperationKind.WITHOUT, KEYWORDS, "z")

        assert record["Keywords"] == ["a"]

    def test_unset_collection_is_a_no_op(self):
        record = Record(ENTITY)
        run(record, OperationKind.WITHOUT, KEYWORDS, "a")

        assert not record.contains_property("Keywords")

    def test_tags_are_removed(self):
        record = Record(ENTITY, tags={"a", "b"})
        run(record, OperationKind.WITHOUT, TAGS_PROPERTY, "a,x")

        assert record.tags == {"b"}


class TestAffix:
    """Tests for Prefix and Postfix."""

    def test_scalar_prefix_and_postfix(self):
        record = Record(ENTITY, scalar_values={"Title": "v"})
        run(record, OperationKind.PREFIX, TITLE, "<")
        run(record, OperationKind.POSTFIX, TITLE, ">")

        assert record["Title"] == "<v>"

    def test_unset_scalar_is_treated_as_empty(self):
        record = Record(ENTITY)
        run(record, OperationKind.POSTFIX, TITLE, "!")

        assert record["Title"] == "!"

    def test_collection_items_are_affixed_independently(self):
        record = Record(ENTITY, collection_values={"Keywords": ["a", "b"]})
        apply_affix(record, KEYWORDS, OperationKind.POSTFIX, "()")

        assert record["Keywords"] == ["a()", "b()"]

    def test_unset_collection_is_left_alone(self):
        record = Record(ENTITY)
        apply_affix(record, KEYWORDS, OperationKind.PREFIX, "x")

        assert not record.contains_property("Keywords")

    def test_tags_are_affixed(self):
        record = Record(ENTITY, tags={"a", "b"})
        apply_affix(record, TAGS_PROPERTY, OperationKind.PREFIX, "#")

        assert record.tags == {"#a", "#b"}


class TestOperationKind:
    def test_is_affix(self):
        assert OperationKind.PREFIX.is_affix
        assert OperationKind.POSTFIX.is_affix
        assert not OperationKind.WITH.is_affix
        assert not OperationKind.WITHOUT.is_affix
