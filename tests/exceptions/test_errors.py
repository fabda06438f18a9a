"""
Tests for error context and formatting.

This module tests ErrorContext, the ErrorLevel enum, and how invalid document
errors format their messages at each level.
"""

from recordtree.exceptions import (
    DuplicateIdError,
    ErrorContext,
    ErrorLevel,
    InvalidDocumentError,
    OperationError,
    RequiredPropertyError,
    SchemaError,
    UnsupportedVersionError,
)


class TestErrorContext:
    """Tests for ErrorContext formatting."""

    def test_user_level_shows_location_only(self):
        """USER level shows where the error happened without extra detail."""
        ctx = ErrorContext(
            location="/Document/Entities/Entity/Records/New[2]",
            element_name="New",
        )
        formatted = ctx.format_location(ErrorLevel.USER)

        assert "/Document/Entities/Entity/Records/New[2]" in formatted
        assert "element:" not in formatted

    def test_attribute_is_appended_to_location(self):
        """An attribute context points at the attribute of the element."""
        ctx = ErrorContext(location="/Document/Entities/Entity", attribute_name="Name")

        assert ctx.format_location(ErrorLevel.USER) == "  at /Document/Entities/Entity/@Name"

    def test_developer_level_adds_names(self):
        """DEVELOPER level adds element and attribute names."""
        ctx = ErrorContext(
            location="/Document/Entities/Entity/Records/New",
            element_name="New",
            attribute_name="Title",
        )
        formatted = ctx.format_location(ErrorLevel.DEVELOPER)

        assert "element: New" in formatted
        assert "attribute: Title" in formatted

    def test_empty_context_formats_to_empty_string(self):
        assert ErrorContext().format_location(ErrorLevel.DEVELOPER) == ""


class TestInvalidDocumentError:
    """Tests for the invalid document error family."""

    def test_message_without_context(self):
        error = InvalidDocumentError("Something is wrong.")

        assert str(error) == "Something is wrong."
        assert error.location is None

    def test_message_with_context(self):
        error = InvalidDocumentError(
            "Something is wrong.", ErrorContext(location="/Document")
        )

        assert str(error).startswith("Something is wrong.\n")
        assert "/Document" in str(error)
        assert error.location == "/Document"

    def test_required_property_error_keeps_property_name(self):
        error = RequiredPropertyError("Title")

        assert error.property_name == "Title"
        assert "Title" in str(error)
        assert isinstance(error, OperationError)

    def test_duplicate_id_error_keeps_id(self):
        error = DuplicateIdError("base")

        assert error.record_id == "base"
        assert isinstance(error, OperationError)

    def test_all_errors_share_one_base(self):
        """Callers can catch every failure with InvalidDocumentError."""
        assert issubclass(UnsupportedVersionError, SchemaError)
        assert issubclass(SchemaError, InvalidDocumentError)
        assert issubclass(OperationError, InvalidDocumentError)
