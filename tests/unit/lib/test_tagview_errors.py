"""Tests for the TagView exception hierarchy."""

import builtins

import pytest

from tagview.lib.errors import (
    ConfigError,
    ContractViolationError,
    CursorOutOfRangeError,
    DocumentLoadError,
    FileNotFoundError,
    NotContentError,
    PageReferenceError,
    TagViewError,
    UnknownRoleTypeError,
)


class TestTagViewError:
    """Tests for the base exception."""

    def test_preserves_message(self) -> None:
        """Test that the message is kept as the first argument."""
        error = TagViewError("Detailed error description")
        assert error.args[0] == "Detailed error description"

    @pytest.mark.parametrize(
        "error",
        [
            ConfigError("field", "message"),
            FileNotFoundError("a.pdf", "message"),
            DocumentLoadError("a.pdf", "message"),
            ContractViolationError("message"),
        ],
    )
    def test_all_errors_share_base(self, error: Exception) -> None:
        """Test that every TagView error can be caught as TagViewError."""
        assert isinstance(error, TagViewError)


class TestConfigError:
    """Tests for ConfigError."""

    def test_formats_field_and_message(self) -> None:
        """Test the formatted message."""
        error = ConfigError("text_encoding", "Unknown codec")

        assert str(error) == "Configuration error in 'text_encoding': Unknown codec"
        assert error.field == "text_encoding"
        assert error.message == "Unknown codec"


class TestFileNotFoundError:
    """Tests for the TagView FileNotFoundError."""

    def test_formats_path_and_message(self) -> None:
        """Test that the path and suggestion are both reported."""
        error = FileNotFoundError("/tmp/x.pdf", "Provide an existing PDF file.")

        assert "File not found: /tmp/x.pdf" in str(error)
        assert "Provide an existing PDF file." in str(error)
        assert error.path == "/tmp/x.pdf"

    def test_is_not_builtin_file_not_found(self) -> None:
        """Test that the TagView error does not shadow OSError handling."""
        assert not issubclass(FileNotFoundError, builtins.FileNotFoundError)


class TestContractViolations:
    """Tests for contract violation errors."""

    @pytest.mark.parametrize(
        "error",
        [
            UnknownRoleTypeError("Foo"),
            CursorOutOfRangeError(3, 3),
            NotContentError("P"),
            PageReferenceError(7, "no such page"),
        ],
    )
    def test_are_contract_violations(self, error: Exception) -> None:
        """Test that all violations share ContractViolationError."""
        assert isinstance(error, ContractViolationError)

    def test_cursor_error_details(self) -> None:
        """Test that the cursor position is reported."""
        error = CursorOutOfRangeError(3, 2)

        assert error.index == 3
        assert error.count == 2
        assert "advance() returns False" in str(error)

    def test_unknown_role_details(self) -> None:
        """Test that the offending role tag is kept."""
        error = UnknownRoleTypeError("Banner")

        assert error.role_type == "Banner"
        assert "'Banner'" in str(error)

    def test_page_reference_details(self) -> None:
        """Test that the page reference is reported."""
        error = PageReferenceError((12, 0), "not a page object")

        assert error.page_ref == (12, 0)
        assert "not a page object" in str(error)
