"""Tests for rendering validation errors as paths into the input."""

from typing import Any

import pytest
from pydantic import ValidationError

from tagview.backends.memory import StructTreeModel, load_document
from tagview.config.validator import flatten_pydantic_errors, format_location
from tagview.lib.errors import ConfigError
from tagview.models.config import TagViewConfig


def _messages(data: dict[str, Any]) -> list[str]:
    with pytest.raises(ValidationError) as exc_info:
        StructTreeModel.model_validate(data)
    return flatten_pydantic_errors(exc_info.value)


class TestFormatLocation:
    """Tests for location paths."""

    @pytest.mark.parametrize(
        ("loc", "expected"),
        [
            (("page_count",), "page_count"),
            (("roots", 0, "children", 1, "page"), "roots[0].children[1].page"),
            (
                ("roots", 0, "ops", 2, "color", "rgb", 0),
                "roots[0].ops[2]<color>.rgb[0]",
            ),
            (("roots", 0, "ops", 1), "roots[0].ops[1]"),
            ((), "(top level)"),
        ],
    )
    def test_paths(self, loc: tuple[str | int, ...], expected: str) -> None:
        """Test indices in brackets and op tags in angle brackets."""
        assert format_location(loc) == expected

    def test_node_text_field_is_not_an_op_tag(self) -> None:
        """Test that a field after a node index stays a dotted field."""
        assert format_location(("roots", 3, "text")) == "roots[3].text"
        assert format_location(("roots", 3, "ops", 0, "text", "value")) == (
            "roots[3].ops[0]<text>.value"
        )


class TestFlattenPydanticErrors:
    """Tests for message lines of real validation failures."""

    def test_nested_op_error_names_the_op(self) -> None:
        """Test that an op error points through children and the op tag."""
        messages = _messages(
            {
                "roots": [
                    {
                        "role": "Document",
                        "children": [
                            {"role": "P"},
                            {
                                "role": "MCID",
                                "ops": [
                                    {"op": "text", "value": "a"},
                                    {"op": "char", "codepoint": 98},
                                    {"op": "color", "rgb": [300, 0, 0]},
                                ],
                            },
                        ],
                    }
                ]
            }
        )

        assert len(messages) == 1
        assert messages[0].startswith("roots[0].children[1].ops[2]<color>.rgb[0]: ")
        assert "255" in messages[0]
        assert messages[0].endswith("(got 300)")

    def test_unknown_op_tag(self) -> None:
        """Test that an unknown op is reported at the op's index."""
        messages = _messages(
            {"roots": [{"role": "MCID", "ops": [{"op": "underline"}]}]}
        )

        assert len(messages) == 1
        assert messages[0].startswith("roots[0].ops[0]: ")
        assert "underline" in messages[0]

    def test_node_validator_message_has_no_prefix(self) -> None:
        """Test that node-level validator errors read as plain sentences."""
        messages = _messages(
            {"roots": [{"role": "P", "ops": [{"op": "text", "value": "x"}]}]}
        )

        assert messages == ["roots[0]: only MCID nodes can carry ops, not P"]

    def test_top_level_validator_message(self) -> None:
        """Test that errors of the outermost model are marked as top level."""
        messages = _messages({"page_count": 1, "roots": [{"role": "P", "page": 2}]})

        assert messages == ["(top level): page 2 exceeds page_count 1"]

    def test_scalar_input_is_echoed(self) -> None:
        """Test that the offending value is shown for config fields."""
        with pytest.raises(ValidationError) as exc_info:
            TagViewConfig(text_encoding="no-such-codec")

        messages = flatten_pydantic_errors(exc_info.value)

        assert messages == [
            "text_encoding: Unknown text encoding 'no-such-codec' "
            "(got 'no-such-codec')"
        ]

    def test_missing_field_has_no_input(self) -> None:
        """Test that missing fields are reported without the enclosing input."""
        messages = _messages({"roots": [{"children": []}]})

        assert messages == ["roots[0].role: Field required"]

    def test_fixture_file_errors_carry_paths(self, write_tree_file: Any) -> None:
        """Test that load_document reports the path of the failing op."""
        path = write_tree_file(
            {"roots": [{"role": "MCID", "ops": [{"op": "font", "name": 5}]}]}
        )

        with pytest.raises(ConfigError, match=r"roots\[0\]\.ops\[0\]<font>\.name"):
            load_document(path)
