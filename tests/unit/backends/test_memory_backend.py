"""Tests for the in-memory structure tree backend."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError

from tagview.backends.memory import MemoryDocument, MemoryNode, load_document
from tagview.lib.errors import (
    ConfigError,
    FileNotFoundError,
    NotContentError,
    PageReferenceError,
)
from tagview.models.kinds import RoleType
from tagview.models.marked_content import (
    CharOp,
    ColorOp,
    FlagsOp,
    FontFlags,
    FontNameOp,
    LinkOp,
    RGBColor,
)
from tagview.structure.protocols import StructureDocument, StructureNode


class TestMemoryDocument:
    """Tests for MemoryDocument."""

    def test_implements_protocols(self, sample_document: MemoryDocument) -> None:
        """Test that the backend satisfies the structure protocols."""
        assert isinstance(sample_document, StructureDocument)
        assert isinstance(sample_document.root_at(0), StructureNode)

    def test_tree_presence(self) -> None:
        """Test the difference between no tree and an empty tree."""
        assert not MemoryDocument.from_dict({}).has_structure_tree()
        assert MemoryDocument.from_dict({"roots": []}).has_structure_tree()

    def test_root_count(self, sample_document: MemoryDocument) -> None:
        """Test counting of top-level elements."""
        assert sample_document.root_count() == 2

    def test_resolve_page_index(self, sample_document: MemoryDocument) -> None:
        """Test that page numbers resolve to themselves."""
        assert sample_document.resolve_page_index(3) == 3

    @pytest.mark.parametrize("page_ref", [0, 4, -1])
    def test_page_outside_document_resolves_to_zero(
        self, sample_document: MemoryDocument, page_ref: int
    ) -> None:
        """Test that numbers naming no page resolve to 0."""
        assert sample_document.resolve_page_index(page_ref) == 0

    @pytest.mark.parametrize("page_ref", ["1", True, None])
    def test_invalid_page_reference(
        self, sample_document: MemoryDocument, page_ref: Any
    ) -> None:
        """Test that references that are not page numbers are rejected."""
        with pytest.raises(PageReferenceError):
            sample_document.resolve_page_index(page_ref)

    def test_page_beyond_page_count_rejected(self) -> None:
        """Test that validation catches pages past the end of the document."""
        with pytest.raises(ValidationError, match="exceeds page_count"):
            MemoryDocument.from_dict(
                {"page_count": 1, "roots": [{"role": "P", "page": 2}]}
            )

    def test_unknown_role_rejected(self) -> None:
        """Test that role tags outside the standard set fail validation."""
        with pytest.raises(ValidationError):
            MemoryDocument.from_dict({"roots": [{"role": "Banner"}]})


class TestMemoryNode:
    """Tests for MemoryNode."""

    def test_content_node_cannot_have_children(self) -> None:
        """Test that MCID nodes are leaves."""
        with pytest.raises(ValidationError, match="cannot have children"):
            MemoryDocument.from_dict(
                {"roots": [{"role": "MCID", "children": [{"role": "P"}]}]}
            )

    def test_only_content_nodes_carry_ops(self) -> None:
        """Test that grouping nodes cannot carry operations."""
        with pytest.raises(ValidationError, match="only MCID nodes"):
            MemoryDocument.from_dict(
                {"roots": [{"role": "P", "ops": [{"op": "text", "value": "x"}]}]}
            )

    def test_operations_are_converted(self) -> None:
        """Test conversion of every operation kind."""
        document = MemoryDocument.from_dict(
            {
                "roots": [
                    {
                        "role": "MCID",
                        "ops": [
                            {"op": "char", "codepoint": 65},
                            {"op": "text", "value": "bc"},
                            {"op": "flags", "bold": True, "italic": True},
                            {"op": "color", "rgb": [255, 0, 0]},
                            {"op": "color"},
                            {"op": "font", "name": "Arial"},
                            {"op": "link", "target": "#top"},
                        ],
                    }
                ]
            }
        )

        assert document.root_at(0).marked_content_ops() == (
            CharOp(65),
            CharOp(ord("b")),
            CharOp(ord("c")),
            FlagsOp(FontFlags.BOLD | FontFlags.ITALIC),
            ColorOp(RGBColor(255, 0, 0)),
            ColorOp(None),
            FontNameOp("Arial"),
            LinkOp("#top"),
        )

    def test_color_component_range(self) -> None:
        """Test that color components must fit in a byte."""
        with pytest.raises(ValidationError):
            MemoryDocument.from_dict(
                {
                    "roots": [
                        {"role": "MCID", "ops": [{"op": "color", "rgb": [256, 0, 0]}]}
                    ]
                }
            )

    def test_unknown_op_rejected(self) -> None:
        """Test that unknown operation names fail validation."""
        with pytest.raises(ValidationError):
            MemoryDocument.from_dict(
                {"roots": [{"role": "MCID", "ops": [{"op": "underline"}]}]}
            )

    def test_ops_of_non_content_node(self, sample_document: MemoryDocument) -> None:
        """Test that requesting operations from a grouping node is a violation."""
        with pytest.raises(NotContentError):
            sample_document.root_at(0).marked_content_ops()

    def test_explicit_text_wins(self) -> None:
        """Test that a node's explicit text is used as its own text."""
        document = MemoryDocument.from_dict(
            {
                "roots": [
                    {
                        "role": "P",
                        "text": "Lead: ",
                        "children": [{"role": "MCID", "text": "body"}],
                    }
                ]
            }
        )
        node: MemoryNode = document.root_at(0)

        assert node.plain_text(False) == "Lead: "
        assert node.plain_text(True) == "Lead: body"

    def test_role_and_attributes(self, sample_document: MemoryDocument) -> None:
        """Test raw accessors of a node."""
        node = sample_document.root_at(0)

        assert node.role_type is RoleType.DOCUMENT
        assert node.raw_id() == "doc"
        assert node.raw_language() == "en-US"
        assert node.page_ref() is None
        assert node.child_count() == 2


class TestLoadDocument:
    """Tests for load_document()."""

    def test_load_yaml(
        self,
        write_tree_file: Callable[..., Path],
        sample_tree_data: dict[str, Any],
    ) -> None:
        """Test loading a YAML description."""
        document = load_document(write_tree_file(sample_tree_data))

        assert document.root_count() == 2

    def test_load_json(self, temp_dir: Path, sample_tree_data: dict[str, Any]) -> None:
        """Test loading a JSON description."""
        path = temp_dir / "tree.json"
        path.write_text(json.dumps(sample_tree_data), encoding="utf-8")

        assert load_document(path).tree.page_count == 3

    def test_missing_file(self, temp_dir: Path) -> None:
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="File not found"):
            load_document(temp_dir / "missing.yaml")

    def test_invalid_yaml(self, temp_dir: Path) -> None:
        """Test that unparsable YAML is a configuration error."""
        path = temp_dir / "broken.yaml"
        path.write_text("roots: [unclosed", encoding="utf-8")

        with pytest.raises(ConfigError, match="Cannot parse"):
            load_document(path)

    def test_non_mapping(self, temp_dir: Path) -> None:
        """Test that a top-level list is rejected."""
        path = temp_dir / "list.yaml"
        path.write_text("- role: P\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="mapping"):
            load_document(path)

    def test_validation_errors_are_flattened(
        self, write_tree_file: Callable[..., Path]
    ) -> None:
        """Test that validation failures name the offending field."""
        path = write_tree_file({"roots": [{"role": "P", "page": 0}]})

        with pytest.raises(ConfigError) as exc_info:
            load_document(path)

        assert "page" in str(exc_info.value)

    def test_empty_file_has_no_tree(self, temp_dir: Path) -> None:
        """Test that an empty description is a document without a tree."""
        path = temp_dir / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert not load_document(path).has_structure_tree()
