"""Pytest configuration and shared fixtures for TagView tests."""

import logging
import os
import shutil
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import yaml
from pypdf import PdfWriter
from pypdf.generic import (
    ArrayObject,
    DictionaryObject,
    NameObject,
    NumberObject,
    TextStringObject,
)

from tagview.backends.memory import MemoryDocument
from tagview.lib.logging_config import ROOT_LOGGER_NAME


@pytest.fixture
def temp_dir() -> Generator[Path]:
    """Create a temporary directory for test file operations.

    Yields:
        Path to temporary directory

    Cleanup:
        Automatically removes directory after test
    """
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def isolated_env() -> Generator[dict[str, str]]:
    """Provide isolated environment variables for testing.

    Saves current environment and restores after test.

    Yields:
        Dictionary of original environment variables
    """
    original_env = os.environ.copy()
    for key in list(os.environ):
        if key.startswith("TAGVIEW_"):
            del os.environ[key]
    yield original_env
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def reset_tagview_logger() -> Generator[None]:
    """Restore the ``tagview`` logger after each test.

    CLI invocations attach a stderr handler bound to the runner's stream;
    dropping it keeps later tests from writing into a closed stream.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    level = logger.level
    handlers = list(logger.handlers)
    yield
    logger.setLevel(level)
    logger.handlers[:] = handlers


@pytest.fixture
def sample_tree_data() -> dict[str, Any]:
    """Structure tree of a short two-page report.

    Returns:
        Dictionary accepted by ``MemoryDocument.from_dict``
    """
    return {
        "page_count": 3,
        "roots": [
            {
                "role": "Document",
                "id": "doc",
                "language": "en-US",
                "children": [
                    {
                        "role": "H1",
                        "page": 1,
                        "title": "Introduction",
                        "children": [
                            {
                                "role": "MCID",
                                "page": 1,
                                "ops": [
                                    {"op": "flags", "bold": True},
                                    {"op": "text", "value": "Intro"},
                                ],
                            }
                        ],
                    },
                    {
                        "role": "P",
                        "page": 3,
                        "children": [
                            {
                                "role": "MCID",
                                "page": 3,
                                "ops": [{"op": "text", "value": "Hello "}],
                            },
                            {
                                "role": "Span",
                                "expanded_abbr": "World Wide",
                                "children": [
                                    {
                                        "role": "MCID",
                                        "ops": [
                                            {"op": "font", "name": "Courier"},
                                            {"op": "text", "value": "World"},
                                        ],
                                    }
                                ],
                            },
                        ],
                    },
                ],
            },
            {
                "role": "Figure",
                "alt_text": "A chart",
            },
        ],
    }


@pytest.fixture
def sample_document(sample_tree_data: dict[str, Any]) -> MemoryDocument:
    """In-memory document built from ``sample_tree_data``."""
    return MemoryDocument.from_dict(sample_tree_data)


@pytest.fixture
def write_tree_file(temp_dir: Path) -> Callable[..., Path]:
    """Create a factory writing tree descriptions to disk.

    Returns:
        Callable taking the data and an optional file name, returning the path
    """

    def _write(data: dict[str, Any], name: str = "tree.yaml") -> Path:
        path = temp_dir / name
        path.write_text(yaml.dump(data, sort_keys=False), encoding="utf-8")
        return path

    return _write


def _pdf_dict(entries: dict[str, Any]) -> DictionaryObject:
    return DictionaryObject({NameObject(key): value for key, value in entries.items()})


@pytest.fixture
def tagged_pdf(temp_dir: Path) -> Path:
    """Write a two-page tagged PDF with a small structure tree.

    Tree layout::

        Document (Lang=en)
          Heading -> H1 (page 1, ID=h1, T=Intro)
            MCID 0
          P (page 2, ActualText="Body text")
            MCR (MCID 1)
          Figure (Alt=Logo)
            OBJR
          Banner (custom role, unmapped)
          Loop1 (role map cycle)

    Returns:
        Path to the PDF file
    """
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    writer.add_blank_page(width=612, height=792)
    page1 = writer.pages[0].indirect_reference
    page2 = writer.pages[1].indirect_reference

    heading = writer._add_object(
        _pdf_dict(
            {
                "/Type": NameObject("/StructElem"),
                "/S": NameObject("/Heading"),
                "/Pg": page1,
                "/ID": TextStringObject("h1"),
                "/T": TextStringObject("Intro"),
                "/K": ArrayObject([NumberObject(0)]),
            }
        )
    )
    mcr = _pdf_dict(
        {
            "/Type": NameObject("/MCR"),
            "/MCID": NumberObject(1),
            "/Pg": page2,
        }
    )
    paragraph = writer._add_object(
        _pdf_dict(
            {
                "/Type": NameObject("/StructElem"),
                "/S": NameObject("/P"),
                "/Pg": page2,
                "/ActualText": TextStringObject("Body text"),
                "/K": ArrayObject([mcr]),
            }
        )
    )
    objr = _pdf_dict({"/Type": NameObject("/OBJR"), "/Obj": page1})
    figure = writer._add_object(
        _pdf_dict(
            {
                "/S": NameObject("/Figure"),
                "/Alt": TextStringObject("Logo"),
                "/K": objr,
            }
        )
    )
    banner = writer._add_object(_pdf_dict({"/S": NameObject("/Banner")}))
    loop = writer._add_object(_pdf_dict({"/S": NameObject("/Loop1")}))
    document = writer._add_object(
        _pdf_dict(
            {
                "/S": NameObject("/Document"),
                "/Lang": TextStringObject("en"),
                "/K": ArrayObject([heading, paragraph, figure, banner, loop]),
            }
        )
    )
    role_map = _pdf_dict(
        {
            "/Heading": NameObject("/H1"),
            "/Loop1": NameObject("/Loop2"),
            "/Loop2": NameObject("/Loop1"),
        }
    )
    tree_root = writer._add_object(
        _pdf_dict(
            {
                "/Type": NameObject("/StructTreeRoot"),
                "/K": document,
                "/RoleMap": role_map,
            }
        )
    )
    writer._root_object[NameObject("/StructTreeRoot")] = tree_root

    path = temp_dir / "tagged.pdf"
    with path.open("wb") as output:
        writer.write(output)
    return path


@pytest.fixture
def stray_page_pdf(temp_dir: Path) -> Path:
    """Write a tagged PDF whose paragraph /Pg names a non-page object.

    Tree layout::

        Document
          P (/Pg -> plain dictionary object)

    Returns:
        Path to the PDF file
    """
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    not_a_page = writer._add_object(_pdf_dict({"/Title": TextStringObject("x")}))

    paragraph = writer._add_object(
        _pdf_dict({"/S": NameObject("/P"), "/Pg": not_a_page})
    )
    document = writer._add_object(
        _pdf_dict({"/S": NameObject("/Document"), "/K": ArrayObject([paragraph])})
    )
    tree_root = writer._add_object(
        _pdf_dict({"/Type": NameObject("/StructTreeRoot"), "/K": document})
    )
    writer._root_object[NameObject("/StructTreeRoot")] = tree_root

    path = temp_dir / "stray_page.pdf"
    with path.open("wb") as output:
        writer.write(output)
    return path


@pytest.fixture
def untagged_pdf(temp_dir: Path) -> Path:
    """Write a one-page PDF without a structure tree."""
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    path = temp_dir / "untagged.pdf"
    with path.open("wb") as output:
        writer.write(output)
    return path
