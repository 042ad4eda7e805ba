"""
Document bundle loading.

A bundle is identified by a path prefix, e.g. "backup/be26389680f0":
- backup/be26389680f0.content   JSON with "pages", "orientation", "fileType"
- backup/be26389680f0/<page>.rm one lines file per page id
- backup/be26389680f0.pdf       original document, for fileType "pdf"
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from .parser import Page, parse_file
from .errors import BundleError, VersionError

_logger = logging.getLogger(__name__)


class Orientation(Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class DocumentType(Enum):
    PDF = "pdf"
    EPUB = "epub"
    NOTEBOOK = "notebook"


@dataclass(frozen=True)
class Bundle:
    """Pages of all lines files of a document, in .content order."""
    orientation: Orientation
    document_type: DocumentType
    version: int
    pages: tuple[Page, ...]
    pdf_path: Optional[Path] = None


def _with_suffix(doc_path: Path, suffix: str) -> Path:
    # Bundle ids may contain dots, so append instead of Path.with_suffix
    return doc_path.parent / f"{doc_path.name}{suffix}"


def read_content(doc_path: Path) -> dict:
    """Load the .content JSON object of a bundle."""
    content_path = _with_suffix(doc_path, ".content")
    with open(content_path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise BundleError(f"{content_path}: {e}") from e
    if not isinstance(data, dict):
        raise BundleError("Expected an object at top level of .content JSON file")
    return data


def _get_string(content: dict, key: str) -> str:
    if key not in content:
        raise BundleError(f"Missing {key} entry")
    value = content[key]
    if not isinstance(value, str):
        raise BundleError(f"{key} entry must be a string value")
    return value


def get_orientation(content: dict) -> Orientation:
    value = _get_string(content, "orientation")
    try:
        return Orientation(value)
    except ValueError:
        raise BundleError(f"{value} is not a recognized orientation value") from None


def get_document_type(content: dict) -> DocumentType:
    value = _get_string(content, "fileType")
    try:
        return DocumentType(value)
    except ValueError:
        raise BundleError(f"{value} is not a recognized document type") from None


def get_page_ids(content: dict) -> list[str]:
    pages = content.get("pages")
    if not isinstance(pages, list):
        raise BundleError("Missing pages array")
    if not all(isinstance(page_id, str) for page_id in pages):
        raise BundleError("Values of the pages array must be strings")
    return pages


def load_bundle(doc_path: Path) -> Bundle:
    """
    Load and decode every page of a document bundle.

    Raises:
        BundleError: malformed .content JSON
        VersionError: no pages, or pages with different format versions
    """
    doc_path = Path(doc_path)
    content = read_content(doc_path)
    orientation = get_orientation(content)
    document_type = get_document_type(content)
    page_ids = get_page_ids(content)

    if not page_ids:
        raise VersionError("Can't determine version for document without pages")

    version = None
    pages: list[Page] = []
    for page_id in page_ids:
        rm_file = doc_path / f"{page_id}.rm"
        _logger.debug("Loading page %s", rm_file)
        lines_data = parse_file(rm_file)
        if version is None:
            version = lines_data.version
        elif version != lines_data.version:
            raise VersionError(
                f"Mixed versions: {rm_file.name} is version {lines_data.version}, "
                f"expected {version}"
            )
        pages.extend(lines_data.pages)

    pdf_path = None
    if document_type is DocumentType.PDF:
        pdf_path = _with_suffix(doc_path, ".pdf")

    return Bundle(
        orientation=orientation,
        document_type=document_type,
        version=version,
        pages=tuple(pages),
        pdf_path=pdf_path,
    )
