"""
Serialization Utilities

Provides to/from JSON utilities for documents.

- Every model has `to_dict()` and `from_dict()` methods
- `serialize_document` adds the schema version
- `deserialize_document` validates against the schema before parsing
- Files are written through a temp file and renamed, so a failed
  save never leaves a truncated document behind
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from ..models.document import Document
from ..schemas.validator import DOCUMENT_SCHEMA_VERSION, validate_document

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Document Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_document(document: Document) -> dict[str, Any]:
    """
    Serialize a Document to a dictionary.

    The output can be written to JSON and will pass schema validation.

    Args:
        document: Document to serialize

    Returns:
        Dictionary suitable for JSON serialization
    """
    data = document.to_dict()
    data["schema_version"] = DOCUMENT_SCHEMA_VERSION
    return data


def deserialize_document(data: dict[str, Any], *, validate: bool = True) -> Document:
    """
    Deserialize a Document from a dictionary.

    Args:
        data: Dictionary from JSON
        validate: Whether to validate against schema first

    Returns:
        Document instance

    Raises:
        ValidationError: If validate=True and data is invalid
    """
    if validate:
        validate_document(data)
    return Document.from_dict(data)


# ─────────────────────────────────────────────────────────────────────────────
# File I/O
# ─────────────────────────────────────────────────────────────────────────────

def save_document(document: Document, path: Path) -> None:
    """
    Write a document as JSON.

    Args:
        document: Document to save
        path: Target .json file

    Raises:
        OSError: If the file cannot be written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(serialize_document(document), ensure_ascii=False, indent=2)

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
        os.replace(tmp_name, path)
    except OSError:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.debug(f"Saved document with {document.page_count} pages to {path}")


def load_document(path: Path, *, validate: bool = True) -> Document:
    """
    Read a document from JSON.

    Raises:
        OSError: If the file cannot be read
        json.JSONDecodeError: If the file is not JSON
        ValidationError: If the content fails validation
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    document = deserialize_document(data, validate=validate)
    logger.debug(f"Loaded document with {document.page_count} pages from {path}")
    return document
