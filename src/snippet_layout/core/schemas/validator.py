"""
Schema Validation Utilities

Validates serialized documents against `document.schema.json`
before they are turned into models, and checks the invariants JSON
Schema cannot express (element ids unique within a page).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from snippet_layout.core.errors import LayoutError

DOCUMENT_SCHEMA_VERSION = 1

# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(LayoutError):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_document(data: dict[str, Any]) -> None:
    """
    Validate document data against the schema.

    Args:
        data: Document dictionary as produced by serialize_document()

    Raises:
        ValidationError: If data is invalid
    """
    schema = _load_schema("document")
    validator = jsonschema.Draft7Validator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errors:
        messages = [f"{'/'.join(str(p) for p in e.path) or '<root>'}: {e.message}" for e in errors]
        first = errors[0]
        raise ValidationError(
            f"Document failed schema validation: {messages[0]}",
            path="/".join(str(p) for p in first.path),
            errors=messages,
        )

    version = data["schema_version"]
    if version > DOCUMENT_SCHEMA_VERSION:
        raise ValidationError(
            f"Unsupported schema_version {version} (max {DOCUMENT_SCHEMA_VERSION})",
            path="schema_version",
        )

    for index, page in enumerate(data["pages"]):
        seen: set[str] = set()
        ids = [s["asset_id"] for s in page.get("snippets", [])]
        ids += [t["id"] for t in page.get("texts", [])]
        ids += [s["id"] for s in page.get("shapes", [])]
        for element_id in ids:
            if element_id in seen:
                raise ValidationError(
                    f"Duplicate element id {element_id!r} on page {page['id']!r}",
                    path=f"pages/{index}",
                )
            seen.add(element_id)
