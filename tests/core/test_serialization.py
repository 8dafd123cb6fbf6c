"""
Tests for document serialization and schema validation.

Test Coverage:
- serialize_document(): adds schema_version, passes validation
- save_document()/load_document(): file round trip
- validate_document(): schema errors, version check, duplicate ids
"""

import json

import pytest

from snippet_layout.core.errors import LayoutError
from snippet_layout.core.models import (
    Document,
    Margin,
    Orientation,
    Page,
    PaperSize,
    PlacedSnippet,
    Position,
    ShapeElement,
    ShapeKind,
    Size,
    TextElement,
    WritingMode,
)
from snippet_layout.core.schemas import DOCUMENT_SCHEMA_VERSION, ValidationError, validate_document
from snippet_layout.core.utils import deserialize_document, load_document, save_document, serialize_document


@pytest.fixture
def mixed_document():
    page = Page(
        id="p1",
        paper_size=PaperSize.B4,
        orientation=Orientation.LANDSCAPE,
        margin=None,
        snippets=(PlacedSnippet("s1", Position(10, 20), Size(120, 80)),),
        texts=(TextElement(id="t1", content="縦書き", position=Position(5, 5), writing_mode=WritingMode.VERTICAL),),
        shapes=(ShapeElement(id="c1", shape_kind=ShapeKind.CIRCLE, position=Position(0, 0), size=Size(40, 40), fill_color="#ff0000"),),
    )
    return Document(pages=(page,), active_page_id="p1", default_margin=Margin(12, 18))


class TestSerialization:
    """Tests for document (de)serialization."""

    def test_serialize_when_document_then_includes_schema_version(self, mixed_document):
        data = serialize_document(mixed_document)
        assert data["schema_version"] == DOCUMENT_SCHEMA_VERSION
        validate_document(data)

    def test_deserialize_when_serialized_then_equal_document(self, mixed_document):
        restored = deserialize_document(serialize_document(mixed_document))
        assert restored == mixed_document

    def test_save_and_load_when_unicode_content_then_preserved(self, mixed_document, tmp_path):
        # Arrange
        path = tmp_path / "docs" / "layout.json"

        # Act
        save_document(mixed_document, path)
        loaded = load_document(path)

        # Assert
        assert loaded.pages[0].texts[0].content == "縦書き"
        assert "縦書き" in path.read_text(encoding="utf-8")
        assert not list(path.parent.glob("*.tmp"))


class TestValidation:
    """Tests for validate_document()."""

    def test_validate_when_missing_pages_then_raises_error(self):
        with pytest.raises(ValidationError, match="schema validation"):
            validate_document({"schema_version": 1})

    def test_validate_when_unknown_paper_size_then_error_path_points_at_page(self):
        data = {"schema_version": 1, "pages": [{"id": "p", "paper_size": "Letter", "orientation": "portrait"}]}
        with pytest.raises(ValidationError) as exc_info:
            validate_document(data)
        assert exc_info.value.path.startswith("pages/0")

    def test_validate_when_newer_schema_version_then_raises_error(self):
        with pytest.raises(ValidationError, match="Unsupported schema_version"):
            validate_document({"schema_version": DOCUMENT_SCHEMA_VERSION + 1, "pages": []})

    def test_validate_when_duplicate_ids_across_collections_then_raises_error(self, mixed_document):
        data = serialize_document(mixed_document)
        data["pages"][0]["texts"][0]["id"] = "s1"
        with pytest.raises(ValidationError, match="Duplicate element id 's1'"):
            validate_document(data)

    def test_validation_error_when_raised_then_is_layout_error(self):
        with pytest.raises(LayoutError):
            validate_document({"pages": []})

    def test_load_when_not_json_then_raises_decode_error(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(json.JSONDecodeError):
            load_document(path)
