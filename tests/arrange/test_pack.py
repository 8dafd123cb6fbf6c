"""
Tests for arrange.pack

Test Coverage:
- pack(): abut members with no gap
- repack_page(): shelf rows from the left or right edge, overflow kept
- repack_across_pages(): new pages, empty-page removal, duplicates, id clashes
"""

import itertools

import pytest

from snippet_layout.arrange.align import Direction
from snippet_layout.arrange.pack import RepackAnchor, pack, repack_across_pages, repack_page
from snippet_layout.core.models import (
    Document,
    Orientation,
    Page,
    PaperSize,
    PlacedSnippet,
    Position,
    Size,
    TextElement,
)

PRINTABLE_WIDTH = 680


@pytest.fixture
def ids():
    counter = itertools.count(1)
    return lambda: f"new{next(counter)}"


def _page(page_id, *snippets, texts=(), paper=PaperSize.A4):
    return Page(
        id=page_id,
        paper_size=paper,
        orientation=Orientation.PORTRAIT,
        snippets=tuple(snippets),
        texts=tuple(texts),
    )


def _big(asset_id, x=0, y=0):
    return PlacedSnippet(asset_id, Position(x, y), Size(600, 600))


class TestPack:
    """Tests for pack()."""

    def test_pack_when_horizontal_then_members_abut(self, populated_document):
        doc = pack(populated_document, "p1", ["s2", "s1"], Direction.HORIZONTAL)
        page = doc.pages[0]
        assert page.find("s1").position == Position(0, 0)
        assert page.find("s2").position == Position(120, 0)

    def test_pack_when_vertical_then_cross_axis_kept(self, populated_document):
        doc = pack(populated_document, "p1", ["s1", "s2"], Direction.VERTICAL)
        assert doc.pages[0].find("s2").position == Position(200, 80)


class TestRepackPage:
    """Tests for repack_page()."""

    def test_repack_when_left_top_then_row_from_left_in_creation_order(self, library):
        # Arrange: s2 first on the page, but s1 was created first
        doc = Document(pages=(_page("p1", PlacedSnippet("s2", Position(9, 9), Size(200, 100)),
                                    PlacedSnippet("s1", Position(400, 400), Size(120, 80))),))

        # Act
        doc = repack_page(doc, "p1", RepackAnchor.LEFT_TOP, library)

        # Assert
        page = doc.pages[0]
        assert page.find("s1").position == Position(0, 0)
        assert page.find("s2").position == Position(120, 0)

    def test_repack_when_right_top_then_row_from_right(self, populated_document, library):
        doc = repack_page(populated_document, "p1", RepackAnchor.RIGHT_TOP, library)
        page = doc.pages[0]
        assert page.find("s1").position == Position(PRINTABLE_WIDTH - 120, 0)
        assert page.find("s2").position == Position(PRINTABLE_WIDTH - 320, 0)

    def test_repack_when_row_full_then_next_shelf_below_tallest(self):
        doc = Document(pages=(_page("p1", PlacedSnippet("a", Position(0, 0), Size(400, 100)),
                                    PlacedSnippet("b", Position(0, 0), Size(400, 50))),))
        doc = repack_page(doc, "p1", RepackAnchor.LEFT_TOP)
        assert doc.pages[0].find("b").position == Position(0, 100)

    def test_repack_when_overflowing_bottom_then_snippet_keeps_position(self):
        doc = Document(pages=(_page("p1", _big("a"), _big("b", 5, 5)),))
        doc = repack_page(doc, "p1", RepackAnchor.LEFT_TOP)
        assert doc.pages[0].find("b").position == Position(5, 5)


class TestRepackAcrossPages:
    """Tests for repack_across_pages()."""

    def test_repack_when_overflow_then_new_pages_appended(self, ids):
        doc = Document(pages=(_page("p1", _big("a"), _big("b"), _big("c")),), active_page_id="p1")

        doc = repack_across_pages(doc, RepackAnchor.LEFT_TOP, id_factory=ids)

        assert [p.id for p in doc.pages] == ["p1", "new1", "new2"]
        assert all(len(p.snippets) == 1 for p in doc.pages)
        assert doc.active_page_id == "p1"

    def test_repack_when_everything_fits_then_empty_pages_removed(self, ids):
        doc = Document(pages=(
            _page("p1", PlacedSnippet("a", Position(0, 0), Size(100, 100))),
            _page("p2", PlacedSnippet("b", Position(0, 0), Size(100, 100))),
        ))

        doc = repack_across_pages(doc, RepackAnchor.LEFT_TOP, id_factory=ids)

        assert [p.id for p in doc.pages] == ["p1"]
        assert doc.pages[0].find("b").position == Position(100, 0)

    def test_repack_when_emptied_page_has_text_then_page_kept(self, ids):
        text = TextElement(id="t1", content="note", position=Position(0, 0))
        doc = Document(pages=(
            _page("p1", PlacedSnippet("a", Position(0, 0), Size(100, 100))),
            _page("p2", PlacedSnippet("b", Position(0, 0), Size(100, 100)), texts=(text,)),
        ))

        doc = repack_across_pages(doc, RepackAnchor.LEFT_TOP, id_factory=ids)

        assert [p.id for p in doc.pages] == ["p1", "p2"]
        assert doc.pages[1].snippets == ()
        assert doc.pages[1].texts == (text,)

    def test_repack_when_asset_on_two_pages_then_never_duplicated_on_one(self, ids):
        doc = Document(pages=(
            _page("p1", PlacedSnippet("a", Position(0, 0), Size(100, 100))),
            _page("p2", PlacedSnippet("a", Position(0, 0), Size(100, 100))),
        ))

        doc = repack_across_pages(doc, RepackAnchor.LEFT_TOP, id_factory=ids)

        assert doc.page_count == 2
        for page in doc.pages:
            assert len({s.asset_id for s in page.snippets}) == len(page.snippets)

    def test_repack_when_pages_differ_then_first_page_paper_used(self, ids):
        doc = Document(pages=(
            _page("p1", PlacedSnippet("a", Position(0, 0), Size(100, 100))),
            _page("p2", PlacedSnippet("b", Position(0, 0), Size(100, 100)), paper=PaperSize.A3,
                  texts=(TextElement(id="t1", content="x", position=Position(0, 0)),)),
        ))

        doc = repack_across_pages(doc, RepackAnchor.LEFT_TOP, id_factory=ids)

        assert {p.paper_size for p in doc.pages} == {PaperSize.A4}

    def test_repack_when_asset_id_taken_by_text_then_placement_moves_to_next_page(self, ids):
        # Arrange: text "a" on p1 blocks snippet "a" from landing there
        doc = Document(pages=(
            _page("p1", PlacedSnippet("b", Position(0, 0), Size(100, 100)),
                  texts=(TextElement(id="a", content="x", position=Position(300, 300)),)),
            _page("p2", PlacedSnippet("a", Position(50, 50), Size(100, 100))),
        ))

        # Act
        doc = repack_across_pages(doc, RepackAnchor.LEFT_TOP, id_factory=ids)

        # Assert: nothing lost
        assert [s.asset_id for s in doc.pages[0].snippets] == ["b"]
        assert [s.asset_id for s in doc.pages[1].snippets] == ["a"]
        assert doc.pages[1].snippets[0].position == Position(0, 0)
