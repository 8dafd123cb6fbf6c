"""
Tests for arrange.engine

Each arrangement call is one undo step; calls that change nothing
record nothing.
"""

import pytest

from snippet_layout.arrange import ArrangementEngine, Dimension, Direction, Edge, GridSpec, RepackAnchor
from snippet_layout.core.models import Position
from snippet_layout.editor import state
from snippet_layout.editor.session import LayoutSession


@pytest.fixture
def session(populated_document):
    doc, _ = state.add_snippet_placement(populated_document, "p1", "s3", Position(500, 40), populated_document.pages[0].snippets[0].size)
    return LayoutSession(doc)


@pytest.fixture
def engine(session, library):
    return ArrangementEngine(session, library)


class TestArrangementEngine:
    """Tests for ArrangementEngine."""

    def test_grid_arrange_when_applied_then_single_undo_restores_all(self, engine, session):
        before = session.document

        changed = engine.grid_arrange("p1", ["s1", "s2", "s3"], GridSpec(cols=2, rows=3))

        assert changed is True
        assert len(session.history) == 1
        session.undo()
        assert session.document == before

    def test_align_when_too_few_members_then_no_snapshot(self, engine, session):
        assert engine.align("p1", ["s1"], Edge.TOP) is False
        assert len(session.history) == 0

    def test_align_when_already_aligned_then_no_snapshot(self, engine, session):
        engine.align("p1", ["s1", "s2"], Edge.TOP)
        assert len(session.history) == 0

    def test_distribute_then_unify_when_chained_then_two_steps(self, engine, session):
        assert engine.distribute("p1", ["s1", "s2", "s3"], Direction.HORIZONTAL) is True
        assert engine.unify_size("p1", ["s2", "s1"], Dimension.HEIGHT) is True
        assert len(session.history) == 2

    def test_pack_and_repack_when_applied_then_recorded(self, engine, session):
        assert engine.pack("p1", ["s1", "s2"], Direction.HORIZONTAL) is True
        assert engine.repack_page("p1", RepackAnchor.RIGHT_TOP) is True
        assert engine.repack_across_pages(RepackAnchor.LEFT_TOP) is True
        assert len(session.history) == 3

    def test_unify_all_pages_width_when_widths_differ_then_changed(self, engine, session):
        assert engine.unify_all_pages_width() is True
        assert {s.size.width for s in session.document.pages[0].snippets} == {120}

    def test_unknown_page_when_arranging_then_no_change(self, engine, session):
        assert engine.grid_arrange("nope", ["s1"], GridSpec()) is False
        assert session.undo() is False
