# -*- coding: utf-8 -*-
"""
Testes unitários para a álgebra de edição de legendas
"""

import pytest

from substudio.application.services import subtitle_editor as editor
from substudio.domain.models.subtitle import CueStyle, Subtitle


@pytest.fixture
def pair():
    return [Subtitle(0, 2, "a"), Subtitle(2, 4, "b")]


class TestInsertAfter:
    def test_between_two_cues(self):
        subs = [Subtitle(0, 2, "a"), Subtitle(5, 6, "b")]
        result = editor.insert_after(subs, 0)

        assert len(result) == 3
        assert result[1] == Subtitle(2, 5)
        assert result[0] is subs[0]
        assert result[2] is subs[1]

    def test_after_last_cue_lasts_one_second(self, pair):
        result = editor.insert_after(pair, 1)

        assert result[2] == Subtitle(4, 5)

    def test_empty_list(self):
        assert editor.insert_after([], 0) == [Subtitle(0, 1)]

    def test_does_not_mutate_input(self, pair):
        editor.insert_after(pair, 0)
        assert len(pair) == 2


class TestRemoveAndUpdate:
    def test_remove(self, pair):
        assert editor.remove(pair, 0) == [Subtitle(2, 4, "b")]

    def test_out_of_range_is_noop(self, pair):
        assert editor.remove(pair, 5) is pair
        assert editor.remove(pair, -1) is pair
        assert editor.update(pair, 9, Subtitle(0, 1)) is pair

    def test_update(self, pair):
        result = editor.update(pair, 1, Subtitle(2, 3, "c"))
        assert result[1].text == "c"
        assert pair[1].text == "b"


class TestSplitAt:
    def test_split_uses_temporal_midpoint(self):
        subs = [Subtitle(0, 4, "hello world", "ola mundo", CueStyle(color="#ff0000"))]
        first, second = editor.split_at(subs, 0, "text", 5)

        assert (first.start_time, first.end_time) == (0, 2)
        assert (second.start_time, second.end_time) == (2, 4)
        assert first.text == "hello"
        assert second.text == " world"
        # O outro campo é limpo apenas na segunda parte
        assert first.text2 == "ola mundo"
        assert second.text2 == ""
        assert first.style == second.style == subs[0].style

    def test_split_secondary_field(self):
        first, second = editor.split_at([Subtitle(1, 2, "main", "abcd")], 0, "text2", 2)

        assert first.text2 == "ab"
        assert second.text2 == "cd"
        assert first.text == "main"
        assert second.text == ""
        assert (first.end_time, second.start_time) == (1.5, 1.5)

    def test_offset_is_clamped(self):
        first, second = editor.split_at([Subtitle(0, 2, "abc")], 0, "text", 100)

        assert first.text == "abc"
        assert second.text == ""

        first, second = editor.split_at([Subtitle(0, 2, "abc")], 0, "text", -3)
        assert first.text == ""
        assert second.text == "abc"

    def test_invalid_field_or_index_is_noop(self, pair):
        assert editor.split_at(pair, 0, "style", 1) is pair
        assert editor.split_at(pair, 7, "text", 1) is pair

    def test_split_then_merge_restores_time_range(self):
        original = Subtitle(1.1, 3.7, "hello world", "ola")
        pieces = editor.split_at([original], 0, "text", 5)
        merged = editor.merge_adjacent(pieces, 1, "prev")

        assert len(merged) == 1
        assert merged[0].start_time == original.start_time
        assert merged[0].end_time == original.end_time
        assert merged[0].text2 == "ola"


class TestMergeAdjacent:
    def test_merge_prev(self, pair):
        assert editor.merge_adjacent(pair, 1, "prev") == [Subtitle(0, 4, "a b")]

    def test_merge_next(self, pair):
        assert editor.merge_adjacent(pair, 0, "next") == [Subtitle(0, 4, "a b")]

    def test_merge_concatenates_secondary_text(self):
        subs = [Subtitle(0, 1, "a", "x"), Subtitle(1, 2, "b", "")]
        assert editor.merge_adjacent(subs, 0, "next")[0].text2 == "x"

    def test_merge_keeps_style_of_first(self):
        subs = [Subtitle(0, 1, "a", style=CueStyle(color="#00ff00")), Subtitle(1, 2, "b", style=CueStyle(x=1, y=1))]
        assert editor.merge_adjacent(subs, 1, "prev")[0].style == CueStyle(color="#00ff00")

    def test_boundaries_are_noops(self, pair):
        assert editor.merge_adjacent(pair, 0, "prev") is pair
        assert editor.merge_adjacent(pair, 1, "next") is pair
        assert editor.merge_adjacent(pair, 0, "sideways") is pair
        assert editor.merge_adjacent([], 0, "next") == []

    def test_successive_merges_match_direct_merge(self):
        subs = [Subtitle(0, 2, "a"), Subtitle(2, 4, "b"), Subtitle(4, 6, "c")]
        stepwise = editor.merge_adjacent(editor.merge_adjacent(subs, 0, "next"), 0, "next")
        backwards = editor.merge_adjacent(editor.merge_adjacent(subs, 2, "prev"), 1, "prev")

        assert stepwise == [Subtitle(0, 6, "a b c")]
        assert backwards == stepwise


def test_swap_tracks():
    """Testa troca de texto principal e secundário"""
    result = editor.swap_tracks([Subtitle(0, 1, "a", "b"), Subtitle(1, 2, "c")])

    assert [(s.text, s.text2) for s in result] == [("b", "a"), ("", "c")]
    assert (result[0].start_time, result[0].end_time) == (0, 1)


def test_reset_styles():
    """Testa remoção das sobrescritas de estilo"""
    plain = Subtitle(1, 2, "b")
    result = editor.reset_styles([Subtitle(0, 1, "a", style=CueStyle(font_size=40)), plain])

    assert result[0].style.is_empty
    assert result[1] is plain


def test_illegal_indices():
    """Testa sinalização de legendas ilegais"""
    subs = [Subtitle(0, 1), Subtitle(2, 2), Subtitle(3, 1)]
    assert editor.illegal_indices(subs) == [1, 2]


class TestAlignSecondary:
    def test_closest_midpoint_wins(self):
        result = editor.align_secondary(
            [Subtitle(0, 5, "hi")],
            [Subtitle(1, 2, "x"), Subtitle(4, 6, "y")],
        )
        assert result[0].text2 == "x"
        assert result[0].text == "hi"

    def test_tie_keeps_earliest_candidate(self):
        result = editor.align_secondary(
            [Subtitle(0, 4, "p")],
            [Subtitle(0, 2, "first"), Subtitle(2, 4, "second")],
        )
        assert result[0].text2 == "first"

    def test_no_overlap_keeps_previous_text2(self):
        primary = [Subtitle(10, 11, "p", "keep")]
        result = editor.align_secondary(primary, [Subtitle(0, 10, "touching")])

        assert result[0].text2 == "keep"
        assert result[0] is primary[0]

    def test_alignment_is_by_time_not_index(self):
        primary = [Subtitle(0, 2, "a"), Subtitle(2, 4, "b")]
        secondary = [Subtitle(2.1, 3.9, "B"), Subtitle(0.1, 1.9, "A")]

        assert [s.text2 for s in editor.align_secondary(primary, secondary)] == ["A", "B"]

    def test_overlap(self):
        assert editor.overlap(Subtitle(0, 2), Subtitle(1, 3)) == 1
        assert editor.overlap(Subtitle(0, 1), Subtitle(1, 2)) == 0
