"""Tests for the SpannableBuilder output buffer."""

import pytest

from htmltext.spannable import SPAN_EXCLUSIVE_EXCLUSIVE, SPAN_MARK_MARK, SpannableBuilder


class Mark:
    pass


class TestText:
    def test_append_and_str(self):
        text = SpannableBuilder("ab").append("cd")
        assert str(text) == "abcd"
        assert len(text) == 4
        assert text[1:3] == "bc"
        assert text.char_at(3) == "d"

    def test_ends_with_newline(self):
        assert SpannableBuilder("a\n").ends_with_newline()
        assert not SpannableBuilder("a").ends_with_newline()
        assert not SpannableBuilder().ends_with_newline()

    def test_append_does_not_extend_spans(self):
        text = SpannableBuilder("bold")
        text.set_span("style", 0, 4)
        text.append(" plain")
        assert text.annotations() == [(0, 4, "style")]


class TestSpans:
    def test_set_span_out_of_range_raises(self):
        with pytest.raises(IndexError):
            SpannableBuilder("abc").set_span("x", 1, 5)

    def test_set_span_twice_moves_it(self):
        text = SpannableBuilder("abcdef")
        style = object()
        text.set_span(style, 0, 2)
        text.set_span(style, 3, 5)
        assert text.get_span_start(style) == 3
        assert text.annotations() == [(3, 5, style)]

    def test_unknown_span_positions(self):
        text = SpannableBuilder("abc")
        missing = object()
        assert text.get_span_start(missing) == -1

    def test_spans_are_identified_by_identity(self):
        text = SpannableBuilder("abc")
        first, second = Mark(), Mark()
        text.set_span(first, 0, 1)
        text.set_span(second, 1, 2)
        text.remove_span(first)
        assert text.annotations() == [(1, 2, second)]
        assert text.get_span_start(first) == -1

    def test_get_last_mark_ignores_styles(self):
        text = SpannableBuilder("abc")
        older, newer, styled = Mark(), Mark(), Mark()
        text.set_span(older, 0, 0, SPAN_MARK_MARK)
        text.set_span(newer, 1, 1, SPAN_MARK_MARK)
        text.set_span(styled, 0, 3, SPAN_EXCLUSIVE_EXCLUSIVE)
        assert text.get_last_mark(Mark) is newer

    def test_get_last_mark_none(self):
        assert SpannableBuilder("abc").get_last_mark(Mark) is None

    def test_annotations_sorted_outer_first_and_skip_marks(self):
        text = SpannableBuilder("abcdef")
        text.set_span("inner", 1, 3)
        text.set_span("later", 4, 5)
        text.set_span("outer", 1, 6)
        text.set_span(Mark(), 2, 2, SPAN_MARK_MARK)
        assert text.annotations() == [(1, 6, "outer"), (1, 3, "inner"), (4, 5, "later")]


class TestDelete:
    def test_delete_shifts_following_spans(self):
        text = SpannableBuilder("abcdef")
        text.set_span("tail", 4, 6)
        text.delete(0, 2)
        assert str(text) == "cdef"
        assert text.annotations() == [(2, 4, "tail")]

    def test_delete_shrinks_overlapping_span(self):
        text = SpannableBuilder("abcdef")
        text.set_span("style", 1, 5)
        text.delete(3, 6)
        assert text.annotations() == [(1, 3, "style")]

    def test_delete_drops_emptied_exclusive_span(self):
        text = SpannableBuilder("abcdef")
        text.set_span("style", 2, 4)
        text.delete(1, 5)
        assert str(text) == "af"
        assert text.annotations() == []

    def test_delete_keeps_marks_and_clamps_them(self):
        text = SpannableBuilder("abcdef")
        mark = Mark()
        text.set_span(mark, 4, 4, SPAN_MARK_MARK)
        text.delete(2, 6)
        assert text.get_span_start(mark) == 2

    def test_delete_out_of_range_raises(self):
        with pytest.raises(IndexError):
            SpannableBuilder("abc").delete(2, 5)

    def test_empty_delete_is_noop(self):
        text = SpannableBuilder("abc")
        text.set_span("style", 0, 3)
        text.delete(1, 1)
        assert str(text) == "abc"
        assert text.annotations() == [(0, 3, "style")]


class TestSubsequence:
    def test_subsequence_clips_spans(self):
        text = SpannableBuilder("item\n")
        text.set_span("bullet", 0, 5)
        head = text.subsequence(0, 4)
        assert str(head) == "item"
        assert head.annotations() == [(0, 4, "bullet")]

    def test_subsequence_shifts_and_drops(self):
        text = SpannableBuilder("abcdef")
        text.set_span("first", 0, 2)
        text.set_span("second", 3, 6)
        tail = text.subsequence(2, 6)
        assert str(tail) == "cdef"
        assert tail.annotations() == [(1, 4, "second")]

    def test_subsequence_leaves_original_alone(self):
        text = SpannableBuilder("abc")
        text.set_span("style", 0, 3)
        text.subsequence(0, 1)
        assert text.annotations() == [(0, 3, "style")]
