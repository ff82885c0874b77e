"""
Mutable styled text buffer.

`SpannableBuilder` holds a character sequence and a list of spans anchored to
character offsets. It is the output buffer the formatter writes into and the
value it returns.

Only two span flags matter here because the buffer only grows by appending:

- `SPAN_MARK_MARK`: a zero-width position marker for an open tag.
- `SPAN_EXCLUSIVE_EXCLUSIVE`: a style range that never grows when text is
  inserted at its boundaries. Such a span is dropped once a deletion
  leaves it empty.

Example:
    >>> text = SpannableBuilder("Hello")
    >>> text.set_span("bold", 0, 5)
    >>> text.annotations()
    [(0, 5, 'bold')]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

SPAN_MARK_MARK = 0x11
SPAN_EXCLUSIVE_EXCLUSIVE = 0x21


@dataclass
class _SpanEntry:
    what: Any
    start: int
    end: int
    flags: int


class SpannableBuilder:
    """
    Text plus spans, with append and delete that keep span offsets valid.

    Spans are compared by identity, so the same payload object can only be
    attached once; setting it again moves it.
    """

    def __init__(self, text: str = "") -> None:
        self._text: str = text
        self._spans: list[_SpanEntry] = []

    # ------------------------------------------------------------------
    # Text access
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._text)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"SpannableBuilder({self._text!r}, spans={len(self._spans)})"

    def __getitem__(self, index: int | slice) -> str:
        return self._text[index]

    @property
    def text(self) -> str:
        return self._text

    def ends_with_newline(self) -> bool:
        return self._text.endswith("\n")

    def char_at(self, index: int) -> str:
        return self._text[index]

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def append(self, text: str) -> SpannableBuilder:
        """Append text. No span moves: appended text is outside every span."""
        self._text += text
        return self

    def delete(self, start: int, end: int) -> SpannableBuilder:
        """
        Delete `[start, end)` and shift spans accordingly.

        Span boundaries inside the deleted range collapse onto `start`.
        Exclusive spans that had content and end up empty are removed;
        marks are kept.
        """
        if not 0 <= start <= end <= len(self._text):
            raise IndexError(f"delete range [{start}, {end}) outside buffer of length {len(self._text)}")
        if start == end:
            return self

        removed = end - start

        def adjust(position: int) -> int:
            if position <= start:
                return position
            if position <= end:
                return start
            return position - removed

        self._text = self._text[:start] + self._text[end:]
        kept: list[_SpanEntry] = []
        for entry in self._spans:
            was_empty = entry.start == entry.end
            entry.start = adjust(entry.start)
            entry.end = adjust(entry.end)
            if entry.flags == SPAN_EXCLUSIVE_EXCLUSIVE and entry.start == entry.end and not was_empty:
                logger.debug(f"Dropped span emptied by deletion: {entry.what!r}")
                continue
            kept.append(entry)
        self._spans = kept
        return self

    # ------------------------------------------------------------------
    # Spans
    # ------------------------------------------------------------------

    def set_span(self, what: Any, start: int, end: int, flags: int = SPAN_EXCLUSIVE_EXCLUSIVE) -> None:
        if not 0 <= start <= end <= len(self._text):
            raise IndexError(f"span [{start}, {end}) outside buffer of length {len(self._text)}")
        entry = self._find(what)
        if entry is not None:
            entry.start, entry.end, entry.flags = start, end, flags
            return
        self._spans.append(_SpanEntry(what, start, end, flags))

    def remove_span(self, what: Any) -> None:
        self._spans = [entry for entry in self._spans if entry.what is not what]

    def get_span_start(self, what: Any) -> int:
        entry = self._find(what)
        return entry.start if entry is not None else -1

    def get_last_mark(self, kind: type) -> Any | None:
        """Get the most recently attached open mark of a kind, if any."""
        for entry in reversed(self._spans):
            if entry.flags == SPAN_MARK_MARK and isinstance(entry.what, kind):
                return entry.what
        return None

    def annotations(self) -> list[tuple[int, int, Any]]:
        """
        Get the style ranges as `(start, end, payload)` triples.

        Marks are excluded. Triples are sorted by start, then outermost
        first, then attachment order.
        """
        ordered = sorted(
            (
                (entry.start, -entry.end, index, entry)
                for index, entry in enumerate(self._spans)
                if entry.flags != SPAN_MARK_MARK
            ),
            key=lambda item: item[:3],
        )
        return [(entry.start, entry.end, entry.what) for _, _, _, entry in ordered]

    def subsequence(self, start: int, end: int) -> SpannableBuilder:
        """Copy `[start, end)` with its spans clipped to the new bounds."""
        if not 0 <= start <= end <= len(self._text):
            raise IndexError(f"subsequence [{start}, {end}) outside buffer of length {len(self._text)}")
        result = SpannableBuilder(self._text[start:end])
        for entry in self._spans:
            if entry.end < start or entry.start > end:
                continue
            new_start = max(entry.start, start) - start
            new_end = min(entry.end, end) - start
            if entry.flags == SPAN_EXCLUSIVE_EXCLUSIVE and new_start == new_end and entry.start != entry.end:
                continue
            result._spans.append(_SpanEntry(entry.what, new_start, new_end, entry.flags))
        return result

    def _find(self, what: Any) -> _SpanEntry | None:
        for entry in self._spans:
            if entry.what is what:
                return entry
        return None
