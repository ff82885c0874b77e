"""
Tag handler for the tags the default converter gets wrong or ignores.

`HtmlTagHandler.handle_tag()` is offered every start and end element before
the default converter sees it. It handles lists (with nesting and numbering),
links with a click hook, `<code>`, `<center>`, `<s>`/`<strike>` and tables,
and returns False for everything else.

Open tags put a `Marker` into the output buffer as a zero-width mark and onto
a per-kind stack. Closing a tag pops the newest marker of that kind and turns
the text written since then into styled spans.

Tables are not rendered inline. While inside a table, every closing tag cuts
its text out of the buffer into `table_html`, together with a lowercase copy
of every tag. Escaped list and link tags are recorded under their real names.
The root table is replaced by a short placeholder word carrying a
`DrawTableLinkSpan` and a `ClickableTableSpan`.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any
from xml.sax.xmlreader import AttributesImpl

from htmltext.spannable import SPAN_EXCLUSIVE_EXCLUSIVE, SPAN_MARK_MARK, SpannableBuilder
from htmltext.spans import (
    Alignment,
    AlignmentSpan,
    BulletSpan,
    LeadingMarginSpan,
    NumberSpan,
    OnClickATagListener,
    StrikethroughSpan,
    TypefaceSpan,
    URLSpan,
)
from htmltext.tables import ClickableTableSpan, DrawTableLinkSpan
from htmltext.tag_rewriter import A_ITEM, LIST_ITEM, ORDERED_LIST, UNORDERED_LIST

logger = logging.getLogger(__name__)

DEFAULT_INDENT = 10
DEFAULT_LIST_ITEM_INDENT = DEFAULT_INDENT * 2
DEFAULT_BULLET = BulletSpan(DEFAULT_INDENT)

# Some text for the table span to cover; tags closed inside the table remove
# their own text from the buffer.
TABLE_PLACEHOLDER = "table placeholder"

MONOSPACE_FAMILY = "monospace"


class MarkerKind(Enum):
    UL = "ul"
    OL = "ol"
    A = "a"
    CODE = "code"
    CENTER = "center"
    STRIKE = "strike"
    TABLE = "table"
    TR = "tr"
    TH = "th"
    TD = "td"


@dataclass(eq=False)
class Marker:
    """An open tag of some kind; its offset lives in the buffer as a mark."""

    kind: MarkerKind
    href: str | None = None


# Tag name (lowercase) -> marker kind, for tags that just open a bare marker
_BARE_TAGS: dict[str, MarkerKind] = {
    "code": MarkerKind.CODE,
    "center": MarkerKind.CENTER,
    "s": MarkerKind.STRIKE,
    "strike": MarkerKind.STRIKE,
    "tr": MarkerKind.TR,
    "th": MarkerKind.TH,
    "td": MarkerKind.TD,
}

_UL = UNORDERED_LIST.lower()
_OL = ORDERED_LIST.lower()
_LI = LIST_ITEM.lower()
_A = A_ITEM.lower()

# Escaped names go back to the real tag names in captured table markup
_CAPTURED_NAMES: dict[str, str] = {_UL: "ul", _OL: "ol", _LI: "li", _A: "a"}


def _round_px(px: float) -> int:
    """Round half up, the way pixel sizes are rounded."""
    return int(math.floor(px + 0.5))


class HtmlTagHandler:
    """
    Handles list, link, code, center, strike and table tags.

    One instance serves exactly one formatting call.

    Attributes:
        lists: Open lists, outermost first (escaped ul/ol tag names).
        ol_next_index: Next item number per open ordered list, so an outer
            list resumes its numbering after a nested list closes.
        table_html: Markup of the current root table, rebuilt from the tags
            and cut-out text seen while inside it.
        table_tag_level: Current `<table>` nesting depth.

    Set `debug` to log the whole buffer on every tag.
    """

    def __init__(
        self,
        clickable_table_span: ClickableTableSpan | None = None,
        draw_table_link_span: DrawTableLinkSpan | None = None,
        on_click_a_tag_listener: OnClickATagListener | None = None,
        list_indent_px: float | None = None,
        debug: bool = False,
    ) -> None:
        self.lists: list[str] = []
        self.ol_next_index: list[int] = []
        self.table_html: str = ""
        self.table_tag_level: int = 0
        self._markers: dict[MarkerKind, list[Marker]] = {kind: [] for kind in MarkerKind}
        self._clickable_table_span = clickable_table_span
        self._draw_table_link_span = draw_table_link_span
        self._on_click_a_tag_listener = on_click_a_tag_listener
        self._debug = debug
        self._user_given_indent = -1
        if list_indent_px is not None:
            self.set_list_indent_px(list_indent_px)

    def set_list_indent_px(self, px: float) -> None:
        self._user_given_indent = _round_px(px)

    def handle_tag(
        self,
        opening: bool,
        tag: str,
        output: SpannableBuilder,
        attributes: AttributesImpl | None = None,
    ) -> bool:
        """
        Handle one start or end element.

        Args:
            opening: True for a start element.
            tag: Element name, any case.
            output: The buffer the parse writes into.
            attributes: Element attributes (start elements only).

        Returns:
            True if the tag was handled here and must not reach the default
            converter.
        """
        name = tag.lower()
        if opening:
            if self._debug:
                logger.debug(f"opening, output: {str(output)!r}")
            handled = self._handle_open(name, output, attributes)
        else:
            if self._debug:
                logger.debug(f"closing, output: {str(output)!r}")
            handled = self._handle_close(name, output)
        if handled:
            self._store_table_tag(opening, name)
        return handled

    def _handle_open(self, name: str, output: SpannableBuilder, attributes: AttributesImpl | None) -> bool:
        if name == _UL:
            self.lists.append(name)
        elif name == _OL:
            self.lists.append(name)
            self.ol_next_index.append(1)
        elif name == _LI:
            if len(output) > 0 and not output.ends_with_newline():
                output.append("\n")
            if self.lists:
                parent_list = self.lists[-1]
                if parent_list == _OL:
                    self._start(output, Marker(MarkerKind.OL))
                    self.ol_next_index[-1] += 1
                elif parent_list == _UL:
                    self._start(output, Marker(MarkerKind.UL))
        elif name == _A:
            href = attributes.get("href") if attributes is not None else None
            self._start(output, Marker(MarkerKind.A, href=href))
        elif name in _BARE_TAGS:
            self._start(output, Marker(_BARE_TAGS[name]))
        elif name == "table":
            self._start(output, Marker(MarkerKind.TABLE))
            if self.table_tag_level == 0:
                self.table_html = ""
                output.append(TABLE_PLACEHOLDER)
            self.table_tag_level += 1
        else:
            return False
        return True

    def _handle_close(self, name: str, output: SpannableBuilder) -> bool:
        if name in (_UL, _OL):
            self._close_list(name)
        elif name == _LI:
            self._close_list_item(output)
        elif name == _A:
            marker = self._peek(MarkerKind.A)
            href = marker.href if marker is not None else None
            self._end(output, MarkerKind.A, False, URLSpan(href, self._on_click_a_tag_listener))
        elif name == "code":
            self._end(output, MarkerKind.CODE, False, TypefaceSpan(MONOSPACE_FAMILY))
        elif name == "center":
            self._end(output, MarkerKind.CENTER, True, AlignmentSpan(Alignment.ALIGN_CENTER))
        elif name in ("s", "strike"):
            self._end(output, MarkerKind.STRIKE, False, StrikethroughSpan())
        elif name == "table":
            self._close_table(output)
        elif name in ("tr", "th", "td"):
            self._end(output, _BARE_TAGS[name], False)
        else:
            return False
        return True

    def _close_list(self, name: str) -> None:
        if not self.lists:
            logger.debug(f"Unmatched list close: {name}")
            return
        popped = self.lists.pop()
        if popped == _OL and self.ol_next_index:
            self.ol_next_index.pop()

    def _close_list_item(self, output: SpannableBuilder) -> None:
        if not self.lists:
            return
        depth = len(self.lists)
        list_item_indent = self._user_given_indent * 2 if self._user_given_indent > -1 else DEFAULT_LIST_ITEM_INDENT
        indent = self._user_given_indent if self._user_given_indent > -1 else DEFAULT_INDENT

        if not output.ends_with_newline() and len(output) > 0:
            output.append("\n")

        if self.lists[-1] == _UL:
            # Nested bullets would otherwise push the text further right with every level
            bullet = BulletSpan(self._user_given_indent) if self._user_given_indent > -1 else DEFAULT_BULLET
            if depth > 1:
                indent -= bullet.get_leading_margin(True)
                if depth > 2:
                    # the LeadingMarginSpan on the same line adds up as well
                    indent -= (depth - 2) * list_item_indent
            self._end(
                output,
                MarkerKind.UL,
                False,
                LeadingMarginSpan(list_item_indent * (depth - 1)),
                BulletSpan(indent),
            )
        elif self.lists[-1] == _OL:
            number = self.ol_next_index[-1] - 1
            span = NumberSpan(indent, number)
            if depth > 1:
                indent -= span.get_leading_margin(True)
                if depth > 2:
                    indent -= (depth - 2) * list_item_indent
            self._end(
                output,
                MarkerKind.OL,
                False,
                LeadingMarginSpan(list_item_indent * (depth - 1)),
                NumberSpan(indent, number),
            )

    def _close_table(self, output: SpannableBuilder) -> None:
        if self.table_tag_level == 0:
            logger.debug("Unmatched table close")
            return
        self.table_tag_level -= 1
        if self.table_tag_level > 0:
            self._end(output, MarkerKind.TABLE, False)
            return

        # back at the root table: its close tag completes the captured markup
        self.table_html += "</table>"
        spans: list[Any] = []
        if self._draw_table_link_span is not None:
            draw_span = self._draw_table_link_span.new_instance()
            draw_span.table_html = self.table_html
            spans.append(draw_span)
        if self._clickable_table_span is not None:
            clickable_span = self._clickable_table_span.new_instance()
            clickable_span.table_html = self.table_html
            spans.append(clickable_span)
        logger.debug(f"Captured table markup: {self.table_html!r}")
        self._end(output, MarkerKind.TABLE, False, *spans)

    def _store_table_tag(self, opening: bool, name: str) -> None:
        """Record the tag in `table_html` while inside a table."""
        if not opening and name == "table" and self.table_tag_level == 0:
            # root close tag was recorded before the table spans were built
            return
        if self.table_tag_level > 0 or name == "table":
            name = _CAPTURED_NAMES.get(name, name)
            self.table_html += f"<{name}>" if opening else f"</{name}>"

    def _start(self, output: SpannableBuilder, marker: Marker) -> None:
        """Mark the opening tag at the end of the buffer."""
        length = len(output)
        output.set_span(marker, length, length, SPAN_MARK_MARK)
        self._markers[marker.kind].append(marker)
        if self._debug:
            logger.debug(f"len: {length}")

    def _peek(self, kind: MarkerKind) -> Marker | None:
        stack = self._markers[kind]
        return stack[-1] if stack else None

    def _end(self, output: SpannableBuilder, kind: MarkerKind, paragraph_style: bool, *replaces: Any) -> None:
        """
        Close the newest marker of `kind` and attach `replaces` over its text.

        Inside a table the text is cut out into `table_html` instead, which
        leaves nothing to style.
        """
        stack = self._markers[kind]
        if not stack:
            logger.debug(f"No open {kind.value} marker, ignoring close tag")
            return
        marker = stack.pop()
        where = output.get_span_start(marker)
        if where < 0:
            return

        if self.table_tag_level > 0:
            self.table_html += self._extract_span_text(output, where)

        output.remove_span(marker)
        length = len(output)
        if where != length:
            # paragraph styles like AlignmentSpan need to end with a new line
            if paragraph_style and not output.ends_with_newline():
                output.append("\n")
            this_len = len(output)
            for replace in replaces:
                output.set_span(replace, where, this_len, SPAN_EXCLUSIVE_EXCLUSIVE)
            logger.debug(f"Attached {len(replaces)} span(s) for {kind.value}: range [{where}, {this_len})")

    @staticmethod
    def _extract_span_text(output: SpannableBuilder, where: int) -> str:
        """Return the text from `where` to the end and delete it from the buffer."""
        length = len(output)
        extracted = output[where:length]
        output.delete(where, length)
        return extracted
