"""
Default HTML to styled text conversion.

`SpannedConverter` is the content handler that builds the output buffer. It
collapses whitespace in character data and styles the common inline and
block tags itself. Tags it does not know are ignored; list, link, table and
the other special tags are meant to be taken care of by `HtmlTagHandler`
before events get here (see `WrapperContentHandler`).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from xml.sax.handler import ContentHandler
from xml.sax.xmlreader import AttributesImpl

from htmltext.images import ImageGetter
from htmltext.spannable import SPAN_EXCLUSIVE_EXCLUSIVE, SPAN_MARK_MARK, SpannableBuilder
from htmltext.spans import (
    OBJECT_REPLACEMENT_CHARACTER,
    BulletSpan,
    ForegroundColorSpan,
    ImageSpan,
    QuoteSpan,
    RelativeSizeSpan,
    StrikethroughSpan,
    StyleSpan,
    SubscriptSpan,
    SuperscriptSpan,
    Typeface,
    TypefaceSpan,
    UnderlineSpan,
    URLSpan,
)

logger = logging.getLogger(__name__)

# Relative sizes for h1..h6
HEADER_SIZES: tuple[float, ...] = (1.5, 1.4, 1.3, 1.2, 1.1, 1.0)

BIG_SIZE = 1.25
SMALL_SIZE = 0.8

HTML_COLORS: dict[str, int] = {
    "aqua": 0x00FFFF,
    "black": 0x000000,
    "blue": 0x0000FF,
    "fuchsia": 0xFF00FF,
    "green": 0x008000,
    "grey": 0x808080,
    "gray": 0x808080,
    "lime": 0x00FF00,
    "maroon": 0x800000,
    "navy": 0x000080,
    "olive": 0x808000,
    "purple": 0x800080,
    "red": 0xFF0000,
    "silver": 0xC0C0C0,
    "teal": 0x008080,
    "white": 0xFFFFFF,
    "yellow": 0xFFFF00,
}

_HEX_COLOR = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

_WHITESPACE = " \n\r\t\f"


# Open-tag marks, placed in the buffer until their close tag arrives
@dataclass(eq=False)
class _Bold:
    pass


@dataclass(eq=False)
class _Italic:
    pass


@dataclass(eq=False)
class _Underline:
    pass


@dataclass(eq=False)
class _Strike:
    pass


@dataclass(eq=False)
class _Big:
    pass


@dataclass(eq=False)
class _Small:
    pass


@dataclass(eq=False)
class _Monospace:
    pass


@dataclass(eq=False)
class _Blockquote:
    pass


@dataclass(eq=False)
class _Super:
    pass


@dataclass(eq=False)
class _Sub:
    pass


@dataclass(eq=False)
class _Bullet:
    pass


@dataclass(eq=False)
class _Font:
    color: str | None
    face: str | None


@dataclass(eq=False)
class _Href:
    href: str | None


@dataclass(eq=False)
class _Header:
    level: int


# Simple inline tags: tag -> (mark type, span factory)
_INLINE_TAGS = {
    "strong": (_Bold, lambda: StyleSpan(Typeface.BOLD)),
    "b": (_Bold, lambda: StyleSpan(Typeface.BOLD)),
    "em": (_Italic, lambda: StyleSpan(Typeface.ITALIC)),
    "cite": (_Italic, lambda: StyleSpan(Typeface.ITALIC)),
    "dfn": (_Italic, lambda: StyleSpan(Typeface.ITALIC)),
    "i": (_Italic, lambda: StyleSpan(Typeface.ITALIC)),
    "big": (_Big, lambda: RelativeSizeSpan(BIG_SIZE)),
    "small": (_Small, lambda: RelativeSizeSpan(SMALL_SIZE)),
    "tt": (_Monospace, lambda: TypefaceSpan("monospace")),
    "u": (_Underline, lambda: UnderlineSpan()),
    "del": (_Strike, lambda: StrikethroughSpan()),
    "s": (_Strike, lambda: StrikethroughSpan()),
    "strike": (_Strike, lambda: StrikethroughSpan()),
    "sup": (_Super, lambda: SuperscriptSpan()),
    "sub": (_Sub, lambda: SubscriptSpan()),
}


def parse_html_color(value: str | None) -> int | None:
    """
    Parse an HTML color ("#rgb", "#rrggbb" or a basic color name).

    Returns:
        The opaque color as 0xAARRGGBB, or None if unrecognized
    """
    if not value:
        return None
    value = value.strip().lower()
    if value in HTML_COLORS:
        return 0xFF000000 | HTML_COLORS[value]
    match = _HEX_COLOR.match(value)
    if match is None:
        return None
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return 0xFF000000 | int(digits, 16)


class SpannedConverter(ContentHandler):
    """
    Builds a `SpannableBuilder` from parse events.

    Attributes:
        output: The buffer being built; also the conversion result.
    """

    def __init__(self, image_getter: ImageGetter | None = None) -> None:
        super().__init__()
        self.output = SpannableBuilder()
        self._image_getter = image_getter

    # ------------------------------------------------------------------
    # ContentHandler events
    # ------------------------------------------------------------------

    def startElement(self, name: str, attrs: AttributesImpl) -> None:
        self._handle_start_tag(name.lower(), attrs)

    def endElement(self, name: str) -> None:
        self._handle_end_tag(name.lower())

    def characters(self, content: str) -> None:
        """Append text, collapsing whitespace runs into a single space."""
        chars: list[str] = []
        for c in content:
            if c in _WHITESPACE:
                if chars:
                    pred = chars[-1]
                elif len(self.output) == 0:
                    pred = "\n"
                else:
                    pred = self.output.char_at(len(self.output) - 1)
                if pred != " " and pred != "\n":
                    chars.append(" ")
            else:
                chars.append(c)
        if chars:
            self.output.append("".join(chars))

    def ignorableWhitespace(self, whitespace: str) -> None:
        pass

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------

    def _handle_start_tag(self, tag: str, attrs: AttributesImpl) -> None:
        if tag == "br":
            # the new line is added at the end tag
            return
        if tag in ("p", "div", "ul"):
            self._handle_p()
        elif tag == "li":
            self._ensure_newline()
            self._start(_Bullet())
        elif tag in _INLINE_TAGS:
            self._start(_INLINE_TAGS[tag][0]())
        elif tag == "font":
            self._start(_Font(attrs.get("color"), attrs.get("face")))
        elif tag == "blockquote":
            self._handle_p()
            self._start(_Blockquote())
        elif tag == "a":
            self._start(_Href(attrs.get("href")))
        elif len(tag) == 2 and tag[0] == "h" and "1" <= tag[1] <= "6":
            self._handle_p()
            self._start(_Header(int(tag[1]) - 1))
        elif tag == "img":
            self._start_img(attrs)
        else:
            logger.debug(f"Ignoring unknown start tag: {tag}")

    def _handle_end_tag(self, tag: str) -> None:
        if tag == "br":
            self.output.append("\n")
        elif tag in ("p", "div", "ul"):
            self._handle_p()
        elif tag == "li":
            self._ensure_newline()
            self._end(_Bullet, BulletSpan())
        elif tag in _INLINE_TAGS:
            mark_type, factory = _INLINE_TAGS[tag]
            self._end(mark_type, factory())
        elif tag == "font":
            self._end_font()
        elif tag == "blockquote":
            self._handle_p()
            self._end(_Blockquote, QuoteSpan())
        elif tag == "a":
            mark = self.output.get_last_mark(_Href)
            href = mark.href if mark is not None else None
            self._end(_Href, URLSpan(href))
        elif len(tag) == 2 and tag[0] == "h" and "1" <= tag[1] <= "6":
            self._handle_p()
            self._end_header()
        else:
            logger.debug(f"Ignoring unknown end tag: {tag}")

    def _handle_p(self) -> None:
        """Make sure the buffer ends with a blank line, unless it is empty."""
        length = len(self.output)
        if length >= 1 and self.output.char_at(length - 1) == "\n":
            if length >= 2 and self.output.char_at(length - 2) == "\n":
                return
            self.output.append("\n")
            return
        if length != 0:
            self.output.append("\n\n")

    def _ensure_newline(self) -> None:
        if len(self.output) > 0 and not self.output.ends_with_newline():
            self.output.append("\n")

    def _start_img(self, attrs: AttributesImpl) -> None:
        source = attrs.get("src")
        drawable = None
        if self._image_getter is not None and source:
            drawable = self._image_getter.get_drawable(source)
        if drawable is None:
            logger.debug(f"No drawable for image source: {source!r}")
        length = len(self.output)
        self.output.append(OBJECT_REPLACEMENT_CHARACTER)
        self.output.set_span(ImageSpan(drawable, source), length, len(self.output), SPAN_EXCLUSIVE_EXCLUSIVE)

    def _end_font(self) -> None:
        mark = self.output.get_last_mark(_Font)
        if mark is None:
            return
        spans = []
        if mark.face:
            spans.append(TypefaceSpan(mark.face))
        color = parse_html_color(mark.color)
        if color is not None:
            spans.append(ForegroundColorSpan(color))
        self._end(_Font, *spans)

    def _end_header(self) -> None:
        mark = self.output.get_last_mark(_Header)
        if mark is None:
            return
        # the header's closing new lines stay outside its style
        where = self.output.get_span_start(mark)
        length = len(self.output)
        while length > where and self.output.char_at(length - 1) == "\n":
            length -= 1
        self.output.remove_span(mark)
        if where != length:
            self.output.set_span(RelativeSizeSpan(HEADER_SIZES[mark.level]), where, length)
            self.output.set_span(StyleSpan(Typeface.BOLD), where, length)

    def _start(self, mark: object) -> None:
        length = len(self.output)
        self.output.set_span(mark, length, length, SPAN_MARK_MARK)

    def _end(self, kind: type, *replaces: object) -> None:
        mark = self.output.get_last_mark(kind)
        if mark is None:
            return
        where = self.output.get_span_start(mark)
        length = len(self.output)
        self.output.remove_span(mark)
        if where != length:
            for replace in replaces:
                self.output.set_span(replace, where, length, SPAN_EXCLUSIVE_EXCLUSIVE)
