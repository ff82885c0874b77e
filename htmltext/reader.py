"""
Streaming HTML reader with a SAX interface.

`HtmlReader` tokenizes markup with the standard library `HTMLParser` and
reports it to an `xml.sax.handler.ContentHandler`, the same event interface
XML readers use. Tag names arrive lowercased. Void elements such as `<br>`
and `<img>` get their end event right after the start event, since HTML
never closes them. Nothing is auto-closed at the end of the document.
"""

from __future__ import annotations

import logging
from html.parser import HTMLParser
from xml.sax.handler import ContentHandler
from xml.sax.xmlreader import AttributesImpl

from core.errors import MarkupParseError

logger = logging.getLogger(__name__)

VOID_ELEMENTS: frozenset[str] = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)


class HtmlReader(HTMLParser):
    """
    Feeds parse events of an HTML string to a content handler.

    Example:
        >>> handler = ContentHandler()
        >>> HtmlReader(handler).parse("<p>Hello</p>")
    """

    def __init__(self, content_handler: ContentHandler) -> None:
        super().__init__(convert_charrefs=True)
        self.content_handler = content_handler

    def parse(self, html: str) -> None:
        """
        Parse a complete document.

        Raises:
            MarkupParseError: If the tokenizer rejects the markup.
        """
        self.content_handler.startDocument()
        try:
            self.feed(html)
            self.close()
        except (AssertionError, ValueError) as e:
            raise MarkupParseError(f"Cannot parse markup: {e}", self.getpos()) from e
        self.content_handler.endDocument()

    # ------------------------------------------------------------------
    # HTMLParser callbacks
    # ------------------------------------------------------------------

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self.content_handler.startElement(tag, self._attributes(attrs))
        if tag in VOID_ELEMENTS:
            self.content_handler.endElement(tag)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self.content_handler.startElement(tag, self._attributes(attrs))
        self.content_handler.endElement(tag)

    def handle_endtag(self, tag: str) -> None:
        if tag in VOID_ELEMENTS:
            logger.debug(f"Ignoring end tag of void element: {tag}")
            return
        self.content_handler.endElement(tag)

    def handle_data(self, data: str) -> None:
        if data:
            self.content_handler.characters(data)

    def handle_pi(self, data: str) -> None:
        # data is everything between "<?" and ">"
        target, _, rest = data.rstrip("?").partition(" ")
        self.content_handler.processingInstruction(target, rest.strip())

    @staticmethod
    def _attributes(attrs: list[tuple[str, str | None]]) -> AttributesImpl:
        # first occurrence wins for repeated attributes
        values: dict[str, str] = {}
        for name, value in attrs:
            values.setdefault(name, value if value is not None else "")
        return AttributesImpl(values)
