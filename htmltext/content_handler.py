"""
Content handler that puts `HtmlTagHandler` in front of the default converter.

Every start and end element is offered to the tag handler first and only
forwarded when the tag handler declines it. All other events pass through
untouched, so character data still lands in the buffer through the default
converter.
"""

from __future__ import annotations

import logging
from xml.sax.handler import ContentHandler
from xml.sax.xmlreader import AttributesImpl, Locator

from htmltext.spannable import SpannableBuilder
from htmltext.tag_handler import HtmlTagHandler

logger = logging.getLogger(__name__)


class WrapperContentHandler(ContentHandler):
    """
    Filters element events through a tag handler.

    Args:
        tag_handler: Gets the first look at every start and end element.
        content_handler: Receives everything the tag handler declines.
        output: Buffer passed to the tag handler; defaults to the content
            handler's `output` attribute.
    """

    def __init__(
        self,
        tag_handler: HtmlTagHandler,
        content_handler: ContentHandler,
        output: SpannableBuilder | None = None,
    ) -> None:
        super().__init__()
        if output is None:
            output = getattr(content_handler, "output", None)
        if output is None:
            raise ValueError("content_handler has no output buffer; pass output explicitly")
        self._tag_handler = tag_handler
        self._content_handler = content_handler
        self._output = output

    def setDocumentLocator(self, locator: Locator) -> None:
        self._content_handler.setDocumentLocator(locator)

    def startDocument(self) -> None:
        self._content_handler.startDocument()

    def endDocument(self) -> None:
        self._content_handler.endDocument()

    def startPrefixMapping(self, prefix: str | None, uri: str) -> None:
        self._content_handler.startPrefixMapping(prefix, uri)

    def endPrefixMapping(self, prefix: str | None) -> None:
        self._content_handler.endPrefixMapping(prefix)

    def startElement(self, name: str, attrs: AttributesImpl) -> None:
        if not self._tag_handler.handle_tag(True, name, self._output, attrs):
            self._content_handler.startElement(name, attrs)

    def endElement(self, name: str) -> None:
        if not self._tag_handler.handle_tag(False, name, self._output, None):
            self._content_handler.endElement(name)

    def characters(self, content: str) -> None:
        self._content_handler.characters(content)

    def ignorableWhitespace(self, whitespace: str) -> None:
        self._content_handler.ignorableWhitespace(whitespace)

    def processingInstruction(self, target: str, data: str) -> None:
        self._content_handler.processingInstruction(target, data)

    def skippedEntity(self, name: str) -> None:
        self._content_handler.skippedEntity(name)
