"""
HTML formatting entry point.

`format_html()` turns an HTML string into a `SpannableBuilder`:

1. Escape the list and link tags (`override_tags`).
2. Parse with `HtmlReader`, sending events through `WrapperContentHandler`
   so `HtmlTagHandler` sees every element before `SpannedConverter`.
3. Optionally strip the trailing new lines paragraph handling leaves behind.

Example:
    >>> text = format_html("<ul><li>one</li><li>two</li></ul>")
    >>> str(text)
    'one\\ntwo'
"""

from __future__ import annotations

import logging
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from core.config import get_config
from htmltext.content_handler import WrapperContentHandler
from htmltext.converter import SpannedConverter
from htmltext.images import ImageGetter
from htmltext.reader import HtmlReader
from htmltext.spannable import SpannableBuilder
from htmltext.spans import OnClickATagListener
from htmltext.tables import ClickableTableSpan, DrawTableLinkSpan
from htmltext.tag_handler import HtmlTagHandler
from htmltext.tag_rewriter import override_tags

logger = logging.getLogger(__name__)


class FormatterConfig(BaseModel):
    """Options for one `format_html_from_config()` call."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    html: str | None = Field(None, description="Markup to format.")
    image_getter: ImageGetter | None = Field(None, description="Resolves <img> sources.")
    clickable_table_span: ClickableTableSpan | None = Field(
        None, description="Prototype copied for every root table to handle clicks."
    )
    draw_table_link_span: DrawTableLinkSpan | None = Field(
        None, description="Prototype copied for every root table to draw its link."
    )
    on_click_a_tag_listener: OnClickATagListener | None = Field(
        None, description="Receives link clicks instead of the browser."
    )
    indent: Annotated[float, Field(ge=0)] | None = Field(
        default_factory=lambda: get_config().list_indent,
        description="List indentation in pixels; nested lists use multiples of it.",
    )
    remove_trailing_whitespace: bool = Field(
        default_factory=lambda: get_config().remove_trailing_whitespace,
        description="Strip trailing new lines from the result.",
    )
    debug: bool = Field(
        default_factory=lambda: get_config().debug,
        description="Log the whole buffer on every handled tag.",
    )


def format_html_from_config(config: FormatterConfig) -> SpannableBuilder | None:
    return format_html(
        config.html,
        image_getter=config.image_getter,
        clickable_table_span=config.clickable_table_span,
        draw_table_link_span=config.draw_table_link_span,
        on_click_a_tag_listener=config.on_click_a_tag_listener,
        indent=config.indent,
        remove_trailing_whitespace=config.remove_trailing_whitespace,
        debug=config.debug,
    )


def format_html(
    html: str | None,
    image_getter: ImageGetter | None = None,
    clickable_table_span: ClickableTableSpan | None = None,
    draw_table_link_span: DrawTableLinkSpan | None = None,
    on_click_a_tag_listener: OnClickATagListener | None = None,
    indent: float | None = None,
    remove_trailing_whitespace: bool = True,
    debug: bool = False,
) -> SpannableBuilder | None:
    """
    Convert HTML into styled text.

    Args:
        html: The markup; None gives None.
        image_getter: Resolves `<img>` sources; without one images render
            as empty image spans.
        clickable_table_span: Prototype for the click span of each table.
        draw_table_link_span: Prototype for the link-drawing span of each table.
        on_click_a_tag_listener: Receives link clicks.
        indent: List indentation in pixels; None for the built-in default.
        remove_trailing_whitespace: Strip trailing new lines.
        debug: Log the whole buffer on every handled tag.

    Returns:
        The styled text, or None for None input.

    Raises:
        MarkupParseError: If the markup cannot be tokenized.
    """
    if html is None:
        return None

    tag_handler = HtmlTagHandler(
        clickable_table_span=clickable_table_span,
        draw_table_link_span=draw_table_link_span,
        on_click_a_tag_listener=on_click_a_tag_listener,
        list_indent_px=indent,
        debug=debug,
    )
    html = override_tags(html)

    converter = SpannedConverter(image_getter)
    HtmlReader(WrapperContentHandler(tag_handler, converter)).parse(html)
    formatted = converter.output
    logger.debug(f"Formatted {len(formatted)} chars with {len(formatted.annotations())} span(s)")

    if remove_trailing_whitespace:
        return remove_html_bottom_padding(formatted)
    return formatted


def remove_html_bottom_padding(text: SpannableBuilder | None) -> SpannableBuilder | None:
    """
    Remove the new lines paragraph handling sometimes leaves at the end.

    Only "\\n" is removed; other trailing whitespace stays.
    """
    if text is None:
        return None
    while len(text) > 0 and text.char_at(len(text) - 1) == "\n":
        text = text.subsequence(0, len(text) - 1)
    return text
