"""
HTML to styled text.

Converts a small, fixed subset of HTML into a `SpannableBuilder`: plain text
plus style spans over character ranges, for display surfaces that do not
understand HTML.
"""

from htmltext.content_handler import WrapperContentHandler
from htmltext.converter import SpannedConverter
from htmltext.formatter import FormatterConfig, format_html, format_html_from_config, remove_html_bottom_padding
from htmltext.images import Drawable, ImageGetter, ResourceImageGetter
from htmltext.reader import HtmlReader
from htmltext.spannable import SPAN_EXCLUSIVE_EXCLUSIVE, SPAN_MARK_MARK, SpannableBuilder
from htmltext.tables import ClickableTableSpan, DrawTableLinkSpan
from htmltext.tag_handler import HtmlTagHandler
from htmltext.tag_rewriter import override_tags

__all__ = [
    "ClickableTableSpan",
    "Drawable",
    "DrawTableLinkSpan",
    "format_html",
    "format_html_from_config",
    "FormatterConfig",
    "HtmlReader",
    "HtmlTagHandler",
    "ImageGetter",
    "override_tags",
    "remove_html_bottom_padding",
    "ResourceImageGetter",
    "SPAN_EXCLUSIVE_EXCLUSIVE",
    "SPAN_MARK_MARK",
    "SpannableBuilder",
    "SpannedConverter",
    "WrapperContentHandler",
]
