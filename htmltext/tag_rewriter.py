"""
Tag renaming applied before parsing.

The default converter handles `<ul>`, `<ol>`, `<li>` and `<a>` itself. We want
those tags to reach `HtmlTagHandler`, so they are renamed to names no real
document uses. A placeholder element is prepended so the parse always starts
with a tag the default converter does not know.

This is plain substring replacement: the tag prefixes are case-sensitive, and
matches inside attribute values or comments are rewritten too. `<a` also
matches `<abbr`, `<area`, `<aside` and friends, and `<li` matches `<link`.
"""

from __future__ import annotations

UNORDERED_LIST = "HTML_TEXTVIEW_ESCAPED_UL_TAG"
ORDERED_LIST = "HTML_TEXTVIEW_ESCAPED_OL_TAG"
LIST_ITEM = "HTML_TEXTVIEW_ESCAPED_LI_TAG"
A_ITEM = "HTML_TEXTVIEW_ESCAPED_A_TAG"
PLACEHOLDER_ITEM = "HTML_TEXTVIEW_ESCAPED_PLACEHOLDER"

# (original tag, escaped name), applied in order
TAG_OVERRIDES: tuple[tuple[str, str], ...] = (
    ("ul", UNORDERED_LIST),
    ("ol", ORDERED_LIST),
    ("li", LIST_ITEM),
    ("a", A_ITEM),
)


def override_tags(html: str | None) -> str | None:
    """
    Replace `<ul>`, `<ol>`, `<li>` and `<a>` with escaped tag names.

    Args:
        html: Markup, for example "<ul><li>Hello world!</li></ul>".

    Returns:
        The rewritten markup, or None for None input.
    """
    if html is None:
        return None
    html = f"<{PLACEHOLDER_ITEM}></{PLACEHOLDER_ITEM}>{html}"
    for tag, escaped in TAG_OVERRIDES:
        html = html.replace(f"<{tag}", f"<{escaped}")
        html = html.replace(f"</{tag}>", f"</{escaped}>")
    return html
