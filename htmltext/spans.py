"""
Style payloads attached to a `SpannableBuilder`.

Each class describes one kind of styling over a text range. Rendering is left
to the display surface; the list spans only carry the geometry it needs.
"""

from __future__ import annotations

import logging
import webbrowser
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from htmltext.images import Drawable

logger = logging.getLogger(__name__)

# Bullet geometry, in pixels
STANDARD_GAP_WIDTH = 2
STANDARD_BULLET_RADIUS = 4

OBJECT_REPLACEMENT_CHARACTER = "\ufffc"


class Typeface(Enum):
    BOLD = "bold"
    ITALIC = "italic"


class Alignment(Enum):
    ALIGN_NORMAL = "normal"
    ALIGN_CENTER = "center"
    ALIGN_OPPOSITE = "opposite"


class OnClickATagListener(ABC):
    """Receives link clicks instead of the default browser navigation."""

    @abstractmethod
    def on_click(self, widget: Any, href: str | None) -> None:
        """Handle a click on a link.

        Args:
            widget: The view the link was rendered in.
            href: The link target, or None when the tag had no href.
        """
        pass


@dataclass
class URLSpan:
    """A clickable link."""

    url: str | None
    on_click_a_tag_listener: OnClickATagListener | None = field(default=None, compare=False)

    def on_click(self, widget: Any) -> None:
        if self.on_click_a_tag_listener is not None:
            self.on_click_a_tag_listener.on_click(widget, self.url)
            return
        if self.url:
            logger.debug(f"Opening link in browser: {self.url}")
            webbrowser.open(self.url)


@dataclass
class TypefaceSpan:
    family: str


@dataclass
class StyleSpan:
    style: Typeface


@dataclass
class UnderlineSpan:
    pass


@dataclass
class StrikethroughSpan:
    pass


@dataclass
class RelativeSizeSpan:
    proportion: float


@dataclass
class SuperscriptSpan:
    pass


@dataclass
class SubscriptSpan:
    pass


@dataclass
class ForegroundColorSpan:
    """Text color as 0xAARRGGBB."""

    color: int


@dataclass
class QuoteSpan:
    pass


@dataclass
class AlignmentSpan:
    """Paragraph alignment. The styled range must end with a newline."""

    alignment: Alignment


@dataclass
class LeadingMarginSpan:
    """Indents every line of a paragraph."""

    first: int
    rest: int | None = None

    def __post_init__(self):
        if self.rest is None:
            self.rest = self.first

    def get_leading_margin(self, first: bool) -> int:
        return self.first if first else self.rest


@dataclass
class BulletSpan:
    """A bullet drawn in the leading margin, followed by `gap_width` pixels."""

    gap_width: int = STANDARD_GAP_WIDTH

    def get_leading_margin(self, first: bool) -> int:
        return 2 * STANDARD_BULLET_RADIUS + self.gap_width


@dataclass
class NumberSpan:
    """An ordered list label ("3. ") drawn in the leading margin."""

    gap_width: int
    number: int

    @property
    def label(self) -> str:
        return f"{self.number}. "

    def get_leading_margin(self, first: bool) -> int:
        return self.gap_width


@dataclass
class ImageSpan:
    """An inline image over a single object replacement character."""

    drawable: Drawable | None
    source: str | None = None
