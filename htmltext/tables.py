"""
Spans that stand in for a whole `<table>`.

Tables are not laid out inline. The formatter collects the table's markup and
hands it to fresh copies of these spans, one pair per root table, so a
display surface can draw a "view table" link and open the table elsewhere.
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from typing import Any

DEFAULT_TABLE_LINK_TEXT = ""
DEFAULT_TEXT_SIZE = 80.0
DEFAULT_COLOR = 0xFF0000FF  # blue


class ClickableTableSpan(ABC):
    """Reacts to a click on a rendered table placeholder."""

    def __init__(self) -> None:
        self.table_html: str | None = None

    @abstractmethod
    def new_instance(self) -> ClickableTableSpan:
        """Return a fresh span of the same type for the next table."""
        pass

    @abstractmethod
    def on_click(self, widget: Any) -> None:
        pass


class DrawTableLinkSpan:
    """
    Replaces the table placeholder text with a link-styled label.

    Attributes:
        table_link_text: Label drawn instead of the table.
        text_size: Label size in pixels.
        text_color: Label color as 0xAARRGGBB.
        table_html: Markup of the table this span replaces.
    """

    def __init__(
        self,
        table_link_text: str = DEFAULT_TABLE_LINK_TEXT,
        text_size: float = DEFAULT_TEXT_SIZE,
        text_color: int = DEFAULT_COLOR,
    ) -> None:
        self.table_link_text = table_link_text
        self.text_size = text_size
        self.text_color = text_color
        self.table_html: str | None = None

    def new_instance(self) -> DrawTableLinkSpan:
        """Copy the label settings into a span with no table attached."""
        instance = copy.copy(self)
        instance.table_html = None
        return instance

    def __repr__(self) -> str:
        return f"DrawTableLinkSpan(table_link_text={self.table_link_text!r}, table_html={self.table_html!r})"
