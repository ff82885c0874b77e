"""Core utilities for html-text."""

from core.config import HtmlTextConfig, get_config, reload_config
from core.errors import ConfigurationError, HtmlTextError, ImageLookupError, MarkupParseError

__all__ = [
    "ConfigurationError",
    "get_config",
    "HtmlTextConfig",
    "HtmlTextError",
    "ImageLookupError",
    "MarkupParseError",
    "reload_config",
]
