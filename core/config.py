"""
Configuration Management for html-text.

Settings are read from the environment once and cached; call
`reload_config()` after changing the environment.
"""

import os

from core.errors import ConfigurationError

# Defaults
HTMLTEXT_DEFAULT_IMAGE_DIR = "res/drawable"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def _env_float(name: str) -> float | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(name, raw, "expected a number") from None


class HtmlTextConfig:
    """
    Centralized configuration for the formatter and its collaborators.

    Values here are only defaults; every formatting call can override them
    through `FormatterConfig`.
    """

    def __init__(self):
        # Verbose buffer dumps in debug logs
        self.debug = _env_flag("HTMLTEXT_DEBUG", "false")

        # List indentation; None means the built-in default
        self.list_indent = _env_float("HTMLTEXT_LIST_INDENT")
        if self.list_indent is not None and self.list_indent < 0:
            raise ConfigurationError("HTMLTEXT_LIST_INDENT", str(self.list_indent), "must not be negative")

        self.remove_trailing_whitespace = _env_flag("HTMLTEXT_REMOVE_TRAILING_WHITESPACE", "true")

        # Image resource directories (primary, then stock fallback)
        self.image_dir = os.getenv("HTMLTEXT_IMAGE_DIR", HTMLTEXT_DEFAULT_IMAGE_DIR)
        self.stock_image_dir = os.getenv("HTMLTEXT_STOCK_IMAGE_DIR") or None

    def get_image_dirs(self) -> list[str]:
        """
        Get the image search directories in lookup order.

        Returns:
            Primary directory first, then the stock directory when configured
        """
        dirs = [self.image_dir]
        if self.stock_image_dir:
            dirs.append(self.stock_image_dir)
        return list(dict.fromkeys(dirs))


# Global configuration instance
_config: HtmlTextConfig | None = None


def get_config() -> HtmlTextConfig:
    """
    Get the global configuration instance.

    Returns:
        The singleton configuration instance
    """
    global _config
    if _config is None:
        _config = HtmlTextConfig()
    return _config


def reload_config() -> HtmlTextConfig:
    """
    Reload the configuration from environment variables.

    Returns:
        The new configuration instance
    """
    global _config
    _config = HtmlTextConfig()
    return _config

