"""
Custom error types for HTML text formatting.

Tag mismatches inside the formatter are never errors; these types cover the
collaborators around it (settings, tokenizer, image lookup).
"""

# =============================================================================
# Base Exception Hierarchy
# =============================================================================


class HtmlTextError(Exception):
    """Base exception for all html-text errors."""

    pass


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(HtmlTextError):
    """Raised when a setting read from the environment is invalid."""

    def __init__(self, name: str, value: str, reason: str):
        super().__init__(f"Invalid value {value!r} for {name}: {reason}")
        self.name = name
        self.value = value
        self.reason = reason


# =============================================================================
# Parse Errors
# =============================================================================


class MarkupParseError(HtmlTextError):
    """Raised when the underlying tokenizer cannot process the markup."""

    def __init__(self, message: str, position: tuple[int, int] | None = None):
        if position is not None:
            message = f"{message} (line {position[0]}, column {position[1]})"
        super().__init__(message)
        self.position = position


# =============================================================================
# Image Errors
# =============================================================================


class ImageLookupError(HtmlTextError):
    """Raised when an image resource exists but cannot be decoded."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"Cannot load image '{source}': {reason}")
        self.source = source
        self.reason = reason
