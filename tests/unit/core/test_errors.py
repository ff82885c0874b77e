"""Tests for custom error classes."""

import pytest

from core.errors import ConfigurationError, HtmlTextError, ImageLookupError, MarkupParseError


class TestErrorHierarchy:
    """Test error class inheritance."""

    def test_base_error_is_exception(self):
        assert issubclass(HtmlTextError, Exception)

    def test_configuration_error_inherits_base(self):
        assert issubclass(ConfigurationError, HtmlTextError)

    def test_parse_error_inherits_base(self):
        assert issubclass(MarkupParseError, HtmlTextError)

    def test_image_error_inherits_base(self):
        assert issubclass(ImageLookupError, HtmlTextError)


class TestConfigurationError:
    def test_message_names_setting_and_value(self):
        error = ConfigurationError("HTMLTEXT_LIST_INDENT", "abc", "expected a number")
        assert "HTMLTEXT_LIST_INDENT" in str(error)
        assert "'abc'" in str(error)
        assert "expected a number" in str(error)

    def test_stores_fields(self):
        error = ConfigurationError("NAME", "value", "reason")
        assert error.name == "NAME"
        assert error.value == "value"
        assert error.reason == "reason"

    def test_is_catchable_as_base(self):
        with pytest.raises(HtmlTextError):
            raise ConfigurationError("NAME", "value", "reason")


class TestMarkupParseError:
    def test_message_without_position(self):
        error = MarkupParseError("bad markup")
        assert str(error) == "bad markup"
        assert error.position is None

    def test_message_with_position(self):
        error = MarkupParseError("bad markup", (3, 7))
        assert str(error) == "bad markup (line 3, column 7)"
        assert error.position == (3, 7)


class TestImageLookupError:
    def test_message_includes_source(self):
        error = ImageLookupError("logo", "truncated file")
        assert "logo" in str(error)
        assert "truncated file" in str(error)
        assert error.source == "logo"
