"""Shared pytest fixtures for html-text tests."""

from xml.sax.handler import ContentHandler

import pytest
from PIL import Image

import core.config
from htmltext.spannable import SpannableBuilder


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Drop the cached configuration so every test reads its own environment."""
    for key in (
        "HTMLTEXT_DEBUG",
        "HTMLTEXT_LIST_INDENT",
        "HTMLTEXT_REMOVE_TRAILING_WHITESPACE",
        "HTMLTEXT_IMAGE_DIR",
        "HTMLTEXT_STOCK_IMAGE_DIR",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(core.config, "_config", None)


@pytest.fixture
def env_override(monkeypatch):
    """Helper to override environment variables."""

    def _override(**kwargs):
        for key, value in kwargs.items():
            if value is None:
                monkeypatch.delenv(key, raising=False)
            else:
                monkeypatch.setenv(key, value)
        core.config.reload_config()

    return _override


@pytest.fixture
def image_dirs(tmp_path):
    """Create a primary and a stock image directory with a few images."""
    primary = tmp_path / "drawable"
    stock = tmp_path / "stock"
    primary.mkdir()
    stock.mkdir()
    Image.new("RGB", (4, 3), "red").save(primary / "logo.png")
    Image.new("RGB", (2, 5), "blue").save(stock / "star.gif")
    (primary / "broken.png").write_bytes(b"not an image")
    return primary, stock


class RecordingHandler(ContentHandler):
    """Content handler that records every event it receives."""

    def __init__(self):
        super().__init__()
        self.events = []
        self.output = SpannableBuilder()

    def startDocument(self):
        self.events.append(("startDocument",))

    def endDocument(self):
        self.events.append(("endDocument",))

    def startElement(self, name, attrs):
        self.events.append(("start", name, dict(attrs.items())))

    def endElement(self, name):
        self.events.append(("end", name))

    def characters(self, content):
        self.events.append(("characters", content))
        self.output.append(content)

    def ignorableWhitespace(self, whitespace):
        self.events.append(("ignorableWhitespace", whitespace))

    def processingInstruction(self, target, data):
        self.events.append(("processingInstruction", target, data))

    def skippedEntity(self, name):
        self.events.append(("skippedEntity", name))


@pytest.fixture
def recording_handler():
    return RecordingHandler()
