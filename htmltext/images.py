"""
Image lookup for `<img>` tags.

The formatter asks an `ImageGetter` for every image source it meets. The
bundled `ResourceImageGetter` resolves names against resource directories:
first the application's own, then a stock fallback directory.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from core.config import get_config
from core.errors import ImageLookupError

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS: tuple[str, ...] = (".png", ".jpg", ".jpeg", ".gif", ".webp", ".bmp")


@dataclass
class Drawable:
    """Decoded-enough image: raw bytes plus its bounds (left, top, right, bottom)."""

    source: str
    data: bytes
    bounds: tuple[int, int, int, int]

    @property
    def intrinsic_width(self) -> int:
        return self.bounds[2] - self.bounds[0]

    @property
    def intrinsic_height(self) -> int:
        return self.bounds[3] - self.bounds[1]


class ImageGetter(ABC):
    """Resolves an image source to a drawable."""

    @abstractmethod
    def get_drawable(self, source: str) -> Drawable | None:
        """Look up an image.

        Args:
            source: The `src` attribute of the image tag.

        Returns:
            The drawable, or None when the image cannot be found.
        """
        pass


class ResourceImageGetter(ImageGetter):
    """
    Looks images up by resource name.

    `<img src="logo">` matches `logo.png` (or any other known extension) in
    the first directory that has it. A name that already carries an extension
    is matched as is.
    """

    def __init__(self, resource_dirs: list[str | Path] | None = None):
        if resource_dirs is None:
            resource_dirs = get_config().get_image_dirs()
        self.resource_dirs = [Path(d) for d in resource_dirs]

    def get_drawable(self, source: str) -> Drawable | None:
        path = self._find(source)
        if path is None:
            # prevent a crash if the resource still can't be found
            logger.error(f"source could not be found: {source}")
            return None
        try:
            return self._load(source, path)
        except ImageLookupError as e:
            logger.error(str(e))
            return None

    def _find(self, source: str) -> Path | None:
        name = Path(source).name
        if not name or name != source:
            return None
        candidates = [name] if Path(name).suffix.lower() in IMAGE_EXTENSIONS else [name + ext for ext in IMAGE_EXTENSIONS]
        for resource_dir in self.resource_dirs:
            for candidate in candidates:
                path = resource_dir / candidate
                if path.is_file():
                    return path
        return None

    @staticmethod
    def _load(source: str, path: Path) -> Drawable:
        try:
            with Image.open(path) as img:
                width, height = img.size
        except (UnidentifiedImageError, OSError) as e:
            raise ImageLookupError(source, str(e)) from e
        return Drawable(source=source, data=path.read_bytes(), bounds=(0, 0, width, height))
