"""
Core data types for tag image preprocessing.

ImageDescriptor names a source image; Image pairs a descriptor with the
pixel data loaded from it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import cv2
import numpy as np

logger = logging.getLogger(__name__)


class ImageLoadError(ValueError):
    """Raised when an image file cannot be decoded."""


@dataclass(frozen=True)
class ImageDescriptor:
    """A source image to be preprocessed.

    Attributes:
        filename: Path of the image file, as listed in the pathfile.
    """

    filename: str

    @property
    def path(self) -> Path:
        return Path(self.filename)

    @classmethod
    def from_pathfile(cls, pathfile: str | Path) -> list[ImageDescriptor]:
        """Read descriptors from a text file with one image path per line.

        Surrounding whitespace is stripped and blank lines are skipped.

        Raises:
            ValueError: If the pathfile does not exist.
        """
        pathfile = Path(pathfile)
        if not pathfile.is_file():
            raise ValueError(f"Pathfile {pathfile} does not exist")

        with pathfile.open("r", encoding="utf-8") as handle:
            return [cls(line.strip()) for line in handle if line.strip()]


@dataclass
class Image:
    """Pixel data loaded for a descriptor.

    Attributes:
        desc: The descriptor this image was loaded from.
        pixels: 8-bit pixel grid, grayscale unless loaded otherwise.
    """

    desc: ImageDescriptor
    pixels: np.ndarray

    @classmethod
    def load(cls, desc: ImageDescriptor, flags: int = cv2.IMREAD_GRAYSCALE) -> Image:
        """Load the descriptor's file with OpenCV.

        Raises:
            ImageLoadError: If the file is missing or cannot be decoded.
        """
        pixels = cv2.imread(desc.filename, flags)
        if pixels is None:
            raise ImageLoadError(f"Failed to read image: {desc.filename}")
        return cls(desc=desc, pixels=pixels)

    @property
    def shape(self) -> tuple[int, ...]:
        return self.pixels.shape

    def write(self, path: str | Path) -> bool:
        """Write the pixels to path; the format follows the extension.

        Returns:
            True if OpenCV reported success.
        """
        try:
            return bool(cv2.imwrite(str(path), self.pixels))
        except cv2.error as exc:
            logger.debug("OpenCV failed writing %s: %s", path, exc)
            return False
