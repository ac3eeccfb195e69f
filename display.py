"""Convert OpenCV pixel grids into Pillow images for display."""

from __future__ import annotations

import io
import logging

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

# 256-entry grayscale ramp for indexed images, flattened as Pillow expects
GRAY_PALETTE: tuple[int, ...] = tuple(v for i in range(256) for v in (i, i, i))


def to_display_image(grid: np.ndarray) -> Image.Image | None:
    """Convert an 8-bit OpenCV grid into a Pillow image.

    - 4 channels (BGRA) -> "RGBX", alpha ignored
    - 3 channels (BGR)  -> "RGB", blue and red swapped
    - 1 channel         -> "P" with a grayscale palette

    Any other layout is logged and yields None.
    """
    if not isinstance(grid, np.ndarray) or grid.size == 0:
        logger.warning("to_display_image() - empty or invalid grid: %r", type(grid).__name__)
        return None

    channels = 1 if grid.ndim == 2 else grid.shape[2] if grid.ndim == 3 else None
    if grid.dtype != np.uint8 or channels not in (1, 3, 4):
        logger.warning(
            "to_display_image() - grid type not handled: dtype=%s shape=%s",
            grid.dtype,
            grid.shape,
        )
        return None

    rows, cols = grid.shape[:2]
    if channels == 4:
        rgbx = np.ascontiguousarray(grid[:, :, [2, 1, 0, 3]])
        rgbx[:, :, 3] = 255
        return Image.frombytes("RGBX", (cols, rows), rgbx.tobytes())

    if channels == 3:
        rgb = np.ascontiguousarray(grid[:, :, ::-1])
        return Image.frombytes("RGB", (cols, rows), rgb.tobytes())

    gray = np.ascontiguousarray(grid.reshape(rows, cols))
    image = Image.frombytes("P", (cols, rows), gray.tobytes())
    image.putpalette(GRAY_PALETTE)
    return image


def to_display_png(grid: np.ndarray) -> bytes | None:
    """Encode a grid as PNG bytes for web views, or None if unsupported."""
    image = to_display_image(grid)
    if image is None:
        return None
    if image.mode == "RGBX":
        image = image.convert("RGB")
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
