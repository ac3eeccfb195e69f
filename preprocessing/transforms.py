"""
Pixel transforms for tag preprocessing.

All functions are pure: they take an input and return a new output without
mutating the original array. Each is a thin wrapper around one OpenCV call
with the parameters used for tag samples.
"""

import cv2
import numpy as np

from config import (
    THRESHOLD_BLOCK_SIZE,
    THRESHOLD_OFFSET,
    THRESHOLD_MAX_VALUE,
    BLEND_WEIGHT_ORIGINAL,
    BLEND_WEIGHT_THRESHOLD,
)


def _validate_image(img: np.ndarray) -> None:
    """Validate an input image array.

    Raises:
        TypeError: If img is not a numpy array.
        ValueError: If img has invalid dimensions or is empty.
    """
    if not isinstance(img, np.ndarray):
        raise TypeError(f"Expected numpy.ndarray, got {type(img).__name__}")

    if img.ndim < 2 or img.ndim > 3:
        raise ValueError(
            f"Image must be 2D or 3D array, got {img.ndim}D array with shape {img.shape}"
        )

    if img.size == 0:
        raise ValueError("Image array is empty")


def _require_gray_uint8(img: np.ndarray, operation: str) -> None:
    _validate_image(img)
    if img.ndim != 2:
        raise ValueError(
            f"{operation} requires grayscale input (2D array), "
            f"got {img.ndim}D array with shape {img.shape}"
        )
    if img.dtype != np.uint8:
        raise ValueError(f"{operation} requires uint8 input, got {img.dtype}")


def make_border(img: np.ndarray, tag_width: int, tag_height: int) -> np.ndarray:
    """Pad an image with half a tag of replicated edge pixels on every side.

    The result is (rows + tag_height, cols + tag_width). BORDER_ISOLATED keeps
    OpenCV from extrapolating out of a parent buffer when img is a view.

    Args:
        img: Input image (2D grayscale or 3D color).
        tag_width: Tag width in pixels; tag_width // 2 columns per side.
        tag_height: Tag height in pixels; tag_height // 2 rows per side.

    Returns:
        Padded image with the same dtype and channel count as the input.

    Examples:
        >>> img = np.zeros((100, 200), dtype=np.uint8)
        >>> make_border(img, 64, 64).shape
        (164, 264)
    """
    _validate_image(img)
    pad_y = tag_height // 2
    pad_x = tag_width // 2
    return cv2.copyMakeBorder(
        img,
        pad_y, pad_y,
        pad_x, pad_x,
        cv2.BORDER_REPLICATE | cv2.BORDER_ISOLATED,
    )


def local_histogram_eq(
    img: np.ndarray,
    clip_limit: float,
    tile_grid: tuple[int, int],
) -> np.ndarray:
    """Apply Contrast Limited Adaptive Histogram Equalization.

    Args:
        img: Grayscale uint8 image.
        clip_limit: Threshold for contrast limiting.
        tile_grid: (columns, rows) of the CLAHE tile grid.

    Raises:
        ValueError: If img is not a 2D uint8 array.
    """
    _require_gray_uint8(img, "local_histogram_eq")
    clahe = cv2.createCLAHE(clipLimit=clip_limit, tileGridSize=tile_grid)
    return clahe.apply(img)


def adaptive_threshold(
    img: np.ndarray,
    binary: bool,
    block_size: int = THRESHOLD_BLOCK_SIZE,
    offset: float = THRESHOLD_OFFSET,
    max_value: int = THRESHOLD_MAX_VALUE,
    weight_original: float = BLEND_WEIGHT_ORIGINAL,
    weight_threshold: float = BLEND_WEIGHT_THRESHOLD,
) -> np.ndarray:
    """Threshold an image against a Gaussian-weighted local mean.

    In binary mode the mask (0 or max_value) is returned. Otherwise the
    original and the mask are blended with the given weights, which softens
    the threshold instead of cutting hard.

    Args:
        img: Grayscale uint8 image.
        binary: Return the mask instead of the blend.
        block_size: Odd neighbourhood size for the local threshold.
        offset: Constant subtracted from the weighted mean.
        max_value: Value assigned to pixels above the threshold.
        weight_original: Blend weight of img.
        weight_threshold: Blend weight of the mask.

    Raises:
        ValueError: If img is not a 2D uint8 array.
    """
    _require_gray_uint8(img, "adaptive_threshold")
    mask = cv2.adaptiveThreshold(
        img,
        max_value,
        cv2.ADAPTIVE_THRESH_GAUSSIAN_C,
        cv2.THRESH_BINARY,
        block_size,
        offset,
    )
    if binary:
        return mask
    return cv2.addWeighted(img, weight_original, mask, weight_threshold, 0)
