"""
Configuration for the preprocessing pipeline.

All preprocessing steps are parameterized through PreprocessConfig so a batch
run is reproducible from its command line alone.
"""

from dataclasses import dataclass, replace

from config import (
    TAG_WIDTH,
    TAG_HEIGHT,
    BORDER_ENABLED,
    CLAHE_ENABLED,
    CLAHE_CLIP_LIMIT,
    THRESHOLD_ENABLED,
    BINARY_IMAGE,
    THRESHOLD_BLOCK_SIZE,
    THRESHOLD_OFFSET,
    THRESHOLD_MAX_VALUE,
    BLEND_WEIGHT_ORIGINAL,
    BLEND_WEIGHT_THRESHOLD,
)


@dataclass(frozen=True)
class PreprocessConfig:
    """Configuration for all preprocessing steps.

    Attributes:
        border: Pad the image with a replicated border of half a tag per side.
        use_hist_eq: Apply CLAHE local contrast enhancement.
        use_threshold: Apply adaptive thresholding.
        binary_image: Keep the hard threshold mask instead of blending it.
                      Implies use_threshold; see normalized().
        tag_width: Tag width in pixels (border width and CLAHE tile grid).
        tag_height: Tag height in pixels (border height and CLAHE tile grid).
        clahe_clip_limit: Contrast limit for CLAHE.
        threshold_block_size: Gaussian neighbourhood size for the threshold.
        threshold_offset: Constant subtracted from the neighbourhood mean.
        threshold_max_value: Value given to pixels above the threshold.
        weight_original: Blend weight of the source image.
        weight_threshold: Blend weight of the threshold mask.
    """

    border: bool = BORDER_ENABLED
    use_hist_eq: bool = CLAHE_ENABLED
    use_threshold: bool = THRESHOLD_ENABLED
    binary_image: bool = BINARY_IMAGE

    tag_width: int = TAG_WIDTH
    tag_height: int = TAG_HEIGHT

    clahe_clip_limit: float = CLAHE_CLIP_LIMIT

    threshold_block_size: int = THRESHOLD_BLOCK_SIZE
    threshold_offset: float = THRESHOLD_OFFSET
    threshold_max_value: int = THRESHOLD_MAX_VALUE
    weight_original: float = BLEND_WEIGHT_ORIGINAL
    weight_threshold: float = BLEND_WEIGHT_THRESHOLD

    @property
    def tag_size(self) -> tuple[int, int]:
        """(width, height) of a tag, the order OpenCV expects for sizes."""
        return (self.tag_width, self.tag_height)

    def normalized(self) -> "PreprocessConfig":
        """Return a copy with cross-flag dependencies resolved.

        Saving a binary image only makes sense after thresholding, so
        binary_image switches use_threshold on regardless of its value.
        """
        if self.binary_image and not self.use_threshold:
            return replace(self, use_threshold=True)
        return self

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            ValueError: If any parameter is invalid.
        """
        for name, size in (("tag_width", self.tag_width), ("tag_height", self.tag_height)):
            if size <= 0:
                raise ValueError(f"{name} must be positive, got {size}")
            if size % 2:
                raise ValueError(
                    f"{name} must be even so the border splits evenly, got {size}"
                )

        if self.clahe_clip_limit <= 0:
            raise ValueError(
                f"clahe_clip_limit must be positive, got {self.clahe_clip_limit}"
            )

        if self.threshold_block_size <= 1 or self.threshold_block_size % 2 == 0:
            raise ValueError(
                "threshold_block_size must be an odd number greater than 1, "
                f"got {self.threshold_block_size}"
            )

        if not (0 < self.threshold_max_value <= 255):
            raise ValueError(
                "threshold_max_value must be within (0, 255], "
                f"got {self.threshold_max_value}"
            )

        if self.weight_original < 0 or self.weight_threshold < 0:
            raise ValueError(
                "blend weights must be non-negative, got "
                f"({self.weight_original}, {self.weight_threshold})"
            )
