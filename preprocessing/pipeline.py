"""
Preprocessing pipeline that applies the configured steps in order.

This module provides two APIs:
1. run_pipeline() - Function API that builds and runs the standard pipeline
2. Pipeline class - Class-based API for composable step sequences

Pipeline order is fixed: Border → (CLAHE) → (Threshold). The border comes
first so CLAHE and the threshold see the padded edges the same way the
tag samples cut from the output will.
"""

import numpy as np

from .config import PreprocessConfig
from .steps import (
    Pipeline,
    PipelineStepResults,
    PreprocessStep,
    BorderStep,
    CLAHEStep,
    ThresholdStep,
)
from .transforms import _validate_image


def build_pipeline(config: PreprocessConfig) -> Pipeline:
    """Build a Pipeline from a PreprocessConfig.

    The config is normalized first, so binary_image always brings in the
    threshold step.
    """
    config = config.normalized()
    steps: list[PreprocessStep] = []

    if config.border:
        steps.append(BorderStep(tag_width=config.tag_width, tag_height=config.tag_height))

    if config.use_hist_eq:
        steps.append(
            CLAHEStep(clip_limit=config.clahe_clip_limit, tile_grid=config.tag_size)
        )

    if config.use_threshold:
        steps.append(
            ThresholdStep(
                binary=config.binary_image,
                block_size=config.threshold_block_size,
                offset=config.threshold_offset,
                max_value=config.threshold_max_value,
                weight_original=config.weight_original,
                weight_threshold=config.weight_threshold,
            )
        )

    return Pipeline(steps=steps)


def run_pipeline(
    img: np.ndarray,
    config: PreprocessConfig | None = None,
) -> PipelineStepResults:
    """Apply the configured preprocessing steps to an image.

    Args:
        img: Input image as a numpy array, grayscale uint8 for CLAHE and
             thresholding.
        config: Preprocessing configuration. If None, uses default settings
                (border only).

    Returns:
        PipelineStepResults with the original, every intermediate and the
        final image.

    Raises:
        ValueError: If configuration is invalid or image cannot be processed.
        TypeError: If img is not a numpy array.

    Examples:
        >>> img = np.zeros((100, 200), dtype=np.uint8)
        >>> run_pipeline(img).final.shape
        (164, 264)
    """
    if config is None:
        config = PreprocessConfig()

    config.validate()
    _validate_image(img)

    return build_pipeline(config).run(img)
