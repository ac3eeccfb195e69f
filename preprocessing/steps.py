"""
Preprocessing step classes with a common interface.

Each step is a frozen dataclass that implements the PreprocessStep interface.
Steps are pure: they take an input and return a new output without mutating
the original array.

Usage:
    from preprocessing.steps import BorderStep, CLAHEStep, Pipeline

    pipeline = Pipeline(steps=[
        BorderStep(tag_width=64, tag_height=64),
        CLAHEStep(),
    ])
    result = pipeline.run(image)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from config import (
    TAG_WIDTH,
    TAG_HEIGHT,
    CLAHE_CLIP_LIMIT,
    THRESHOLD_BLOCK_SIZE,
    THRESHOLD_OFFSET,
    THRESHOLD_MAX_VALUE,
    BLEND_WEIGHT_ORIGINAL,
    BLEND_WEIGHT_THRESHOLD,
)
from .transforms import make_border, local_histogram_eq, adaptive_threshold


class PreprocessStep(ABC):
    """Base class for preprocessing steps.

    Steps take an input image and return a new output without mutating the
    original. Steps that change geometry report it through get_metadata()
    so callers can map tag positions back to source coordinates.
    """

    @abstractmethod
    def apply(self, img: np.ndarray) -> np.ndarray:
        """Apply this preprocessing step to an image.

        Must be pure: never mutates the input image.
        """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for logging and debugging."""

    def get_metadata(self) -> dict[str, Any]:
        """Return any metadata produced by this step. Empty by default."""
        return {}


@dataclass(frozen=True)
class BorderStep(PreprocessStep):
    """Pad the image with a replicated border of half a tag on each side.

    Attributes:
        tag_width: Tag width; tag_width // 2 columns are added per side.
        tag_height: Tag height; tag_height // 2 rows are added per side.
    """

    tag_width: int = TAG_WIDTH
    tag_height: int = TAG_HEIGHT

    def apply(self, img: np.ndarray) -> np.ndarray:
        return make_border(img, self.tag_width, self.tag_height)

    @property
    def name(self) -> str:
        return f"border({self.tag_width}x{self.tag_height})"

    def get_metadata(self) -> dict[str, Any]:
        """Return the (x, y) offset of the source image inside the output."""
        return {"border_offset": (self.tag_width // 2, self.tag_height // 2)}


@dataclass(frozen=True)
class CLAHEStep(PreprocessStep):
    """Apply Contrast Limited Adaptive Histogram Equalization.

    Requires grayscale uint8 input.

    Attributes:
        clip_limit: Threshold for contrast limiting. Default is 2.0.
        tile_grid: (columns, rows) of the tile grid. Defaults to the tag size.
    """

    clip_limit: float = CLAHE_CLIP_LIMIT
    tile_grid: tuple[int, int] = (TAG_WIDTH, TAG_HEIGHT)

    def apply(self, img: np.ndarray) -> np.ndarray:
        return local_histogram_eq(img, self.clip_limit, self.tile_grid)

    @property
    def name(self) -> str:
        return f"clahe(clip={self.clip_limit})"


@dataclass(frozen=True)
class ThresholdStep(PreprocessStep):
    """Adaptive Gaussian thresholding, hard or blended with the input.

    Requires grayscale uint8 input.

    Attributes:
        binary: Output the 0/max_value mask instead of the blend.
        block_size: Odd neighbourhood size for the local threshold.
        offset: Constant subtracted from the weighted mean.
        max_value: Value assigned to pixels above the threshold.
        weight_original: Blend weight of the input image.
        weight_threshold: Blend weight of the mask.
    """

    binary: bool = False
    block_size: int = THRESHOLD_BLOCK_SIZE
    offset: float = THRESHOLD_OFFSET
    max_value: int = THRESHOLD_MAX_VALUE
    weight_original: float = BLEND_WEIGHT_ORIGINAL
    weight_threshold: float = BLEND_WEIGHT_THRESHOLD

    def apply(self, img: np.ndarray) -> np.ndarray:
        return adaptive_threshold(
            img,
            self.binary,
            block_size=self.block_size,
            offset=self.offset,
            max_value=self.max_value,
            weight_original=self.weight_original,
            weight_threshold=self.weight_threshold,
        )

    @property
    def name(self) -> str:
        mode = "binary" if self.binary else "blend"
        return f"threshold({mode})"


@dataclass
class StepResult:
    """Result of applying a single preprocessing step.

    Attributes:
        name: Name of the step that produced this result.
        image: Output image from the step.
        metadata: Any metadata produced by the step (e.g., border_offset).
    """

    name: str
    image: np.ndarray
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class PipelineStepResults:
    """Results from running a preprocessing pipeline.

    Attributes:
        original: The original input image.
        steps: List of StepResult for each step in order.
    """

    original: np.ndarray
    steps: list[StepResult] = field(default_factory=list)

    @property
    def final(self) -> np.ndarray:
        """Get the final processed image."""
        if not self.steps:
            return self.original
        return self.steps[-1].image

    def get_intermediate(self, step_name: str) -> np.ndarray | None:
        """Get an intermediate image by step name, or None if not found.

        The name may be given with or without its parameters, e.g.
        "clahe" matches "clahe(clip=2.0)".
        """
        for step in self.steps:
            if step.name == step_name or step.name.split("(")[0] == step_name:
                return step.image
        return None

    def get_metadata(self, key: str) -> Any | None:
        """Get a metadata value from the first step that reports it."""
        for step in self.steps:
            if key in step.metadata:
                return step.metadata[key]
        return None

    @property
    def border_offset(self) -> tuple[int, int]:
        """(x, y) position of the source image inside the final image."""
        return self.get_metadata("border_offset") or (0, 0)


@dataclass
class Pipeline:
    """A sequence of preprocessing steps to apply to images.

    The pipeline runs each step in order, passing the output of one step
    as the input to the next. All intermediate results are preserved.

    Attributes:
        steps: List of PreprocessStep instances to apply in order.
    """

    steps: list[PreprocessStep]

    def run(self, img: np.ndarray) -> PipelineStepResults:
        """Run the pipeline on an image."""
        result = PipelineStepResults(original=img.copy())
        current = result.original

        for step in self.steps:
            output = step.apply(current)
            result.steps.append(
                StepResult(
                    name=step.name,
                    image=output,
                    metadata=step.get_metadata(),
                )
            )
            current = output

        return result

    def apply(self, img: np.ndarray) -> np.ndarray:
        """Run the steps and return only the final image.

        Unlike run(), the input is not copied and intermediates are dropped
        as soon as the next step has consumed them.
        """
        current = img
        for step in self.steps:
            current = step.apply(current)
        return current

    @property
    def names(self) -> list[str]:
        return [step.name for step in self.steps]

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self):
        return iter(self.steps)
