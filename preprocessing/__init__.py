"""
Image preprocessing for tag samples.

This module provides pure, deterministic functions for preparing camera
images before tags are cut out of them. All functions follow the pattern:
input -> output with no mutation of the original arrays.

Key components:
- config: PreprocessConfig dataclass for parameterizing all steps
- transforms: make_border, local_histogram_eq, adaptive_threshold
- steps: Class-based steps with a common PreprocessStep interface
- pipeline: build_pipeline()/run_pipeline() applying the steps in order
"""

from .config import PreprocessConfig
from .pipeline import run_pipeline, build_pipeline
from .transforms import make_border, local_histogram_eq, adaptive_threshold
from .steps import (
    PreprocessStep,
    BorderStep,
    CLAHEStep,
    ThresholdStep,
    Pipeline,
    PipelineStepResults,
    StepResult,
)

__all__ = [
    # Config
    "PreprocessConfig",
    # Function API
    "run_pipeline",
    "build_pipeline",
    "make_border",
    "local_histogram_eq",
    "adaptive_threshold",
    # Class-based API
    "PreprocessStep",
    "BorderStep",
    "CLAHEStep",
    "ThresholdStep",
    "Pipeline",
    "PipelineStepResults",
    "StepResult",
]
