"""
Image preprocessing module (the pixel source for target analysis).

Turns uploaded photo bytes into the bounded grayscale working image the
analysis core consumes. All functions are pure and deterministic.

Key components:
- decoding: decode_image() with EXIF orientation applied
- config: PreprocessConfig dataclass for parameterizing all steps
- normalization: grayscale conversion and long-edge downsampling
- steps: Class-based preprocessing steps with common PreprocessStep interface
- pipeline: run_pipeline() / preprocess_image_bytes()
"""

from .config import PreprocessConfig, PreprocessResult
from .decoding import ImageDecodeError, decode_image
from .pipeline import run_pipeline, build_pipeline, preprocess_image_bytes
from .normalization import to_grayscale, limit_long_edge
from .steps import (
    PreprocessStep,
    GrayscaleStep,
    ResizeStep,
    Pipeline,
    PipelineStepResults,
    StepResult,
)

__all__ = [
    "PreprocessConfig",
    "PreprocessResult",
    "ImageDecodeError",
    "decode_image",
    "run_pipeline",
    "build_pipeline",
    "preprocess_image_bytes",
    "to_grayscale",
    "limit_long_edge",
    "PreprocessStep",
    "GrayscaleStep",
    "ResizeStep",
    "Pipeline",
    "PipelineStepResults",
    "StepResult",
]
