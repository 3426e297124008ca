"""
Preprocessing pipeline that applies all steps in order.

Pipeline Philosophy:
- All analysis happens on grayscale images
- The pipeline is: Decode (EXIF-upright) → Grayscale → Downsample
- The decoded color image is preserved only for reference
"""

import logging

import numpy as np

from .config import PreprocessConfig, PreprocessResult
from .decoding import decode_image
from .steps import Pipeline, GrayscaleStep, ResizeStep, PreprocessStep

logger = logging.getLogger(__name__)


def _validate_input(img: np.ndarray) -> None:
    """Validate input image array.

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


def build_pipeline(config: PreprocessConfig) -> Pipeline:
    """Build the standard grayscale-first pipeline from a config.

    1. GrayscaleStep - Convert to grayscale
    2. ResizeStep - Downsample to max_edge (if configured)
    """
    steps: list[PreprocessStep] = [GrayscaleStep(dtype=config.grayscale_dtype)]

    if config.max_edge is not None:
        steps.append(ResizeStep(max_edge=config.max_edge))

    return Pipeline(steps=steps)


def run_pipeline(
    img: np.ndarray,
    config: PreprocessConfig | None = None,
    artifact_dir: str | None = None,
) -> PreprocessResult:
    """Apply the full preprocessing pipeline to a decoded image.

    Args:
        img: Input image as numpy array (RGB, RGBA or grayscale).
        config: Preprocessing configuration. If None, uses default settings.
        artifact_dir: Optional directory to save intermediate images.

    Returns:
        PreprocessResult holding both images and any saved artifact paths.

    Raises:
        ValueError: If configuration is invalid or image cannot be processed.
        TypeError: If inputs are of wrong type.

    Examples:
        >>> img = np.zeros((3000, 2000, 3), dtype=np.uint8)
        >>> result = run_pipeline(img)
        >>> result.processed.shape
        (1200, 800)
        >>> result.scale_factor
        2.5
    """
    if config is None:
        config = PreprocessConfig()

    config.validate()
    _validate_input(img)

    original = img.copy()
    pipeline_result = build_pipeline(config).run(original, artifact_dir=artifact_dir)

    processed = pipeline_result.final
    logger.debug(
        "Preprocessed %sx%s -> %sx%s (scale %.3f)",
        original.shape[1], original.shape[0],
        processed.shape[1], processed.shape[0],
        pipeline_result.scale_factor,
    )

    return PreprocessResult(
        original=original,
        processed=processed,
        scale_factor=pipeline_result.scale_factor,
        config=config,
        artifact_paths=pipeline_result.artifact_paths,
    )


def preprocess_image_bytes(
    image_data: bytes,
    config: PreprocessConfig | None = None,
    artifact_dir: str | None = None,
) -> PreprocessResult:
    """Decode image bytes and run the preprocessing pipeline.

    Raises:
        ImageDecodeError: If the bytes are not a readable image.
    """
    return run_pipeline(decode_image(image_data), config, artifact_dir=artifact_dir)
