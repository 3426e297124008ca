"""
Configuration for the preprocessing pipeline.

The pipeline turns an arbitrary photo into the bounded grayscale working
image the analysis core consumes. Every step is parameterized through
PreprocessConfig so repeated runs are reproducible.
"""

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from config import MAX_W, MIN_WORKING_EDGE, MAX_WORKING_EDGE


@dataclass(frozen=True)
class PreprocessConfig:
    """Configuration for all preprocessing steps.

    Attributes:
        max_edge: Longest edge of the working image. Larger photos are
                  downsampled (never upsampled) so labeling time is bounded.
                  Set to None to keep the decoded resolution.
        grayscale_dtype: Numpy dtype for grayscale images. The analysis core
                         requires uint8.
    """

    max_edge: Optional[int] = MAX_W
    grayscale_dtype: np.dtype = field(default_factory=lambda: np.dtype(np.uint8))

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            ValueError: If any parameter is invalid.
        """
        if self.max_edge is not None:
            if self.max_edge <= 0:
                raise ValueError(f"max_edge must be positive, got {self.max_edge}")
            if self.max_edge < MIN_WORKING_EDGE:
                raise ValueError(
                    f"max_edge={self.max_edge} is too small to resolve bullet holes. "
                    f"Minimum is {MIN_WORKING_EDGE}, typical is 1000-1600."
                )
            if self.max_edge > MAX_WORKING_EDGE:
                raise ValueError(
                    f"max_edge={self.max_edge} is very large and makes labeling "
                    f"slow. Maximum is {MAX_WORKING_EDGE}."
                )

        try:
            dtype = np.dtype(self.grayscale_dtype)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid grayscale_dtype: {e}")
        if dtype != np.uint8:
            raise ValueError(f"grayscale_dtype must be uint8, got {dtype}")


@dataclass
class PreprocessResult:
    """Result of the preprocessing pipeline.

    Attributes:
        original: Decoded input image (RGB or grayscale), orientation applied.
        processed: Final grayscale working image used for analysis.
        scale_factor: Ratio of original long edge to processed long edge.
                      Multiply working-image coordinates by it to get
                      original-image coordinates.
        config: The configuration used for preprocessing.
        artifact_paths: Step name -> saved file path (if artifact saving enabled).
    """

    original: np.ndarray
    processed: np.ndarray
    scale_factor: float
    config: PreprocessConfig
    artifact_paths: dict[str, str] = field(default_factory=dict)
