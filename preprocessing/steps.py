"""
Preprocessing step classes with a common interface.

Each step implements PreprocessStep. Steps are pure: they take an input and
return a new output without mutating the original array.

Usage:
    from preprocessing.steps import GrayscaleStep, ResizeStep, Pipeline

    pipeline = Pipeline(steps=[
        GrayscaleStep(),
        ResizeStep(max_edge=1200),
    ])
    result = pipeline.run(image)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import cv2
import numpy as np

from .normalization import to_grayscale, limit_long_edge


class PreprocessStep(ABC):
    """Base class for preprocessing steps.

    Steps can optionally produce metadata (like scale factors) that needs to
    be preserved for mapping working coordinates back to the photo.
    """

    @abstractmethod
    def apply(self, img: np.ndarray) -> np.ndarray:
        """Apply this step to an image without mutating it."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for logging and artifact file names."""
        pass

    def get_metadata(self) -> dict[str, Any]:
        """Return metadata produced by the last apply() call."""
        return {}


@dataclass(frozen=True)
class GrayscaleStep(PreprocessStep):
    """Convert image to grayscale.

    Attributes:
        dtype: Output numpy dtype.
    """

    dtype: np.dtype = field(default_factory=lambda: np.dtype(np.uint8))

    def apply(self, img: np.ndarray) -> np.ndarray:
        return to_grayscale(img, self.dtype)

    @property
    def name(self) -> str:
        return "grayscale"


@dataclass
class ResizeStep(PreprocessStep):
    """Downsample so the long edge is at most max_edge.

    Tracks the scale factor as metadata.

    Attributes:
        max_edge: Maximum long edge in pixels.
        interpolation: OpenCV interpolation method.
    """

    max_edge: int
    interpolation: int = cv2.INTER_AREA
    _scale_factor: float = field(default=1.0, init=False, repr=False)

    def apply(self, img: np.ndarray) -> np.ndarray:
        resized, scale_factor = limit_long_edge(img, self.max_edge, self.interpolation)
        self._scale_factor = scale_factor
        return resized

    @property
    def name(self) -> str:
        return f"resize({self.max_edge})"

    def get_metadata(self) -> dict[str, Any]:
        return {"scale_factor": self._scale_factor}


@dataclass
class StepResult:
    """Output of a single step, with its metadata and saved artifact path."""

    name: str
    image: np.ndarray
    metadata: dict[str, Any] = field(default_factory=dict)
    artifact_path: str | None = None


@dataclass
class PipelineStepResults:
    """All intermediate images from a pipeline run.

    Attributes:
        original: The original input image.
        steps: StepResult for each step in order.
        original_artifact_path: Where the original was saved, if it was.
    """

    original: np.ndarray
    steps: list[StepResult] = field(default_factory=list)
    original_artifact_path: str | None = None

    @property
    def final(self) -> np.ndarray:
        """Get the final processed image."""
        if not self.steps:
            return self.original
        return self.steps[-1].image

    def get_metadata(self, key: str) -> Any | None:
        """Return the first metadata value stored under key by any step."""
        for step in self.steps:
            if key in step.metadata:
                return step.metadata[key]
        return None

    @property
    def scale_factor(self) -> float:
        return self.get_metadata("scale_factor") or 1.0

    @property
    def artifact_paths(self) -> dict[str, str]:
        """Saved artifacts keyed by normalized step name ("resize", not "resize(1200)")."""
        paths = {}
        if self.original_artifact_path:
            paths["original"] = self.original_artifact_path
        for step in self.steps:
            if step.artifact_path:
                paths[step.name.split("(")[0]] = step.artifact_path
        return paths


def _save_image(img: np.ndarray, path: str) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    cv2.imwrite(path, img)


@dataclass
class Pipeline:
    """A sequence of preprocessing steps.

    Each step receives the previous step's output. All intermediate results
    are preserved.
    """

    steps: list[PreprocessStep]

    def run(
        self,
        img: np.ndarray,
        artifact_dir: str | None = None,
    ) -> PipelineStepResults:
        """Run every step on an image.

        Args:
            img: Input image as numpy array.
            artifact_dir: Optional directory to save original.png and each
                          step's output.

        Returns:
            PipelineStepResults containing all intermediate images and metadata.
        """
        result = PipelineStepResults(original=img.copy())
        current = img.copy()

        if artifact_dir:
            original_path = f"{artifact_dir}/original.png"
            if img.ndim == 3 and img.shape[2] == 3:
                _save_image(cv2.cvtColor(img, cv2.COLOR_RGB2BGR), original_path)
            else:
                _save_image(img, original_path)
            result.original_artifact_path = original_path

        for step in self.steps:
            output = step.apply(current)

            artifact_path = None
            if artifact_dir:
                artifact_path = f"{artifact_dir}/{step.name.split('(')[0]}.png"
                _save_image(output, artifact_path)

            result.steps.append(
                StepResult(
                    name=step.name,
                    image=output,
                    metadata=step.get_metadata(),
                    artifact_path=artifact_path,
                )
            )
            current = output

        return result

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self):
        return iter(self.steps)
