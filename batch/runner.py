"""Batch analysis of target photos on a bounded worker pool.

Each image is analyzed independently; workers share nothing but the
read-only configs. Internal failures are caught here, at the outermost
boundary, logged, and reported per file without a correction.
"""

from __future__ import annotations

import logging
import multiprocessing
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from tqdm import tqdm

from analysis import AnalysisConfig, analyze_image_bytes
from config import BATCH_TIMEOUT_SECONDS, IMAGE_EXTENSIONS
from preprocessing import ImageDecodeError, PreprocessConfig

logger = logging.getLogger(__name__)

ERROR_UNREADABLE = "UNREADABLE_IMAGE"
ERROR_INTERNAL = "INTERNAL_ERROR"
ERROR_TIMEOUT = "TIMEOUT"


@dataclass
class FileReport:
    """Outcome of analyzing one file.

    Exactly one of result / error is set. result is the analysis wire dict
    (ok, clicks or rejection code, diagnostics).
    """

    path: str
    result: dict[str, Any] | None = None
    error: str | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.result is not None and bool(self.result.get("ok"))

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"path": self.path}
        if self.result is not None:
            payload.update(self.result)
        else:
            payload.update({"ok": False, "error": self.error, "message": self.message})
        return payload


def find_images(source: str | Path) -> list[Path]:
    """Find image files in a directory, or return a single image file.

    Args:
        source: Path to a directory (not searched recursively) or one image.

    Returns:
        Sorted list of image file paths.

    Raises:
        ValueError: If path doesn't exist or isn't a valid image/directory.
    """
    path = Path(source).resolve()

    if path.is_file():
        if path.suffix.lower() in IMAGE_EXTENSIONS:
            return [path]
        raise ValueError(f"{source} is not a supported image file")

    if not path.is_dir():
        raise ValueError(f"{source} is not a valid file or directory")

    return sorted(
        p for p in path.iterdir()
        if p.is_file() and p.suffix.lower() in IMAGE_EXTENSIONS
    )


def analyze_file(
    path: str | Path,
    config: AnalysisConfig | None = None,
    preprocess_config: PreprocessConfig | None = None,
) -> FileReport:
    """Analyze one image file, never raising for bad images.

    Gate rejections come back as normal results. Unreadable files and
    unexpected failures come back as errors.
    """
    path_str = str(path)
    try:
        image_data = Path(path).read_bytes()
        result = analyze_image_bytes(image_data, config, preprocess_config)
    except (ImageDecodeError, OSError) as e:
        logger.warning("Cannot read %s: %s", path_str, e)
        return FileReport(path=path_str, error=ERROR_UNREADABLE, message=str(e))
    except Exception:
        logger.exception("Analysis failed for %s", path_str)
        return FileReport(path=path_str, error=ERROR_INTERNAL, message="Analysis failed")

    return FileReport(path=path_str, result=result.to_dict())


def analyze_files(
    paths: list[str | Path],
    config: AnalysisConfig | None = None,
    preprocess_config: PreprocessConfig | None = None,
    max_workers: int | None = None,
    timeout: float | None = BATCH_TIMEOUT_SECONDS,
    show_progress: bool = True,
    mp_context: Any = None,
) -> list[FileReport]:
    """Analyze many images in parallel, returning reports in input order.

    A worker that misses the timeout is terminated with its pool; the
    remaining files run on a fresh pool.

    Args:
        paths: Image files to analyze.
        config: Analysis config shared (read-only) by all workers.
        preprocess_config: Preprocessing config shared by all workers.
        max_workers: Pool size (None = CPU count, 1 = sequential in-process).
        timeout: Seconds to wait for each file's result (None = no limit).
                 A file that times out is reported as TIMEOUT.
        show_progress: Show a tqdm progress bar.
        mp_context: multiprocessing context for the pool (None = default).

    Raises:
        ValueError: If either config is invalid.
    """
    config = config if config is not None else AnalysisConfig()
    config.validate()
    preprocess_config = preprocess_config if preprocess_config is not None else PreprocessConfig()
    preprocess_config.validate()

    if max_workers is None:
        max_workers = os.cpu_count() or 1
    max_workers = max(1, min(max_workers, len(paths) or 1))

    progress = tqdm(total=len(paths), desc="Analyzing", unit="img", disable=not show_progress)

    if max_workers == 1:
        reports = []
        for path in paths:
            reports.append(analyze_file(path, config, preprocess_config))
            progress.update(1)
        progress.close()
    else:
        reports = _analyze_in_pool(
            paths, config, preprocess_config, max_workers, timeout, progress, mp_context
        )

    logger.info(
        "Analyzed %s images: %s corrections",
        len(reports), sum(1 for r in reports if r.ok),
    )
    return reports


def _analyze_in_pool(
    paths: list[str | Path],
    config: AnalysisConfig,
    preprocess_config: PreprocessConfig,
    max_workers: int,
    timeout: float | None,
    progress: tqdm,
    mp_context: Any = None,
) -> list[FileReport]:
    context = mp_context if mp_context is not None else multiprocessing.get_context()
    reports: list[FileReport] = []
    try:
        while len(reports) < len(paths):
            remaining = paths[len(reports):]
            pool = context.Pool(processes=min(max_workers, len(remaining)))
            try:
                pending = [
                    pool.apply_async(analyze_file, (path, config, preprocess_config))
                    for path in remaining
                ]
                for path, async_result in zip(remaining, pending):
                    try:
                        report = async_result.get(timeout=timeout)
                    except multiprocessing.TimeoutError:
                        logger.warning("Timed out after %ss: %s", timeout, path)
                        reports.append(FileReport(
                            path=str(path),
                            error=ERROR_TIMEOUT,
                            message=f"No result within {timeout}s",
                        ))
                        progress.update(1)
                        # A stuck worker cannot be reclaimed; restart the pool.
                        break
                    except Exception:
                        logger.exception("Worker failed for %s", path)
                        report = FileReport(
                            path=str(path),
                            error=ERROR_INTERNAL,
                            message="Analysis failed",
                        )
                    reports.append(report)
                    progress.update(1)
            finally:
                pool.terminate()
                pool.join()
    finally:
        progress.close()
    return reports
