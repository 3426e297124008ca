"""Batch analysis package (worker pool over many photos)."""

from .runner import FileReport, analyze_file, analyze_files, find_images

__all__ = [
    "FileReport",
    "analyze_file",
    "analyze_files",
    "find_images",
]
