"""
Image normalization functions for preprocessing.

All functions are pure: they take an input and return a new output without
mutating the original array.
"""

import numpy as np
import cv2


def _check_image_array(img: np.ndarray) -> None:
    if not isinstance(img, np.ndarray):
        raise TypeError(f"Expected numpy.ndarray, got {type(img).__name__}")

    if img.ndim < 2 or img.ndim > 3:
        raise ValueError(
            f"Image must be 2D or 3D array, got {img.ndim}D array with shape {img.shape}"
        )

    if img.size == 0:
        raise ValueError("Image array is empty")


def to_grayscale(img: np.ndarray, dtype: np.dtype = np.uint8) -> np.ndarray:
    """Convert an image to grayscale.

    Args:
        img: Input image. RGB (3 channels) and RGBA (4 channels, alpha
             dropped) are converted with ITU-R BT.601 weights; 2D and
             single-channel images are copied.
        dtype: Output dtype. Default is uint8 (0=black..255=white).

    Returns:
        Grayscale image as 2D numpy array with the specified dtype.

    Raises:
        ValueError: If input is not a valid image array.
        TypeError: If img is not a numpy array.

    Examples:
        >>> rgb = np.zeros((100, 200, 3), dtype=np.uint8)
        >>> to_grayscale(rgb).shape
        (100, 200)
    """
    _check_image_array(img)

    if img.ndim == 2:
        result = img.copy()
    else:
        channels = img.shape[2]
        if channels == 1:
            result = img[:, :, 0].copy()
        elif channels == 3:
            result = cv2.cvtColor(np.ascontiguousarray(img), cv2.COLOR_RGB2GRAY)
        elif channels == 4:
            rgb = np.ascontiguousarray(img[:, :, :3])
            result = cv2.cvtColor(rgb, cv2.COLOR_RGB2GRAY)
        else:
            raise ValueError(
                f"Unsupported number of channels: {channels}. "
                "Expected 1, 3 (RGB), or 4 (RGBA)."
            )

    if result.dtype != dtype:
        if np.issubdtype(dtype, np.integer):
            info = np.iinfo(dtype)
            result = np.clip(result, info.min, info.max).astype(dtype)
        else:
            result = result.astype(dtype)

    return result


def limit_long_edge(
    img: np.ndarray,
    max_edge: int,
    interpolation: int = cv2.INTER_AREA,
) -> tuple[np.ndarray, float]:
    """Downsample an image so its longest edge is at most max_edge.

    Images already within the limit are copied unchanged; this never
    upsamples, since upsampling adds no detail to the holes.

    Args:
        img: Input image (2D grayscale or 3D color).
        max_edge: Maximum allowed length of the longer side in pixels.
        interpolation: OpenCV interpolation method. INTER_AREA averages
                       source pixels, which keeps small dark holes visible.

    Returns:
        Tuple of:
        - Resized image with same dtype as input
        - Scale factor (original long edge / new long edge)

    Raises:
        ValueError: If max_edge is not positive or image is invalid.
        TypeError: If img is not a numpy array or max_edge is not an int.

    Examples:
        >>> img = np.zeros((3000, 2000), dtype=np.uint8)
        >>> resized, scale = limit_long_edge(img, 1200)
        >>> resized.shape
        (1200, 800)
        >>> scale
        2.5
    """
    _check_image_array(img)

    if not isinstance(max_edge, int):
        raise TypeError(f"max_edge must be int, got {type(max_edge).__name__}")

    if max_edge <= 0:
        raise ValueError(f"max_edge must be positive, got {max_edge}")

    height, width = img.shape[:2]
    long_edge = max(width, height)
    if long_edge <= max_edge:
        return img.copy(), 1.0

    scale_factor = long_edge / max_edge
    new_width = max(1, int(round(width / scale_factor)))
    new_height = max(1, int(round(height / scale_factor)))

    resized = cv2.resize(img, (new_width, new_height), interpolation=interpolation)
    return resized, scale_factor
