"""
Global dark/light separation with Otsu's method.
"""

import numpy as np


def intensity_histogram(samples: np.ndarray) -> np.ndarray:
    """Return a 256-bin histogram of uint8 intensities."""
    if samples.dtype != np.uint8:
        raise ValueError(f"Expected uint8 samples, got {samples.dtype}")
    return np.bincount(samples.ravel(), minlength=256)


def otsu_threshold(samples: np.ndarray) -> int:
    """Compute Otsu's threshold for uint8 samples.

    A split t puts intensities < t in the dark class and >= t in the light
    class. The split maximizing the between-class variance
    wB * wF * (mB - mF)^2 wins; the first maximum wins ties, which keeps the
    threshold just above the darkest mode on perfectly bimodal data.

    cv2.threshold(..., THRESH_OTSU) is not used here: it splits at <= t / > t
    and its tie handling is not part of its contract, while downstream
    filtering and clamping depend on the exact < t, first-maximum split.

    Args:
        samples: uint8 intensities (any shape).

    Returns:
        Threshold in [1, 255]. Uniform input returns 1.
    """
    hist = intensity_histogram(samples).astype(np.float64)
    total = hist.sum()
    if total == 0:
        raise ValueError("Cannot threshold an empty sample")

    levels = np.arange(256, dtype=np.float64)
    sum_total = float(np.dot(levels, hist))

    best_t = 1
    best_var = -1.0
    w_b = 0.0
    sum_b = 0.0
    for t in range(1, 256):
        w_b += hist[t - 1]
        sum_b += (t - 1) * hist[t - 1]
        w_f = total - w_b
        if w_b == 0:
            continue
        if w_f == 0:
            break
        m_b = sum_b / w_b
        m_f = (sum_total - sum_b) / w_f
        between = w_b * w_f * (m_b - m_f) ** 2
        if between > best_var:
            best_var = between
            best_t = t
    return best_t


def clamped_threshold(samples: np.ndarray, clamp_min: int, clamp_max: int) -> int:
    """Otsu's threshold clamped to [clamp_min, clamp_max]."""
    return int(min(max(otsu_threshold(samples), clamp_min), clamp_max))


def binarize(crop: np.ndarray, threshold: int) -> np.ndarray:
    """Foreground mask (True = dark) of pixels strictly below threshold."""
    return crop < threshold
