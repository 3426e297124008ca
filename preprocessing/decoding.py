"""
Decoding of uploaded image bytes into pixel arrays.

Phones store the camera orientation in EXIF instead of rotating pixels, so
the orientation tag is applied before anything looks at the image.
"""

import io

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError


class ImageDecodeError(ValueError):
    """Raised when image bytes cannot be decoded into pixels."""


def decode_image(image_data: bytes) -> np.ndarray:
    """Decode image bytes into an upright RGB array.

    Args:
        image_data: Raw bytes of any format Pillow can read.

    Returns:
        RGB image as a (H, W, 3) uint8 numpy array.

    Raises:
        ImageDecodeError: If the bytes are empty or not a readable image.
    """
    if not image_data:
        raise ImageDecodeError("No image data")

    try:
        image = Image.open(io.BytesIO(image_data))
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ImageDecodeError(f"Unreadable image: {e}") from e

    image = ImageOps.exif_transpose(image)

    if image.mode != "RGB":
        image = image.convert("RGB")

    return np.array(image)
