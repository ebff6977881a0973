# ============================================================
# FILE: media/brightness.py
# ============================================================

import io
import logging
import time

import numpy as np
from PIL import Image, UnidentifiedImageError

from utils.errors import InvalidInput

logger = logging.getLogger(__name__)

# ITU-R BT.601 luma weights
LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114])


def average_brightness(jpeg_bytes: bytes) -> float:
    """Mean perceptual luminance of an encoded image, normalized to [0, 1]."""
    if not jpeg_bytes:
        raise InvalidInput("Invalid JPEG image: empty payload")
    try:
        with Image.open(io.BytesIO(jpeg_bytes)) as image:
            pixels = np.asarray(image.convert('RGB'), dtype=np.float64)
    except (UnidentifiedImageError, OSError) as e:
        raise InvalidInput(f"Invalid JPEG image: {e}") from e

    if pixels.size == 0:
        raise InvalidInput("Invalid JPEG image: no pixels")
    return float((pixels @ LUMA_WEIGHTS).mean() / 255.0)


def is_mostly_dark(jpeg_bytes: bytes, threshold: float) -> bool:
    """Report whether the average brightness of an image is below ``threshold``.

    Args:
        jpeg_bytes: Compressed image
        threshold: Brightness cut-off in [0, 1]

    Raises:
        ValueError: If threshold is outside [0, 1]
        InvalidInput: If the bytes cannot be decoded
    """
    if not 0.0 <= threshold <= 1.0:
        raise ValueError(f"Brightness threshold must be between 0 and 1, got {threshold}")

    start = time.perf_counter()
    brightness = average_brightness(jpeg_bytes)
    is_dark = brightness < threshold
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.debug(f"Average brightness {brightness:.4f} (dark={is_dark}), took {elapsed_ms:.1f} ms")
    return is_dark
