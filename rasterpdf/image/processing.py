"""Image helpers for captured screenshots: decoding and alpha handling.

These utilities operate on numpy image arrays (RGB uint8) using OpenCV.
"""

from __future__ import annotations

from typing import Tuple

import cv2
import numpy as np


class ImageDecodeError(ValueError):
    """Encoded image bytes could not be turned into pixels."""


def decode_image(data: bytes) -> np.ndarray:
    """Decode encoded image bytes (PNG, JPEG, ...) into an RGB array.

    Doxygen:
    - @param data: Encoded image file contents.
    - @return: RGB uint8 array of shape (H, W, 3); transparency is flattened onto white.
    - @throws ImageDecodeError: If OpenCV cannot decode the bytes.
    """
    if not data:
        raise ImageDecodeError("No image data")
    decoded = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_UNCHANGED)
    if decoded is None:
        raise ImageDecodeError(f"Unsupported image data ({len(data)} bytes)")
    return to_rgb(decoded)


def to_rgb(img: np.ndarray) -> np.ndarray:
    """Normalize an OpenCV-decoded image (gray, BGR or BGRA, 8/16 bit) to RGB uint8."""
    if img.dtype == np.uint16:
        img = (img // 257).astype(np.uint8)
    elif img.dtype != np.uint8:
        img = cv2.normalize(img, None, 0, 255, cv2.NORM_MINMAX).astype(np.uint8)

    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2RGB)
    if img.shape[2] == 4:
        return flatten_alpha(cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA))
    return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)


def flatten_alpha(rgba: np.ndarray, background: Tuple[int, int, int] = (255, 255, 255)) -> np.ndarray:
    """Composite an RGBA array onto a solid background color."""
    alpha = rgba[:, :, 3:4].astype(np.float32) / 255.0
    color = rgba[:, :, :3].astype(np.float32)
    bg = np.array(background, dtype=np.float32).reshape(1, 1, 3)
    return np.clip(color * alpha + bg * (1.0 - alpha), 0, 255).astype(np.uint8)
