"""Image-level processing utilities (decoding screenshots, alpha flattening)."""

from .processing import ImageDecodeError, decode_image, flatten_alpha, to_rgb

__all__ = [
    "ImageDecodeError",
    "decode_image",
    "flatten_alpha",
    "to_rgb",
]
