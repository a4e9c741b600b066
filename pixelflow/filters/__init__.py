"""
Pixel operations.

- color: per-pixel filters (grayscale, sepia, invert, brightness, contrast)
- convolution: neighborhood operators (blur, sharpen, edge_detect)
- geometry: index remapping (flips, rotate90, resize)
"""

from .color import brightness, contrast, grayscale, invert, sepia
from .convolution import blur, edge_detect, gaussian_kernel, sharpen
from .geometry import flip_horizontal, flip_vertical, resize, rotate90

__all__ = [
    "grayscale",
    "sepia",
    "invert",
    "brightness",
    "contrast",
    "blur",
    "sharpen",
    "edge_detect",
    "gaussian_kernel",
    "flip_horizontal",
    "flip_vertical",
    "rotate90",
    "resize",
]
