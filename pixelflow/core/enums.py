"""
Enumerations shared across the pixelflow engine.
"""

from enum import Enum


class Operation(str, Enum):
    """Operations supported on a pixel buffer."""

    GRAYSCALE = "grayscale"
    SEPIA = "sepia"
    INVERT = "invert"
    BRIGHTNESS = "brightness"
    CONTRAST = "contrast"
    BLUR = "blur"
    SHARPEN = "sharpen"
    EDGE_DETECT = "edge_detect"
    FLIP_HORIZONTAL = "flip_horizontal"
    FLIP_VERTICAL = "flip_vertical"
    ROTATE_90 = "rotate90"
    RESIZE = "resize"


class Preset(str, Enum):
    """Built-in filter presets."""

    NASHVILLE = "nashville"
    CLARENDON = "clarendon"
    LOMO = "lomo"
