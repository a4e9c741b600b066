"""
pixelflow - in-place RGBA pixel processing.

Color filters, separable convolution and geometric transforms over a
PixelBuffer, with a chainable ImageProcessor on top.
"""

from pixelflow.core.buffer import PixelBuffer
from pixelflow.core.config import Settings, configure_logging, get_settings
from pixelflow.core.converters import ImageConverters
from pixelflow.core.enums import Operation, Preset
from pixelflow.core.exceptions import ConstructionError, InvalidParameter, PixelFlowError
from pixelflow.core.validation import ParameterValidator
from pixelflow.services.processor import ImageProcessor

__version__ = "1.0.0"

__all__ = [
    "PixelBuffer",
    "ImageProcessor",
    "ImageConverters",
    "ParameterValidator",
    "Operation",
    "Preset",
    "Settings",
    "get_settings",
    "configure_logging",
    "PixelFlowError",
    "ConstructionError",
    "InvalidParameter",
]
