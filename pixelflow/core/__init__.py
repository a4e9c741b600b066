"""
Core modules for pixelflow
"""

from .buffer import PixelBuffer
from .enums import Operation, Preset
from .exceptions import ConstructionError, InvalidParameter, PixelFlowError

__all__ = [
    "PixelBuffer",
    "Operation",
    "Preset",
    "PixelFlowError",
    "ConstructionError",
    "InvalidParameter",
]
