"""
Schemas Package

Pydantic models for parameter validation and processor data structures.
"""

from pixelflow.core.enums import Operation, Preset

from .common import Bounds, Dimensions, PipelineStep
from .params import (
    BaseOperationParams,
    BlurParams,
    BrightnessParams,
    ContrastParams,
    NoParams,
    ResizeParams,
    SharpenParams,
)

__all__ = [
    # Common models
    "Bounds",
    "Dimensions",
    "PipelineStep",
    # Operation params
    "BaseOperationParams",
    "NoParams",
    "BlurParams",
    "SharpenParams",
    "BrightnessParams",
    "ContrastParams",
    "ResizeParams",
    # Enums (re-exported from core.enums)
    "Operation",
    "Preset",
]
