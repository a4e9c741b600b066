"""
Service layer: the fluent ImageProcessor wrapper.
"""

from .processor import ImageProcessor

__all__ = ["ImageProcessor"]
