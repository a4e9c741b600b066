"""
Utility modules for core functionality.

Modules:
- decorators: Timing context manager
- numeric: Rounding, clamping and luminance helpers
"""

from .decorators import timer
from .numeric import clamp, luminance, round_half_up, to_channel

__all__ = [
    "timer",
    "clamp",
    "luminance",
    "round_half_up",
    "to_channel",
]
