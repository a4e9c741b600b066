"""
Numeric helpers shared by the filters.

All channel arithmetic is done in float64 and brought back to uint8 through
to_channel(), which rounds half away from zero for non-negative values
(floor(x + 0.5)) and then clamps to [0, 255].
"""

import numpy as np

from pixelflow.core.constants import BufferConstants, ColorConstants


def round_half_up(values: np.ndarray) -> np.ndarray:
    """
    Round to the nearest integer, ties toward +inf.

    np.rint() rounds ties to even, which would turn 0.5 into 0 and 2.5 into 2.
    The filters need ties to go up so that results match the luminosity and
    color-matrix formulas evaluated with ordinary rounding.

    Args:
        values: Float array

    Returns:
        Float array of rounded values
    """
    return np.floor(np.asarray(values, dtype=np.float64) + 0.5)


def clamp(values: np.ndarray, low: float, high: float) -> np.ndarray:
    """Clamp values to [low, high]."""
    return np.clip(values, low, high)


def to_channel(values: np.ndarray) -> np.ndarray:
    """
    Round and clamp float channel values into uint8.

    Args:
        values: Float array of channel values, any range

    Returns:
        uint8 array of the same shape
    """
    rounded = round_half_up(values)
    return clamp(
        rounded, BufferConstants.MIN_CHANNEL_VALUE, BufferConstants.MAX_CHANNEL_VALUE
    ).astype(np.uint8)


def luminance(pixels: np.ndarray) -> np.ndarray:
    """
    Compute unrounded luminosity of RGBA pixels.

    Args:
        pixels: Array of shape (..., 4), uint8

    Returns:
        float64 array of shape (...,)
    """
    rgb = pixels[..., : BufferConstants.COLOR_CHANNELS].astype(np.float64)
    return (
        ColorConstants.LUMA_RED * rgb[..., 0]
        + ColorConstants.LUMA_GREEN * rgb[..., 1]
        + ColorConstants.LUMA_BLUE * rgb[..., 2]
    )
