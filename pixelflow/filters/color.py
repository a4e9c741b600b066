"""
Per-pixel color filters.

Each filter is context-free: a pixel's new value depends only on its own
R, G, B values. All filters mutate the buffer in place and leave alpha alone.
"""

import logging

import numpy as np

from pixelflow.core.buffer import PixelBuffer
from pixelflow.core.constants import BufferConstants, ColorConstants
from pixelflow.core.enums import Operation
from pixelflow.core.utils.numeric import luminance, to_channel
from pixelflow.core.validation import ParameterValidator

logger = logging.getLogger(__name__)

_RGB = slice(0, BufferConstants.COLOR_CHANNELS)

_SEPIA = np.array(ColorConstants.SEPIA_MATRIX, dtype=np.float64)


def grayscale(buffer: PixelBuffer) -> None:
    """
    Convert to grayscale with the luminosity formula.

    gray = round(0.299R + 0.587G + 0.114B), written to R, G and B.
    """
    pixels = buffer.pixels
    gray = to_channel(luminance(pixels))
    pixels[..., _RGB] = gray[..., np.newaxis]
    logger.debug(f"grayscale applied to {buffer!r}")


def sepia(buffer: PixelBuffer) -> None:
    """
    Apply the standard sepia color matrix.

    Each output channel is a weighted sum of the input R, G, B, rounded and
    clamped to [0, 255].
    """
    pixels = buffer.pixels
    rgb = pixels[..., _RGB].astype(np.float64)
    pixels[..., _RGB] = to_channel(rgb @ _SEPIA.T)
    logger.debug(f"sepia applied to {buffer!r}")


def invert(buffer: PixelBuffer) -> None:
    """Invert colors: C' = 255 - C."""
    pixels = buffer.pixels
    np.subtract(
        BufferConstants.MAX_CHANNEL_VALUE, pixels[..., _RGB], out=pixels[..., _RGB]
    )
    logger.debug(f"invert applied to {buffer!r}")


def brightness(buffer: PixelBuffer, amount: float) -> None:
    """
    Shift brightness.

    Args:
        buffer: Target buffer
        amount: Percent of full scale in [-100, 100]; C' = C + amount * 2.55

    Raises:
        InvalidParameter: If amount is outside [-100, 100]
    """
    params = ParameterValidator.validate(Operation.BRIGHTNESS, amount=amount)

    delta = params.amount * BufferConstants.MAX_CHANNEL_VALUE / ColorConstants.PERCENT_SCALE
    pixels = buffer.pixels
    pixels[..., _RGB] = to_channel(pixels[..., _RGB].astype(np.float64) + delta)
    logger.debug(f"brightness({params.amount}) applied to {buffer!r}")


def contrast(buffer: PixelBuffer, amount: float) -> None:
    """
    Scale contrast around mid-gray.

    factor = 1 + amount / 100, intercept = 128 * (1 - factor),
    C' = C * factor + intercept.

    Args:
        buffer: Target buffer
        amount: Percent in [-100, 100]; -100 flattens every channel to 128

    Raises:
        InvalidParameter: If amount is outside [-100, 100]
    """
    params = ParameterValidator.validate(Operation.CONTRAST, amount=amount)

    factor = 1.0 + params.amount / ColorConstants.PERCENT_SCALE
    intercept = ColorConstants.CONTRAST_PIVOT * (1.0 - factor)
    pixels = buffer.pixels
    pixels[..., _RGB] = to_channel(pixels[..., _RGB].astype(np.float64) * factor + intercept)
    logger.debug(f"contrast({params.amount}) applied to {buffer!r}")
