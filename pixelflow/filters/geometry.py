"""
Geometric transforms: flips, clockwise rotation and nearest-neighbor resize.

Flips remap pixels inside the existing store. rotate90 and resize change the
dimensions and therefore return a new PixelBuffer; the source buffer is left
as it was.
"""

import logging

import numpy as np

from pixelflow.core.buffer import PixelBuffer
from pixelflow.core.enums import Operation
from pixelflow.core.validation import ParameterValidator

logger = logging.getLogger(__name__)


def flip_horizontal(buffer: PixelBuffer) -> None:
    """Mirror left-right in place."""
    pixels = buffer.pixels
    pixels[...] = pixels[:, ::-1].copy()
    logger.debug(f"flip_horizontal applied to {buffer!r}")


def flip_vertical(buffer: PixelBuffer) -> None:
    """Mirror top-bottom in place."""
    pixels = buffer.pixels
    pixels[...] = pixels[::-1].copy()
    logger.debug(f"flip_vertical applied to {buffer!r}")


def rotate90(buffer: PixelBuffer) -> PixelBuffer:
    """
    Rotate 90 degrees clockwise.

    Destination pixel (x, y) takes source pixel (y, height - 1 - x).

    Args:
        buffer: Source buffer (not modified)

    Returns:
        New buffer with width and height swapped
    """
    rotated = np.ascontiguousarray(np.rot90(buffer.pixels, k=-1, axes=(0, 1)))
    result = PixelBuffer.from_pixels(rotated)
    logger.info(
        f"Rotated {buffer.width}x{buffer.height} -> {result.width}x{result.height}"
    )
    return result


def resize(buffer: PixelBuffer, new_width: int, new_height: int) -> PixelBuffer:
    """
    Resize with nearest-neighbor sampling.

    Destination (dx, dy) takes source (floor(dx * width / new_width),
    floor(dy * height / new_height)), clamped to the source extent. The
    indices are computed in integer arithmetic so that identical dimensions
    map every pixel onto itself.

    Args:
        buffer: Source buffer (not modified)
        new_width: Target width, > 0
        new_height: Target height, > 0

    Returns:
        New buffer of new_width * new_height pixels

    Raises:
        InvalidParameter: If either dimension is not a positive integer
    """
    params = ParameterValidator.validate(
        Operation.RESIZE, new_width=new_width, new_height=new_height
    )
    width, height = buffer.width, buffer.height

    src_x = np.minimum(np.arange(params.new_width) * width // params.new_width, width - 1)
    src_y = np.minimum(np.arange(params.new_height) * height // params.new_height, height - 1)

    resized = buffer.pixels[src_y[:, np.newaxis], src_x[np.newaxis, :]]
    result = PixelBuffer.from_pixels(np.ascontiguousarray(resized))
    logger.info(f"Resized {width}x{height} -> {result.width}x{result.height}")
    return result
