"""
Neighborhood operators: Gaussian blur, unsharp-mask sharpen and Sobel edges.

Border policy:
- blur: taps that fall outside the image are skipped and the sum is divided
  by the total weight of the taps that remained (clamp-and-renormalize), so
  a flat image stays flat up to its edges.
- edge_detect: pixels without a full 3x3 neighborhood get R=G=B=0.

Alpha is copied through unchanged by all three operators.
"""

import logging
import math
from typing import Optional

import cv2
import numpy as np

from pixelflow.core.buffer import PixelBuffer
from pixelflow.core.config import get_settings
from pixelflow.core.constants import BufferConstants, ConvolutionConstants
from pixelflow.core.enums import Operation
from pixelflow.core.utils.numeric import luminance, to_channel
from pixelflow.core.validation import ParameterValidator

logger = logging.getLogger(__name__)

_RGB = slice(0, BufferConstants.COLOR_CHANNELS)

_SOBEL_X = np.array(ConvolutionConstants.SOBEL_X, dtype=np.float64)
_SOBEL_Y = np.array(ConvolutionConstants.SOBEL_Y, dtype=np.float64)


def gaussian_kernel(radius: float) -> np.ndarray:
    """
    Build a normalized 1D Gaussian kernel.

    Size is ceil(2 * radius) forced odd, sigma is radius / 3.

    Args:
        radius: Blur radius, > 0

    Returns:
        float64 array of odd length, symmetric, summing to 1
    """
    size = int(math.ceil(radius * ConvolutionConstants.KERNEL_SIZE_FACTOR)) | 1
    sigma = radius / ConvolutionConstants.SIGMA_DIVISOR
    center = (size - 1) / 2.0

    offsets = np.arange(size, dtype=np.float64) - center
    kernel = np.exp(-(offsets**2) / (2.0 * sigma * sigma))
    return kernel / kernel.sum()


def _convolve_pass(channels: np.ndarray, kernel: np.ndarray, axis: int) -> np.ndarray:
    """
    One renormalized 1D convolution pass along an image axis.

    Args:
        channels: uint8 array of shape (H, W, C)
        kernel: Normalized 1D kernel
        axis: 0 for vertical, 1 for horizontal

    Returns:
        uint8 array of the same shape, rounded and clamped
    """
    source = np.moveaxis(channels.astype(np.float64), axis, 1)
    length = source.shape[1]
    reach = len(kernel) // 2

    padded = np.zeros(
        (source.shape[0], length + 2 * reach, source.shape[2]), dtype=np.float64
    )
    padded[:, reach : reach + length] = source
    inside = np.zeros(length + 2 * reach, dtype=np.float64)
    inside[reach : reach + length] = 1.0

    total = np.zeros_like(source)
    weight = np.zeros(length, dtype=np.float64)
    for tap, w in enumerate(kernel):
        total += w * padded[:, tap : tap + length]
        weight += w * inside[tap : tap + length]

    result = to_channel(total / weight[np.newaxis, :, np.newaxis])
    return np.moveaxis(result, 1, axis)


def _gaussian_blur(pixels: np.ndarray, radius: float) -> None:
    """Blur R, G, B of an (H, W, 4) array in place, horizontal pass first."""
    kernel = gaussian_kernel(radius)
    if len(kernel) == 1:
        return

    horizontal = _convolve_pass(pixels[..., _RGB], kernel, axis=1)
    pixels[..., _RGB] = _convolve_pass(horizontal, kernel, axis=0)


def blur(buffer: PixelBuffer, radius: float) -> None:
    """
    Apply a separable Gaussian blur.

    Args:
        buffer: Target buffer
        radius: Blur radius in (0, 50]

    Raises:
        InvalidParameter: If radius is outside (0, 50]
    """
    params = ParameterValidator.validate(Operation.BLUR, radius=radius)

    _gaussian_blur(buffer.pixels, params.radius)
    logger.debug(f"blur(radius={params.radius}) applied to {buffer!r}")


def sharpen(buffer: PixelBuffer, amount: float, radius: Optional[float] = None) -> None:
    """
    Sharpen with unsharp masking: C' = C + amount * (C - blurred).

    Args:
        buffer: Target buffer
        amount: Strength in [0, 5]; 0 leaves the image unchanged
        radius: Radius of the blurred copy; defaults to the configured
            sharpen radius

    Raises:
        InvalidParameter: If amount is outside [0, 5]
    """
    params = ParameterValidator.validate(Operation.SHARPEN, amount=amount)
    if radius is None:
        radius = get_settings().sharpen_radius
    else:
        radius = ParameterValidator.validate(Operation.BLUR, radius=radius).radius

    pixels = buffer.pixels
    blurred = pixels.copy()
    _gaussian_blur(blurred, radius)

    original = pixels[..., _RGB].astype(np.float64)
    detail = original - blurred[..., _RGB].astype(np.float64)
    pixels[..., _RGB] = to_channel(original + params.amount * detail)
    logger.debug(f"sharpen(amount={params.amount}, radius={radius}) applied to {buffer!r}")


def edge_detect(buffer: PixelBuffer) -> None:
    """
    Replace R, G, B with the Sobel gradient magnitude of the luminance.

    magnitude = clamp(round(sqrt(Gx^2 + Gy^2)), 0, 255) on interior pixels;
    the one-pixel border is set to 0. Alpha is preserved.
    """
    pixels = buffer.pixels
    height, width = pixels.shape[:2]
    edges = np.full((height, width), ConvolutionConstants.SOBEL_BORDER_VALUE, dtype=np.uint8)

    if height >= 3 and width >= 3:
        gray = luminance(pixels)
        grad_x = cv2.filter2D(gray, cv2.CV_64F, _SOBEL_X)
        grad_y = cv2.filter2D(gray, cv2.CV_64F, _SOBEL_Y)
        magnitude = np.sqrt(grad_x**2 + grad_y**2)
        edges[1:-1, 1:-1] = to_channel(magnitude[1:-1, 1:-1])

    pixels[..., _RGB] = edges[..., np.newaxis]
    logger.debug(f"edge_detect applied to {buffer!r}")
