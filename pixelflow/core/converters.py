"""
Image format conversion utilities.

Handles conversions between PixelBuffer and in-memory image formats:
- NumPy arrays (RGBA, shape (H, W, 4))
- PIL Images (any mode, converted to RGBA)
- OpenCV arrays (grayscale, BGR or BGRA)
- Base64 encoded PNG strings
"""

import base64
import binascii
import io
import logging

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from pixelflow.core.buffer import PixelBuffer
from pixelflow.core.constants import BufferConstants, ErrorMessages, SystemConstants
from pixelflow.core.exceptions import ConstructionError

logger = logging.getLogger(__name__)

_OPENCV_TO_RGBA = {
    1: cv2.COLOR_GRAY2RGBA,
    3: cv2.COLOR_BGR2RGBA,
    4: cv2.COLOR_BGRA2RGBA,
}


class ImageConverters:
    """Utilities for converting between PixelBuffer and image formats."""

    @staticmethod
    def from_array(array: np.ndarray) -> PixelBuffer:
        """
        Create a buffer from an RGBA NumPy array.

        Args:
            array: uint8 array of shape (height, width, 4)

        Returns:
            New PixelBuffer holding a copy of the array
        """
        if array.ndim != 3 or array.shape[2] != BufferConstants.CHANNELS:
            raise ConstructionError(
                ErrorMessages.INVALID_ARRAY_SHAPE.format(
                    channels=BufferConstants.CHANNELS, shape=array.shape
                )
            )
        height, width = array.shape[:2]
        return PixelBuffer(array, width, height)

    @staticmethod
    def to_array(buffer: PixelBuffer) -> np.ndarray:
        """Return a (H, W, 4) RGBA copy of the buffer."""
        return buffer.to_array()

    @staticmethod
    def from_pil(image: Image.Image) -> PixelBuffer:
        """
        Create a buffer from a PIL Image.

        Args:
            image: PIL Image in any mode (converted to RGBA)

        Returns:
            New PixelBuffer
        """
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return PixelBuffer(image.tobytes(), image.width, image.height)

    @staticmethod
    def to_pil(buffer: PixelBuffer) -> Image.Image:
        """Convert a buffer to an RGBA PIL Image."""
        return Image.frombytes("RGBA", (buffer.width, buffer.height), buffer.get_data())

    @staticmethod
    def from_opencv(image: np.ndarray) -> PixelBuffer:
        """
        Create a buffer from an OpenCV image.

        Args:
            image: uint8 array, grayscale (H, W), BGR (H, W, 3) or BGRA (H, W, 4)

        Returns:
            New PixelBuffer in RGBA order; alpha is 255 unless the input had one
        """
        channels = image.shape[2] if image.ndim == 3 else 1
        if image.ndim not in (2, 3) or channels not in _OPENCV_TO_RGBA:
            raise ConstructionError(
                ErrorMessages.INVALID_ARRAY_SHAPE.format(
                    channels="1, 3 or 4", shape=image.shape
                )
            )
        if image.dtype != np.uint8:
            raise ConstructionError(
                ErrorMessages.INVALID_PIXEL_VALUES.format(reason=f"dtype {image.dtype}")
            )

        rgba = cv2.cvtColor(image, _OPENCV_TO_RGBA[channels])
        return PixelBuffer.from_pixels(rgba)

    @staticmethod
    def to_opencv(buffer: PixelBuffer, with_alpha: bool = True) -> np.ndarray:
        """
        Convert a buffer to OpenCV channel order.

        Args:
            buffer: Source buffer
            with_alpha: If True return BGRA, else BGR

        Returns:
            New uint8 array
        """
        code = cv2.COLOR_RGBA2BGRA if with_alpha else cv2.COLOR_RGBA2BGR
        return cv2.cvtColor(buffer.pixels, code)

    @staticmethod
    def to_base64(buffer: PixelBuffer, format: str = SystemConstants.DEFAULT_ENCODE_FORMAT) -> str:
        """
        Encode a buffer as a base64 image string.

        Args:
            buffer: Source buffer
            format: Pillow format name; must support RGBA (PNG, WEBP, TIFF)

        Returns:
            Base64 encoded string
        """
        try:
            output = io.BytesIO()
            ImageConverters.to_pil(buffer).save(output, format=format)
            return base64.b64encode(output.getvalue()).decode("utf-8")
        except (OSError, ValueError, KeyError) as e:
            logger.error(f"Failed to encode image to base64: {e}")
            raise

    @staticmethod
    def from_base64(base64_string: str) -> PixelBuffer:
        """
        Decode a base64 image string into a buffer.

        Args:
            base64_string: Base64 encoded image in any format Pillow reads

        Returns:
            New PixelBuffer

        Raises:
            ConstructionError: If the string is not a decodable image
        """
        try:
            image_bytes = base64.b64decode(base64_string, validate=True)
            with Image.open(io.BytesIO(image_bytes)) as image:
                return ImageConverters.from_pil(image)
        except (binascii.Error, UnidentifiedImageError, OSError) as e:
            logger.error(f"Failed to decode base64 image: {e}")
            raise ConstructionError(f"Invalid base64 image: {e}") from e
