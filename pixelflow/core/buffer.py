"""
PixelBuffer - owned RGBA8 raster storage.
"""

import logging
from typing import Any

import numpy as np

from pixelflow.core.constants import BufferConstants, ErrorMessages
from pixelflow.core.exceptions import ConstructionError

logger = logging.getLogger(__name__)


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool) and value > 0


def _as_uint8(data: Any) -> np.ndarray:
    """Coerce caller data into a flat uint8 array without wrapping out-of-range values."""
    if isinstance(data, (bytes, bytearray, memoryview)):
        return np.frombuffer(bytes(data), dtype=np.uint8)

    array = np.asarray(data)
    if array.dtype == np.uint8:
        return array.reshape(-1)

    if array.size == 0:
        return np.zeros(0, dtype=np.uint8)

    if not np.issubdtype(array.dtype, np.integer):
        raise ConstructionError(
            ErrorMessages.INVALID_PIXEL_VALUES.format(reason=f"dtype {array.dtype}")
        )

    low, high = int(array.min()), int(array.max())
    if low < BufferConstants.MIN_CHANNEL_VALUE or high > BufferConstants.MAX_CHANNEL_VALUE:
        raise ConstructionError(
            ErrorMessages.INVALID_PIXEL_VALUES.format(reason=f"range [{low}, {high}]")
        )
    return array.astype(np.uint8).reshape(-1)


class PixelBuffer:
    """
    RGBA byte buffer with fixed dimensions.

    Pixels are stored row-major, top-left origin, channel order R, G, B, A.
    The store always holds exactly width * height * 4 bytes. Operations that
    change the dimensions build a new PixelBuffer instead of resizing this one.
    """

    __slots__ = ("_pixels",)

    def __init__(self, data: Any, width: int, height: int):
        """
        Create a buffer from caller-supplied pixel data.

        The data is copied; later changes to the caller's object do not
        affect the buffer.

        Args:
            data: bytes-like object, integer sequence or NumPy array of RGBA values
            width: Image width in pixels
            height: Image height in pixels

        Raises:
            ConstructionError: If the dimensions are not positive integers, the
                values are not bytes, or len(data) != width * height * 4
        """
        if not (_is_positive_int(width) and _is_positive_int(height)):
            raise ConstructionError.invalid_dimensions(width, height)

        flat = _as_uint8(data)
        expected = int(width) * int(height) * BufferConstants.CHANNELS
        if flat.size != expected:
            raise ConstructionError.size_mismatch(width, height, expected, int(flat.size))

        self._pixels = flat.reshape(int(height), int(width), BufferConstants.CHANNELS).copy()

    @classmethod
    def from_pixels(cls, pixels: np.ndarray) -> "PixelBuffer":
        """
        Build a buffer that takes ownership of an (H, W, 4) uint8 array.

        Used by transforms that produce a newly sized store. The array must
        not be referenced elsewhere after the call.

        Args:
            pixels: uint8 array of shape (height, width, 4)

        Returns:
            New PixelBuffer wrapping the array
        """
        if pixels.ndim != 3 or pixels.shape[2] != BufferConstants.CHANNELS:
            raise ConstructionError(
                ErrorMessages.INVALID_ARRAY_SHAPE.format(
                    channels=BufferConstants.CHANNELS, shape=pixels.shape
                )
            )
        height, width = pixels.shape[:2]
        if width == 0 or height == 0:
            raise ConstructionError.invalid_dimensions(width, height)
        if pixels.dtype != np.uint8:
            raise ConstructionError(
                ErrorMessages.INVALID_PIXEL_VALUES.format(reason=f"dtype {pixels.dtype}")
            )

        buffer = cls.__new__(cls)
        buffer._pixels = np.ascontiguousarray(pixels)
        return buffer

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def pixels(self) -> np.ndarray:
        """Mutable (height, width, 4) view of the store."""
        return self._pixels

    @property
    def data(self) -> np.ndarray:
        """Mutable flat view of the store, width * height * 4 elements."""
        return self._pixels.reshape(-1)

    def get_data(self) -> bytes:
        """Return a copy of the RGBA bytes."""
        return self._pixels.tobytes()

    def to_array(self) -> np.ndarray:
        """Return a copy of the pixels as an (H, W, 4) array."""
        return self._pixels.copy()

    def clone(self) -> "PixelBuffer":
        """Return an independent buffer with a copied store."""
        return PixelBuffer.from_pixels(self._pixels.copy())

    def __len__(self) -> int:
        return int(self._pixels.size)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self._pixels.shape == other._pixels.shape and bool(
            np.array_equal(self._pixels, other._pixels)
        )

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"
