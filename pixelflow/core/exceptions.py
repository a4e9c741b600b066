"""
Exception types raised by the pixelflow engine.

Two failure kinds exist:
- ConstructionError: the pixel data does not match the declared dimensions.
  No buffer is produced.
- InvalidParameter: an operation argument is outside its documented bounds.
  The buffer is left unmodified and the caller may retry.
"""

from typing import Any, Optional

from pixelflow.core.constants import ErrorMessages


class PixelFlowError(Exception):
    """Base class for all pixelflow errors."""


class ConstructionError(PixelFlowError, ValueError):
    """Raised when a pixel buffer cannot be built from the given data."""

    def __init__(
        self,
        message: str,
        width: Any = None,
        height: Any = None,
        expected: Optional[int] = None,
        actual: Optional[int] = None,
    ):
        super().__init__(message)
        self.width = width
        self.height = height
        self.expected = expected
        self.actual = actual

    @classmethod
    def size_mismatch(cls, width: int, height: int, expected: int, actual: int) -> "ConstructionError":
        """Build the error for a data length that disagrees with width * height * 4."""
        message = ErrorMessages.DATA_SIZE_MISMATCH.format(
            width=width, height=height, expected=expected, actual=actual
        )
        return cls(message, width=width, height=height, expected=expected, actual=actual)

    @classmethod
    def invalid_dimensions(cls, width: Any, height: Any) -> "ConstructionError":
        """Build the error for non-positive or non-integer dimensions."""
        message = ErrorMessages.INVALID_DIMENSIONS.format(width=width, height=height)
        return cls(message, width=width, height=height)


class InvalidParameter(PixelFlowError, ValueError):
    """
    Raised when an operation argument fails validation.

    Attributes:
        operation: Name of the operation that rejected the argument
        argument: Name of the offending argument
        value: The rejected value (None when the argument was missing)
        bounds: Accepted range, or None when no numeric range applies
    """

    def __init__(
        self,
        operation: str,
        argument: str,
        value: Any = None,
        bounds: Any = None,
        message: Optional[str] = None,
    ):
        self.operation = operation
        self.argument = argument
        self.value = value
        self.bounds = bounds

        if message is None:
            message = ErrorMessages.PARAMETER_OUT_OF_BOUNDS.format(
                operation=operation, argument=argument, value=value, bounds=bounds
            )
        super().__init__(message)
