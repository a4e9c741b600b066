"""
Operation parameter models.

Each parameterized operation declares its arguments and their documented
ranges here, as pydantic Field constraints. The validator reads the same
constraints back to report the violated bounds.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pixelflow.core.constants import ParameterLimits


class BaseOperationParams(BaseModel):
    """
    Base class for operation parameters.

    Unknown arguments are rejected so that typos do not pass silently, and
    strings or booleans are never coerced into numbers.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("*", mode="before")
    @classmethod
    def reject_non_numeric(cls, value: Any) -> Any:
        # bool is an int subclass and numeric strings coerce in lax mode
        if isinstance(value, (bool, str, bytes)):
            raise ValueError(f"expected a number, got {type(value).__name__}")
        return value


class NoParams(BaseOperationParams):
    """Parameters for operations that take no arguments."""


class BlurParams(BaseOperationParams):
    """Gaussian blur parameters."""

    radius: float = Field(
        ...,
        gt=ParameterLimits.BLUR_RADIUS_MIN,
        le=ParameterLimits.BLUR_RADIUS_MAX,
        allow_inf_nan=False,
        description="Blur radius in pixels (sigma = radius / 3)",
    )


class SharpenParams(BaseOperationParams):
    """Unsharp mask parameters."""

    amount: float = Field(
        ...,
        ge=ParameterLimits.SHARPEN_AMOUNT_MIN,
        le=ParameterLimits.SHARPEN_AMOUNT_MAX,
        allow_inf_nan=False,
        description="Strength of the detail boost",
    )


class BrightnessParams(BaseOperationParams):
    """Brightness adjustment parameters."""

    amount: float = Field(
        ...,
        ge=ParameterLimits.BRIGHTNESS_MIN,
        le=ParameterLimits.BRIGHTNESS_MAX,
        allow_inf_nan=False,
        description="Brightness delta in percent of full scale",
    )


class ContrastParams(BaseOperationParams):
    """Contrast adjustment parameters."""

    amount: float = Field(
        ...,
        ge=ParameterLimits.CONTRAST_MIN,
        le=ParameterLimits.CONTRAST_MAX,
        allow_inf_nan=False,
        description="Contrast change in percent (-100 flattens to mid-gray)",
    )


class ResizeParams(BaseOperationParams):
    """Nearest-neighbor resize parameters."""

    new_width: int = Field(
        ..., gt=ParameterLimits.RESIZE_DIMENSION_MIN, description="Target width in pixels"
    )
    new_height: int = Field(
        ..., gt=ParameterLimits.RESIZE_DIMENSION_MIN, description="Target height in pixels"
    )
