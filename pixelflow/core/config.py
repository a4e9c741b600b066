"""
Configuration for the pixelflow engine.

Settings are read once from PIXELFLOW_* environment variables and cached.
Call get_settings.cache_clear() to reload them (tests do this).
"""

import logging
import os
from functools import lru_cache
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from pixelflow.core.constants import (
    ConvolutionConstants,
    ParameterLimits,
    ProcessorDefaults,
    SystemConstants,
)

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseModel):
    """Engine settings"""

    log_level: str = Field(
        default=SystemConstants.LOG_LEVEL_DEFAULT, description="Root logging level"
    )
    log_timings: bool = Field(default=False, description="Log per-operation timings")
    sharpen_radius: float = Field(
        default=ConvolutionConstants.SHARPEN_BLUR_RADIUS,
        gt=ParameterLimits.BLUR_RADIUS_MIN,
        le=ParameterLimits.BLUR_RADIUS_MAX,
        description="Radius of the blurred copy used by unsharp masking",
    )
    default_blur_radius: float = Field(
        default=ProcessorDefaults.BLUR_RADIUS,
        gt=ParameterLimits.BLUR_RADIUS_MIN,
        le=ParameterLimits.BLUR_RADIUS_MAX,
    )
    default_sharpen_amount: float = Field(
        default=ProcessorDefaults.SHARPEN_AMOUNT,
        ge=ParameterLimits.SHARPEN_AMOUNT_MIN,
        le=ParameterLimits.SHARPEN_AMOUNT_MAX,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Any) -> str:
        level = str(value).upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "Settings":
        """
        Build settings from PIXELFLOW_* variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Validated settings; unset variables keep their defaults
        """
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            key = f"{SystemConstants.ENV_PREFIX}{name.upper()}"
            if key in environ:
                values[name] = environ[key]
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings loaded from the environment."""
    settings = Settings.from_env()
    logger.debug(f"Loaded settings: {settings.to_dict()}")
    return settings


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure root logging for applications embedding the engine.

    Args:
        settings: Settings to use (defaults to get_settings())
    """
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format=SystemConstants.LOG_FORMAT,
    )
