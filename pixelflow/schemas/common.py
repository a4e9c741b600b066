"""
Common models shared by the processor layer.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from pixelflow.core.enums import Operation


class Dimensions(BaseModel):
    """Image dimensions"""

    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    pixels: int = Field(..., gt=0, description="width * height")


class Bounds(BaseModel):
    """
    Numeric range accepted by an operation argument.

    A None endpoint is unbounded. Renders in interval notation, e.g. "(0, 50]".
    """

    lower: Optional[float] = None
    upper: Optional[float] = None
    lower_inclusive: bool = True
    upper_inclusive: bool = True

    def __str__(self) -> str:
        left = "[" if self.lower_inclusive and self.lower is not None else "("
        right = "]" if self.upper_inclusive and self.upper is not None else ")"
        lower = "-inf" if self.lower is None else f"{self.lower:g}"
        upper = "inf" if self.upper is None else f"{self.upper:g}"
        return f"{left}{lower}, {upper}{right}"


class PipelineStep(BaseModel):
    """Single step of a processing pipeline"""

    operation: Operation
    params: Dict[str, Any] = Field(default_factory=dict, description="Operation arguments")
