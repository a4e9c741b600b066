"""
Image Processor - fluent wrapper around a PixelBuffer.

This service exposes every pixel operation as a chainable method, plus
format conversion, presets and validated multi-step pipelines:

    >>> ImageProcessor.from_pil(image).grayscale().blur(2).to_pil()
"""

import logging
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Union

import numpy as np
from PIL import Image
from pydantic import ValidationError

from pixelflow.core.buffer import PixelBuffer
from pixelflow.core.config import Settings, get_settings
from pixelflow.core.constants import (
    ErrorMessages,
    PresetRecipes,
    ProcessorDefaults,
    SystemConstants,
)
from pixelflow.core.converters import ImageConverters
from pixelflow.core.enums import Operation, Preset
from pixelflow.core.exceptions import InvalidParameter
from pixelflow.core.utils.decorators import timer
from pixelflow.core.validation import ParameterValidator, parse_operation
from pixelflow.filters import color, convolution, geometry
from pixelflow.schemas import Dimensions, PipelineStep

logger = logging.getLogger(__name__)

# Operations that return a new buffer instead of mutating in place
_RESHAPING = {Operation.ROTATE_90, Operation.RESIZE}

_PRESETS = {
    Preset.NASHVILLE: PresetRecipes.NASHVILLE,
    Preset.CLARENDON: PresetRecipes.CLARENDON,
    Preset.LOMO: PresetRecipes.LOMO,
}


class ImageProcessor:
    """
    Chainable image processor.

    Owns one PixelBuffer. In-place operations mutate it; rotate90 and resize
    replace it with the newly sized buffer they return.
    """

    OPERATIONS: Dict[Operation, Callable[..., Optional[PixelBuffer]]] = {
        Operation.GRAYSCALE: color.grayscale,
        Operation.SEPIA: color.sepia,
        Operation.INVERT: color.invert,
        Operation.BRIGHTNESS: color.brightness,
        Operation.CONTRAST: color.contrast,
        Operation.BLUR: convolution.blur,
        Operation.SHARPEN: convolution.sharpen,
        Operation.EDGE_DETECT: convolution.edge_detect,
        Operation.FLIP_HORIZONTAL: geometry.flip_horizontal,
        Operation.FLIP_VERTICAL: geometry.flip_vertical,
        Operation.ROTATE_90: geometry.rotate90,
        Operation.RESIZE: geometry.resize,
    }

    def __init__(self, buffer: PixelBuffer, settings: Optional[Settings] = None):
        """
        Initialize processor.

        Args:
            buffer: Buffer to process (owned by the processor from now on)
            settings: Engine settings (defaults to get_settings())
        """
        self._buffer = buffer
        self.settings = settings or get_settings()

    # ===== Construction =====

    @classmethod
    def from_bytes(
        cls, data: Any, width: int, height: int, settings: Optional[Settings] = None
    ) -> "ImageProcessor":
        """Create a processor from raw RGBA bytes."""
        return cls(PixelBuffer(data, width, height), settings)

    @classmethod
    def from_array(cls, array: np.ndarray, settings: Optional[Settings] = None) -> "ImageProcessor":
        """Create a processor from an (H, W, 4) RGBA array."""
        return cls(ImageConverters.from_array(array), settings)

    @classmethod
    def from_pil(cls, image: Image.Image, settings: Optional[Settings] = None) -> "ImageProcessor":
        """Create a processor from a PIL Image."""
        return cls(ImageConverters.from_pil(image), settings)

    @classmethod
    def from_opencv(cls, image: np.ndarray, settings: Optional[Settings] = None) -> "ImageProcessor":
        """Create a processor from an OpenCV gray/BGR/BGRA array."""
        return cls(ImageConverters.from_opencv(image), settings)

    @classmethod
    def from_base64(cls, base64_string: str, settings: Optional[Settings] = None) -> "ImageProcessor":
        """Create a processor from a base64 encoded image."""
        return cls(ImageConverters.from_base64(base64_string), settings)

    # ===== Data Access =====

    @property
    def buffer(self) -> PixelBuffer:
        return self._buffer

    @property
    def width(self) -> int:
        return self._buffer.width

    @property
    def height(self) -> int:
        return self._buffer.height

    def get_data(self) -> bytes:
        """Get a copy of the RGBA bytes."""
        return self._buffer.get_data()

    def get_dimensions(self) -> Dimensions:
        return Dimensions(
            width=self.width, height=self.height, pixels=self._buffer.pixel_count
        )

    def to_array(self) -> np.ndarray:
        return ImageConverters.to_array(self._buffer)

    def to_pil(self) -> Image.Image:
        return ImageConverters.to_pil(self._buffer)

    def to_opencv(self, with_alpha: bool = True) -> np.ndarray:
        return ImageConverters.to_opencv(self._buffer, with_alpha=with_alpha)

    def to_base64(self, format: str = SystemConstants.DEFAULT_ENCODE_FORMAT) -> str:
        return ImageConverters.to_base64(self._buffer, format=format)

    def clone(self) -> "ImageProcessor":
        """Create an independent processor with a copied buffer."""
        return ImageProcessor(self._buffer.clone(), self.settings)

    # ===== Dispatch =====

    def _prepare(self, operation: Operation, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate operation arguments and build the call kwargs.

        sharpen also accepts a radius for its blurred copy; when absent the
        processor's configured sharpen radius is used.
        """
        arguments = dict(params)
        radius = None
        if operation is Operation.SHARPEN:
            radius = arguments.pop("radius", None)

        ParameterValidator.validate(operation, **arguments)

        if operation is Operation.SHARPEN:
            if radius is None:
                radius = self.settings.sharpen_radius
            else:
                radius = ParameterValidator.validate(Operation.BLUR, radius=radius).radius
            arguments["radius"] = radius
        return arguments

    def _execute(self, operation: Operation, arguments: Dict[str, Any]) -> None:
        func = self.OPERATIONS[operation]

        with timer() as t:
            result = func(self._buffer, **arguments)
            if operation in _RESHAPING:
                self._buffer = result

        if self.settings.log_timings:
            logger.info(
                f"{operation.value} on {self.width}x{self.height} took {t['ms']:.2f} ms"
            )

    def apply(self, operation: Union[Operation, str], **params: Any) -> "ImageProcessor":
        """
        Apply a single operation by name.

        Args:
            operation: Operation enum or name (e.g. "blur")
            **params: Operation arguments (e.g. radius=2)

        Returns:
            self, for chaining

        Raises:
            InvalidParameter: If the operation is unknown or its arguments
                are invalid; the buffer is left unchanged
        """
        operation = parse_operation(operation)
        self._execute(operation, self._prepare(operation, params))
        return self

    @staticmethod
    def _parse_step(index: int, step: Any) -> PipelineStep:
        """Turn a pipeline entry into a PipelineStep, rejecting malformed ones."""
        if isinstance(step, PipelineStep):
            return step
        if not isinstance(step, Mapping):
            raise InvalidParameter(
                operation="run_pipeline",
                argument="steps",
                value=step,
                message=ErrorMessages.PIPELINE_STEP_INVALID.format(
                    index=index, reason=f"expected a mapping, got {type(step).__name__}"
                ),
            )

        operation = parse_operation(step.get("operation"))
        try:
            return PipelineStep(operation=operation, params=step.get("params") or {})
        except ValidationError as e:
            raise InvalidParameter(
                operation=operation.value,
                argument="params",
                value=step.get("params"),
                message=ErrorMessages.PIPELINE_STEP_INVALID.format(
                    index=index, reason=e.errors()[0]["msg"]
                ),
            ) from None

    def run_pipeline(
        self, steps: Iterable[Union[PipelineStep, Dict[str, Any]]]
    ) -> "ImageProcessor":
        """
        Validate and run a sequence of operations.

        All steps are validated before the first one runs, so an invalid
        step anywhere in the pipeline leaves the image untouched.

        Args:
            steps: PipelineStep instances or dicts like
                {"operation": "blur", "params": {"radius": 2}}

        Returns:
            self, for chaining

        Raises:
            InvalidParameter: If any step is malformed, names an unknown
                operation or carries invalid arguments
        """
        parsed = [self._parse_step(index, step) for index, step in enumerate(steps)]

        prepared = [(step.operation, self._prepare(step.operation, step.params)) for step in parsed]

        logger.debug(f"Running pipeline of {len(prepared)} steps on {self._buffer!r}")
        for operation, arguments in prepared:
            self._execute(operation, arguments)
        return self

    # ===== Filter Operations =====

    def grayscale(self) -> "ImageProcessor":
        return self.apply(Operation.GRAYSCALE)

    def blur(self, radius: Optional[float] = None) -> "ImageProcessor":
        """Apply Gaussian blur (radius defaults to settings.default_blur_radius)."""
        if radius is None:
            radius = self.settings.default_blur_radius
        return self.apply(Operation.BLUR, radius=radius)

    def sharpen(self, amount: Optional[float] = None) -> "ImageProcessor":
        """Apply unsharp masking (amount defaults to settings.default_sharpen_amount)."""
        if amount is None:
            amount = self.settings.default_sharpen_amount
        return self.apply(Operation.SHARPEN, amount=amount)

    def edge_detect(self) -> "ImageProcessor":
        return self.apply(Operation.EDGE_DETECT)

    def sepia(self) -> "ImageProcessor":
        return self.apply(Operation.SEPIA)

    def invert(self) -> "ImageProcessor":
        return self.apply(Operation.INVERT)

    def brightness(self, amount: float = ProcessorDefaults.BRIGHTNESS_AMOUNT) -> "ImageProcessor":
        return self.apply(Operation.BRIGHTNESS, amount=amount)

    def contrast(self, amount: float = ProcessorDefaults.CONTRAST_AMOUNT) -> "ImageProcessor":
        return self.apply(Operation.CONTRAST, amount=amount)

    # ===== Transform Operations =====

    def flip_horizontal(self) -> "ImageProcessor":
        return self.apply(Operation.FLIP_HORIZONTAL)

    def flip_vertical(self) -> "ImageProcessor":
        return self.apply(Operation.FLIP_VERTICAL)

    def rotate90(self) -> "ImageProcessor":
        """Rotate 90 degrees clockwise; width and height swap."""
        return self.apply(Operation.ROTATE_90)

    def resize(self, new_width: int, new_height: int) -> "ImageProcessor":
        """Resize with nearest-neighbor sampling."""
        return self.apply(Operation.RESIZE, new_width=new_width, new_height=new_height)

    # ===== Presets =====

    def apply_preset(self, preset: Union[Preset, str]) -> "ImageProcessor":
        """
        Apply a named preset.

        Args:
            preset: Preset enum or name (nashville, clarendon, lomo)

        Returns:
            self, for chaining
        """
        try:
            preset = preset if isinstance(preset, Preset) else Preset(str(preset).lower())
        except ValueError:
            raise InvalidParameter(
                operation="apply_preset",
                argument="preset",
                value=preset,
                message=ErrorMessages.UNKNOWN_PRESET.format(preset=preset),
            ) from None

        steps = [{"operation": name, "params": params} for name, params in _PRESETS[preset]]
        logger.debug(f"Applying preset {preset.value}")
        return self.run_pipeline(steps)

    def filter_nashville(self) -> "ImageProcessor":
        return self.apply_preset(Preset.NASHVILLE)

    def filter_clarendon(self) -> "ImageProcessor":
        return self.apply_preset(Preset.CLARENDON)

    def filter_lomo(self) -> "ImageProcessor":
        return self.apply_preset(Preset.LOMO)

    def __repr__(self) -> str:
        return f"ImageProcessor({self.width}x{self.height})"
