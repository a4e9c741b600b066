"""
Constants and configuration values for the pixelflow engine.
Centralizes all magic numbers used by the filters and transforms.
"""


# Buffer Layout Constants
class BufferConstants:
    """Constants describing the RGBA8 interchange layout."""

    CHANNELS = 4  # R, G, B, A
    COLOR_CHANNELS = 3
    MIN_CHANNEL_VALUE = 0
    MAX_CHANNEL_VALUE = 255


# Parameter Limits
class ParameterLimits:
    """Documented argument ranges for parameterized operations."""

    # Gaussian blur: 0 < radius <= 50
    BLUR_RADIUS_MIN = 0.0
    BLUR_RADIUS_MAX = 50.0

    # Unsharp mask: 0 <= amount <= 5
    SHARPEN_AMOUNT_MIN = 0.0
    SHARPEN_AMOUNT_MAX = 5.0

    # Brightness/contrast: percent of full scale
    BRIGHTNESS_MIN = -100.0
    BRIGHTNESS_MAX = 100.0
    CONTRAST_MIN = -100.0
    CONTRAST_MAX = 100.0

    # Resize: new dimensions must be > 0
    RESIZE_DIMENSION_MIN = 0


# Color Filter Constants
class ColorConstants:
    """Weights for the per-pixel color filters."""

    # Luminosity formula (ITU-R BT.601)
    LUMA_RED = 0.299
    LUMA_GREEN = 0.587
    LUMA_BLUE = 0.114

    # Sepia color matrix, rows are output R, G, B
    SEPIA_MATRIX = (
        (0.393, 0.769, 0.189),
        (0.349, 0.686, 0.168),
        (0.272, 0.534, 0.131),
    )

    # Brightness maps [-100, 100] percent onto [-255, 255]
    PERCENT_SCALE = 100.0

    # Contrast pivots around mid-gray
    CONTRAST_PIVOT = 128.0


# Convolution Constants
class ConvolutionConstants:
    """Constants for kernel construction and neighborhood operators."""

    # Kernel size = ceil(radius * KERNEL_SIZE_FACTOR) | 1
    KERNEL_SIZE_FACTOR = 2.0
    # sigma = radius / SIGMA_DIVISOR
    SIGMA_DIVISOR = 3.0

    # Fixed blur radius for unsharp masking
    SHARPEN_BLUR_RADIUS = 1.0

    # Sobel gradient kernels (applied as correlation)
    SOBEL_X = (
        (-1.0, 0.0, 1.0),
        (-2.0, 0.0, 2.0),
        (-1.0, 0.0, 1.0),
    )
    SOBEL_Y = (
        (-1.0, -2.0, -1.0),
        (0.0, 0.0, 0.0),
        (1.0, 2.0, 1.0),
    )
    SOBEL_BORDER_VALUE = 0


# Processor Defaults
class ProcessorDefaults:
    """Default arguments used by the fluent processor."""

    BLUR_RADIUS = 3.0
    SHARPEN_AMOUNT = 1.0
    BRIGHTNESS_AMOUNT = 0.0
    CONTRAST_AMOUNT = 0.0


# Preset Recipes
class PresetRecipes:
    """Operation sequences for the built-in presets, as (operation, params) pairs."""

    NASHVILLE = (
        ("brightness", {"amount": 10}),
        ("contrast", {"amount": 5}),
        ("sepia", {}),
    )
    CLARENDON = (
        ("contrast", {"amount": 20}),
        ("brightness", {"amount": 5}),
    )
    LOMO = (
        ("contrast", {"amount": 15}),
        ("brightness", {"amount": -10}),
    )


# System Constants
class SystemConstants:
    """Constants for logging and environment configuration."""

    LOG_LEVEL_DEFAULT = "INFO"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ENV_PREFIX = "PIXELFLOW_"

    # Converters
    DEFAULT_ENCODE_FORMAT = "PNG"


# Error Messages
class ErrorMessages:
    """Standard error messages."""

    # Construction errors
    DATA_SIZE_MISMATCH = (
        "Invalid data size for image dimensions {width}x{height}: "
        "expected {expected} bytes, got {actual}"
    )
    INVALID_DIMENSIONS = "Image dimensions must be positive integers, got {width}x{height}"
    INVALID_PIXEL_VALUES = "Pixel data must contain integer values in [0, 255]: {reason}"
    INVALID_ARRAY_SHAPE = "Expected an array of shape (height, width, {channels}), got {shape}"

    # Parameter errors
    PARAMETER_OUT_OF_BOUNDS = "{operation}: {argument}={value!r} is outside {bounds}"
    PARAMETER_INVALID = "{operation}: invalid {argument}={value!r} ({reason})"
    PARAMETER_UNEXPECTED = "{operation}: unexpected argument {argument}={value!r}"
    PARAMETER_MISSING = "{operation}: missing required argument {argument}"

    # Dispatch errors
    UNKNOWN_OPERATION = "Unknown operation: {operation}"
    UNKNOWN_PRESET = "Unknown preset: {preset}"
    PIPELINE_STEP_INVALID = "Pipeline step {index}: {reason}"
