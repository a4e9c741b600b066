"""
Parameter validation for pixel operations.

Every operation checks its arguments here before touching the buffer, so a
rejected call never leaves a partially mutated image behind.
"""

import logging
from typing import Any, Dict, Optional, Type, Union

from pydantic import ValidationError

from pixelflow.core.constants import ErrorMessages
from pixelflow.core.enums import Operation
from pixelflow.core.exceptions import InvalidParameter
from pixelflow.schemas.common import Bounds
from pixelflow.schemas.params import (
    BaseOperationParams,
    BlurParams,
    BrightnessParams,
    ContrastParams,
    NoParams,
    ResizeParams,
    SharpenParams,
)

logger = logging.getLogger(__name__)

_RANGE_ERRORS = {
    "greater_than",
    "greater_than_equal",
    "less_than",
    "less_than_equal",
    "finite_number",
}


def parse_operation(value: Union[Operation, str]) -> Operation:
    """
    Parse an operation name to the Operation enum.

    Args:
        value: Operation instance or its string value (case-insensitive)

    Returns:
        Operation enum member

    Raises:
        InvalidParameter: If the name is not a known operation
    """
    if isinstance(value, Operation):
        return value
    try:
        return Operation(str(value).lower())
    except ValueError:
        raise InvalidParameter(
            operation=str(value),
            argument="operation",
            value=value,
            message=ErrorMessages.UNKNOWN_OPERATION.format(operation=value),
        ) from None


class ParameterValidator:
    """
    Range checks for operation arguments.

    Bounds live on the pydantic models in schemas.params; this class maps
    operations to those models and turns pydantic errors into InvalidParameter.
    """

    SCHEMAS: Dict[Operation, Type[BaseOperationParams]] = {
        Operation.GRAYSCALE: NoParams,
        Operation.SEPIA: NoParams,
        Operation.INVERT: NoParams,
        Operation.BRIGHTNESS: BrightnessParams,
        Operation.CONTRAST: ContrastParams,
        Operation.BLUR: BlurParams,
        Operation.SHARPEN: SharpenParams,
        Operation.EDGE_DETECT: NoParams,
        Operation.FLIP_HORIZONTAL: NoParams,
        Operation.FLIP_VERTICAL: NoParams,
        Operation.ROTATE_90: NoParams,
        Operation.RESIZE: ResizeParams,
    }

    @classmethod
    def schema_for(cls, operation: Union[Operation, str]) -> Type[BaseOperationParams]:
        """Get the parameter model of an operation."""
        return cls.SCHEMAS[parse_operation(operation)]

    @classmethod
    def bounds_for(cls, operation: Union[Operation, str], argument: str) -> Optional[Bounds]:
        """
        Read the documented range of an argument from its Field constraints.

        Args:
            operation: Operation name or enum
            argument: Argument name

        Returns:
            Bounds, or None if the operation has no such argument
        """
        field = cls.schema_for(operation).model_fields.get(argument)
        if field is None:
            return None

        bounds = Bounds()
        for constraint in field.metadata:
            if getattr(constraint, "gt", None) is not None:
                bounds.lower, bounds.lower_inclusive = float(constraint.gt), False
            elif getattr(constraint, "ge", None) is not None:
                bounds.lower, bounds.lower_inclusive = float(constraint.ge), True
            elif getattr(constraint, "lt", None) is not None:
                bounds.upper, bounds.upper_inclusive = float(constraint.lt), False
            elif getattr(constraint, "le", None) is not None:
                bounds.upper, bounds.upper_inclusive = float(constraint.le), True
        return bounds

    @classmethod
    def validate(cls, operation: Union[Operation, str], **arguments: Any) -> BaseOperationParams:
        """
        Validate the arguments of an operation.

        Args:
            operation: Operation name or enum
            **arguments: Operation arguments by name

        Returns:
            Validated parameter model

        Raises:
            InvalidParameter: On the first missing, unexpected, malformed or
                out-of-range argument
        """
        operation = parse_operation(operation)
        schema = cls.SCHEMAS[operation]

        try:
            return schema(**arguments)
        except ValidationError as e:
            error = cls._to_invalid_parameter(operation, arguments, e)
            logger.warning(f"Rejected parameters: {error}")
            raise error from None

    @classmethod
    def _to_invalid_parameter(
        cls, operation: Operation, arguments: Dict[str, Any], exc: ValidationError
    ) -> InvalidParameter:
        """Convert the first pydantic error into InvalidParameter."""
        detail = exc.errors()[0]
        argument = str(detail["loc"][0]) if detail["loc"] else ""
        value = arguments.get(argument)
        bounds = cls.bounds_for(operation, argument)
        error_type = detail["type"]

        if error_type == "missing":
            message = ErrorMessages.PARAMETER_MISSING.format(
                operation=operation.value, argument=argument
            )
        elif error_type == "extra_forbidden":
            message = ErrorMessages.PARAMETER_UNEXPECTED.format(
                operation=operation.value, argument=argument, value=value
            )
        elif error_type in _RANGE_ERRORS:
            message = None  # default out-of-bounds message
        else:
            message = ErrorMessages.PARAMETER_INVALID.format(
                operation=operation.value, argument=argument, value=value, reason=detail["msg"]
            )

        return InvalidParameter(
            operation=operation.value,
            argument=argument,
            value=value,
            bounds=bounds,
            message=message,
        )
