"""
Coercing validators.

Each coercing validator converts its input to the target type first and
then runs the ordinary checks of that type. Null and missing inputs are
always coercion failures.
"""

from .boolean import CoerceBooleanValidator
from .date import CoerceDateValidator
from .number import CoerceBigIntValidator, CoerceNumberValidator
from .string import CoerceStringValidator

__all__ = [
    "CoerceBigIntValidator",
    "CoerceBooleanValidator",
    "CoerceDateValidator",
    "CoerceNumberValidator",
    "CoerceStringValidator",
]
