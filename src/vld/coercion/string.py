"""Coercion to string."""

import math
from datetime import datetime

from ..result import ParseResult
from ..validators.string import StringValidator
from .common import coercion_failure, is_absent


def to_text(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


class CoerceStringValidator(StringValidator):
    """String validator that first converts numbers, booleans and objects to text."""

    coerces = True

    def _check_type(self, value, ctx):
        if is_absent(value):
            return coercion_failure(ctx, value, "string", self._config.message)
        return ParseResult.ok(to_text(value))
