"""Coercion to number and bigint."""

import math
import re

from ..result import ParseResult
from ..validators.number import BigIntValidator, NumberValidator, is_number
from .common import coercion_failure, is_absent

_INTEGER_RE = re.compile(r"^[+-]?\d+$")


def parse_number(text: str):
    """Parse a trimmed numeric literal, returning None for empty or garbage text."""
    text = text.strip()
    if not text or "_" in text:
        return None
    if _INTEGER_RE.match(text):
        return int(text)
    try:
        number = float(text)
    except ValueError:
        return None
    return None if math.isnan(number) else number


class CoerceNumberValidator(NumberValidator):
    """
    Number validator that first converts strings and booleans.

    Example:
        >>> CoerceNumberValidator().parse("  42  ")
        42
    """

    coerces = True

    def _check_type(self, value, ctx):
        if is_number(value):
            return ParseResult.ok(value)
        if isinstance(value, bool):
            return ParseResult.ok(1 if value else 0)
        if isinstance(value, str):
            number = parse_number(value)
            if number is not None:
                return ParseResult.ok(number)
        return coercion_failure(ctx, value, "number", self._config.message)


class CoerceBigIntValidator(BigIntValidator):
    """BigInt validator that first converts integral numbers and integer strings."""

    coerces = True

    def _check_type(self, value, ctx):
        if is_absent(value) or isinstance(value, bool):
            return coercion_failure(ctx, value, "bigint", self._config.message)
        if isinstance(value, int):
            return ParseResult.ok(value)
        if isinstance(value, float) and math.isfinite(value) and value.is_integer():
            return ParseResult.ok(int(value))
        if isinstance(value, str) and _INTEGER_RE.match(value.strip()):
            return ParseResult.ok(int(value.strip()))
        return coercion_failure(ctx, value, "bigint", self._config.message)
