"""Number and bigint validators."""

import math
from fractions import Fraction
from typing import Optional, Union

from ..errors import IssueCode
from ..result import ParseResult
from .base import LeafValidator, ValidatorKind

Number = Union[int, float]

MAX_SAFE_INTEGER = 2**53 - 1
_EPSILON = 1e-9


def is_number(value) -> bool:
    """True for int/float values other than bool and NaN."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not (isinstance(value, float) and math.isnan(value))


def is_integer(value: Number) -> bool:
    if isinstance(value, int):
        return True
    return value.is_integer()


def is_multiple_of(value: Number, step: Number) -> bool:
    if isinstance(value, int) and isinstance(step, int):
        return value % step == 0
    if isinstance(value, int):
        # exact on ints too large for a float; the step is taken as written
        return math.isfinite(step) and Fraction(value) % Fraction(repr(step)) == 0
    if not math.isfinite(value):
        return False
    remainder = abs(math.fmod(value, step))
    return remainder < _EPSILON or abs(remainder - abs(step)) < _EPSILON


class NumberValidator(LeafValidator):
    """
    Validates ``int``/``float`` values (``bool`` and NaN are rejected).

    Infinity passes the base check; use ``finite()`` to reject it.
    """

    kind = ValidatorKind.NUMBER
    expected = "number"

    def _check_type(self, value, ctx):
        if is_number(value):
            return ParseResult.ok(value)
        return self._type_error(value, ctx)

    def _bound(self, code, key, predicate, message, params, **detail):
        return self._add_check(code, key, predicate, message, params, origin="number", **detail)

    def min(self, minimum: Number, message: Optional[str] = None) -> "NumberValidator":
        return self._bound(
            IssueCode.TOO_SMALL, "number_min", lambda v: v >= minimum, message,
            {"minimum": minimum}, minimum=minimum, inclusive=True,
        )

    def max(self, maximum: Number, message: Optional[str] = None) -> "NumberValidator":
        return self._bound(
            IssueCode.TOO_BIG, "number_max", lambda v: v <= maximum, message,
            {"maximum": maximum}, maximum=maximum, inclusive=True,
        )

    gte = min
    lte = max

    def gt(self, minimum: Number, message: Optional[str] = None) -> "NumberValidator":
        return self._bound(
            IssueCode.TOO_SMALL, "number_min", lambda v: v > minimum, message,
            {"minimum": minimum}, minimum=minimum, inclusive=False,
        )

    def lt(self, maximum: Number, message: Optional[str] = None) -> "NumberValidator":
        return self._bound(
            IssueCode.TOO_BIG, "number_max", lambda v: v < maximum, message,
            {"maximum": maximum}, maximum=maximum, inclusive=False,
        )

    def between(self, minimum: Number, maximum: Number, message: Optional[str] = None) -> "NumberValidator":
        params = {"minimum": minimum, "maximum": maximum}
        return self._bound(
            IssueCode.TOO_SMALL, "number_between", lambda v: v >= minimum, message,
            params, minimum=minimum, inclusive=True,
        )._bound(
            IssueCode.TOO_BIG, "number_between", lambda v: v <= maximum, message,
            params, maximum=maximum, inclusive=True,
        )

    def positive(self, message: Optional[str] = None) -> "NumberValidator":
        return self._bound(
            IssueCode.TOO_SMALL, "number_positive", lambda v: v > 0, message,
            None, minimum=0, inclusive=False,
        )

    def negative(self, message: Optional[str] = None) -> "NumberValidator":
        return self._bound(
            IssueCode.TOO_BIG, "number_negative", lambda v: v < 0, message,
            None, maximum=0, inclusive=False,
        )

    def nonnegative(self, message: Optional[str] = None) -> "NumberValidator":
        return self._bound(
            IssueCode.TOO_SMALL, "number_nonnegative", lambda v: v >= 0, message,
            None, minimum=0, inclusive=True,
        )

    def nonpositive(self, message: Optional[str] = None) -> "NumberValidator":
        return self._bound(
            IssueCode.TOO_BIG, "number_nonpositive", lambda v: v <= 0, message,
            None, maximum=0, inclusive=True,
        )

    def int(self, message: Optional[str] = None) -> "NumberValidator":
        return self._add_check(IssueCode.NOT_INTEGER, "number_int", is_integer, message)

    def finite(self, message: Optional[str] = None) -> "NumberValidator":
        return self._add_check(
            IssueCode.NOT_FINITE, "number_finite", lambda v: isinstance(v, int) or math.isfinite(v), message
        )

    def safe(self, message: Optional[str] = None) -> "NumberValidator":
        return self._add_check(
            IssueCode.NOT_SAFE_INTEGER,
            "number_safe",
            lambda v: is_integer(v) and abs(v) <= MAX_SAFE_INTEGER,
            message,
        )

    def multiple_of(self, step: Number, message: Optional[str] = None) -> "NumberValidator":
        if step <= 0:
            raise ValueError(f"multiple_of step must be positive, got {step}")
        return self._add_check(
            IssueCode.NOT_MULTIPLE_OF,
            "number_multiple_of",
            lambda v: is_multiple_of(v, step),
            message,
            {"step": step},
        )

    step = multiple_of

    def even(self, message: Optional[str] = None) -> "NumberValidator":
        return self._add_check(IssueCode.CUSTOM, "number_even", lambda v: is_multiple_of(v, 2), message)

    def odd(self, message: Optional[str] = None) -> "NumberValidator":
        return self._add_check(
            IssueCode.CUSTOM,
            "number_odd",
            lambda v: is_integer(v) and not is_multiple_of(v, 2),
            message,
        )


class BigIntValidator(LeafValidator):
    """Validates arbitrary-precision integers (``int``, never ``bool``)."""

    kind = ValidatorKind.BIGINT
    expected = "bigint"

    def _check_type(self, value, ctx):
        if isinstance(value, int) and not isinstance(value, bool):
            return ParseResult.ok(value)
        return self._type_error(value, ctx)

    def _bound(self, code, key, predicate, message, params=None, **detail):
        return self._add_check(code, key, predicate, message, params, origin="bigint", **detail)

    def min(self, minimum: int, message: Optional[str] = None) -> "BigIntValidator":
        return self._bound(
            IssueCode.TOO_SMALL, "bigint_min", lambda v: v >= minimum, message,
            {"minimum": minimum}, minimum=minimum, inclusive=True,
        )

    def max(self, maximum: int, message: Optional[str] = None) -> "BigIntValidator":
        return self._bound(
            IssueCode.TOO_BIG, "bigint_max", lambda v: v <= maximum, message,
            {"maximum": maximum}, maximum=maximum, inclusive=True,
        )

    def positive(self, message: Optional[str] = None) -> "BigIntValidator":
        return self._bound(
            IssueCode.TOO_SMALL, "bigint_positive", lambda v: v > 0, message, minimum=0, inclusive=False
        )

    def negative(self, message: Optional[str] = None) -> "BigIntValidator":
        return self._bound(
            IssueCode.TOO_BIG, "bigint_negative", lambda v: v < 0, message, maximum=0, inclusive=False
        )

    def nonnegative(self, message: Optional[str] = None) -> "BigIntValidator":
        return self._bound(
            IssueCode.TOO_SMALL, "bigint_nonnegative", lambda v: v >= 0, message, minimum=0, inclusive=True
        )

    def nonpositive(self, message: Optional[str] = None) -> "BigIntValidator":
        return self._bound(
            IssueCode.TOO_BIG, "bigint_nonpositive", lambda v: v <= 0, message, maximum=0, inclusive=True
        )
