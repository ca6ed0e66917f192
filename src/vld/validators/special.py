"""
Literal, enum and special-purpose validators.

Equality here is strict: values must be the same kind of thing as well
as equal, so ``True`` never matches ``1`` and ``"1"`` never matches ``1``.
"""

import math
from typing import Any, Callable, Iterable, Optional, Tuple

from ..context import MISSING, Symbol
from ..errors import Issue, IssueCode, get_value_type
from ..result import ParseResult
from .base import Validator, ValidatorKind, callback_failure, invalid_type


def _category(value: Any) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    return type(value).__name__


def strict_equal(a: Any, b: Any) -> bool:
    """Equality that never crosses value kinds (``True != 1``, ``"1" != 1``)."""
    if a is b:
        return True
    if _category(a) != _category(b):
        return False
    try:
        return bool(a == b)
    except (TypeError, ValueError):
        return False


def describe(value: Any) -> str:
    """Short printable form of a value for messages."""
    text = repr(value)
    return text if len(text) <= 60 else text[:57] + "..."


class SimpleValidator(Validator):
    """Validator with no chain methods beyond the shared modifiers."""

    def __init__(self, message: Optional[str] = None):
        self._set(_message=message)


class LiteralValidator(SimpleValidator):
    """Accepts exactly one value."""

    kind = ValidatorKind.LITERAL

    def __init__(self, value: Any, message: Optional[str] = None):
        super().__init__(message)
        self._set(_value=value)

    @property
    def value(self) -> Any:
        return self._value

    @property
    def values(self) -> Tuple[Any, ...]:
        return (self._value,)

    def _parse(self, value, ctx):
        if strict_equal(value, self._value):
            return ParseResult.ok(value)
        expected, received = describe(self._value), describe(value)
        return ParseResult.fail(
            [
                Issue(
                    code=IssueCode.INVALID_LITERAL,
                    message=self._message or ctx.render("literal_expected", expected=expected, received=received),
                    expected=expected,
                    received=received,
                )
            ]
        )


class EnumValidator(SimpleValidator):
    """Accepts one of a fixed, ordered set of string or number options."""

    kind = ValidatorKind.ENUM

    def __init__(self, options: Iterable[Any], message: Optional[str] = None):
        options = tuple(options)
        if not options:
            raise ValueError("enum_() requires at least one option")
        for option in options:
            if isinstance(option, bool) or not isinstance(option, (str, int, float)):
                raise TypeError(f"Enum options must be strings or numbers, got {option!r}")
        super().__init__(message)
        self._set(_options=options)

    @property
    def options(self) -> Tuple[Any, ...]:
        return self._options

    values = options

    def extract(self, *keep: Any) -> "EnumValidator":
        """Return an enum limited to ``keep`` (which must all be options)."""
        missing = [value for value in keep if not any(strict_equal(value, o) for o in self._options)]
        if missing:
            raise ValueError(f"Values not in enum: {missing}")
        return EnumValidator(keep, self._message)

    def exclude(self, *drop: Any) -> "EnumValidator":
        """Return an enum without the ``drop`` options."""
        return EnumValidator(
            [o for o in self._options if not any(strict_equal(o, d) for d in drop)], self._message
        )

    def _parse(self, value, ctx):
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            return invalid_type(ctx, "string | number", value, self._message)
        if any(strict_equal(value, option) for option in self._options):
            return ParseResult.ok(value)
        options = [describe(o) for o in self._options]
        received = describe(value)
        return ParseResult.fail(
            [
                Issue(
                    code=IssueCode.INVALID_ENUM_VALUE,
                    message=self._message or ctx.render("enum_expected", options=options, received=received),
                    expected=" | ".join(options),
                    received=received,
                )
            ]
        )


class SymbolValidator(SimpleValidator):
    kind = ValidatorKind.SYMBOL

    def _parse(self, value, ctx):
        if isinstance(value, Symbol):
            return ParseResult.ok(value)
        return invalid_type(ctx, "symbol", value, self._message)


class AnyValidator(SimpleValidator):
    """Accepts every value, including ``MISSING``."""

    kind = ValidatorKind.ANY

    def _parse(self, value, ctx):
        return ParseResult.ok(value)


class UnknownValidator(AnyValidator):
    kind = ValidatorKind.UNKNOWN


class NeverValidator(SimpleValidator):
    """Rejects every value."""

    kind = ValidatorKind.NEVER

    def _parse(self, value, ctx):
        received = get_value_type(value)
        return ParseResult.fail(
            [
                Issue(
                    code=IssueCode.INVALID_TYPE,
                    message=self._message or ctx.render("never_type"),
                    expected="never",
                    received=received,
                )
            ]
        )


class NullValidator(SimpleValidator):
    kind = ValidatorKind.NULL

    def _parse(self, value, ctx):
        if value is None:
            return ParseResult.ok(None)
        return invalid_type(ctx, "null", value, self._message)


class UndefinedValidator(SimpleValidator):
    """Accepts only ``MISSING``."""

    kind = ValidatorKind.UNDEFINED

    def _parse(self, value, ctx):
        if value is MISSING:
            return ParseResult.ok(MISSING)
        return invalid_type(ctx, "undefined", value, self._message)


class NaNValidator(SimpleValidator):
    kind = ValidatorKind.NAN

    def _parse(self, value, ctx):
        if isinstance(value, float) and math.isnan(value):
            return ParseResult.ok(value)
        return invalid_type(ctx, "nan", value, self._message)


class BytesValidator(SimpleValidator):
    """Accepts ``bytes``/``bytearray``/``memoryview``, producing ``bytes``."""

    kind = ValidatorKind.BYTES

    def _parse(self, value, ctx):
        if isinstance(value, (bytes, bytearray, memoryview)):
            return ParseResult.ok(bytes(value))
        return invalid_type(ctx, "bytes", value, self._message)


class LazyValidator(Validator):
    """
    Resolves its validator on every call, so schemas can refer to themselves.

    Example:
        >>> node = lazy(lambda: object_({"children": array(node)}))
    """

    kind = ValidatorKind.LAZY

    def __init__(self, getter: Callable[[], Validator]):
        if not callable(getter):
            raise TypeError("lazy() expects a zero-argument callable")
        self._set(_getter=getter)

    def resolve(self) -> Validator:
        schema = self._getter()
        if not isinstance(schema, Validator):
            raise TypeError(f"lazy() getter returned {type(schema).__name__}, not a validator")
        return schema

    def _parse(self, value, ctx):
        try:
            schema = self.resolve()
        except Exception as e:
            return callback_failure(ctx, e, "lazy getter")
        return schema._parse(value, ctx)
