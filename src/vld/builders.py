"""
Factory functions for building validators.

Names that would shadow Python builtins carry a trailing underscore
(``object_``, ``tuple_``, ``enum_``, ...).

Example:
    >>> from vld import object_, string, number
    >>> user = object_({"id": string().uuid(), "age": number().int().positive()})
"""

from types import SimpleNamespace
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from .coercion import (
    CoerceBigIntValidator,
    CoerceBooleanValidator,
    CoerceDateValidator,
    CoerceNumberValidator,
    CoerceStringValidator,
)
from .validators import (
    AnyValidator,
    ArrayValidator,
    BigIntValidator,
    BooleanValidator,
    BytesValidator,
    DateValidator,
    DiscriminatedUnionValidator,
    EnumValidator,
    IntersectionValidator,
    LazyValidator,
    LiteralValidator,
    MapValidator,
    NaNValidator,
    NeverValidator,
    NullValidator,
    NumberValidator,
    ObjectValidator,
    PreprocessValidator,
    RecordValidator,
    SetValidator,
    StringBoolValidator,
    StringValidator,
    SymbolValidator,
    TupleValidator,
    UndefinedValidator,
    UnionValidator,
    UnknownValidator,
    Validator,
    XorValidator,
)


def string(message: Optional[str] = None) -> StringValidator:
    return StringValidator(message)


def number(message: Optional[str] = None) -> NumberValidator:
    return NumberValidator(message)


def boolean(message: Optional[str] = None) -> BooleanValidator:
    return BooleanValidator(message)


def stringbool(
    truthy: Optional[Iterable[str]] = None,
    falsy: Optional[Iterable[str]] = None,
    case_sensitive: bool = False,
    message: Optional[str] = None,
) -> StringBoolValidator:
    return StringBoolValidator(truthy, falsy, case_sensitive, message)


def date(message: Optional[str] = None) -> DateValidator:
    return DateValidator(message)


def bigint(message: Optional[str] = None) -> BigIntValidator:
    return BigIntValidator(message)


def symbol(message: Optional[str] = None) -> SymbolValidator:
    return SymbolValidator(message)


def literal(value: Any, message: Optional[str] = None) -> LiteralValidator:
    return LiteralValidator(value, message)


def enum_(options: Iterable[Any], message: Optional[str] = None) -> EnumValidator:
    return EnumValidator(options, message)


def any_() -> AnyValidator:
    return AnyValidator()


def unknown() -> UnknownValidator:
    return UnknownValidator()


def never(message: Optional[str] = None) -> NeverValidator:
    return NeverValidator(message)


def null(message: Optional[str] = None) -> NullValidator:
    return NullValidator(message)


def undefined(message: Optional[str] = None) -> UndefinedValidator:
    return UndefinedValidator(message)


def nan(message: Optional[str] = None) -> NaNValidator:
    return NaNValidator(message)


def bytes_(message: Optional[str] = None) -> BytesValidator:
    return BytesValidator(message)


def object_(shape: Optional[Mapping[str, Validator]] = None, message: Optional[str] = None) -> ObjectValidator:
    return ObjectValidator(shape or {}, message)


def array(element: Validator, message: Optional[str] = None) -> ArrayValidator:
    return ArrayValidator(element, message)


def tuple_(items: Sequence[Validator], message: Optional[str] = None) -> TupleValidator:
    return TupleValidator(items, message)


def record(
    key_or_value: Validator, value: Optional[Validator] = None, message: Optional[str] = None
) -> RecordValidator:
    """``record(value)`` or ``record(key, value)``."""
    if value is None:
        return RecordValidator(key_or_value, message=message)
    return RecordValidator(value, key_or_value, message)


def set_(element: Validator, message: Optional[str] = None) -> SetValidator:
    return SetValidator(element, message)


def map_(key: Validator, value: Validator, message: Optional[str] = None) -> MapValidator:
    return MapValidator(key, value, message)


def union(*options: Validator, message: Optional[str] = None) -> UnionValidator:
    return UnionValidator(options, message)


def xor(*options: Validator, message: Optional[str] = None) -> XorValidator:
    return XorValidator(options, message)


def discriminated_union(
    discriminator: str, options: Sequence[Validator], message: Optional[str] = None
) -> DiscriminatedUnionValidator:
    return DiscriminatedUnionValidator(discriminator, options, message)


def intersection(left: Validator, right: Validator) -> IntersectionValidator:
    return IntersectionValidator(left, right)


def lazy(getter: Callable[[], Validator]) -> LazyValidator:
    return LazyValidator(getter)


def preprocess(fn: Callable[[Any], Any], schema: Validator) -> PreprocessValidator:
    return PreprocessValidator(fn, schema)


def coerce_string(message: Optional[str] = None) -> CoerceStringValidator:
    return CoerceStringValidator(message)


def coerce_number(message: Optional[str] = None) -> CoerceNumberValidator:
    return CoerceNumberValidator(message)


def coerce_boolean(message: Optional[str] = None) -> CoerceBooleanValidator:
    return CoerceBooleanValidator(message)


def coerce_bigint(message: Optional[str] = None) -> CoerceBigIntValidator:
    return CoerceBigIntValidator(message)


def coerce_date(message: Optional[str] = None) -> CoerceDateValidator:
    return CoerceDateValidator(message)


coerce = SimpleNamespace(
    string=coerce_string,
    number=coerce_number,
    boolean=coerce_boolean,
    bigint=coerce_bigint,
    date=coerce_date,
)
