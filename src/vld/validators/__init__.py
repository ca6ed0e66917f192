"""Validator classes, grouped by the kind of value they check."""

from .array import ArrayValidator, TupleValidator
from .base import (
    Check,
    CatchValidator,
    DefaultValidator,
    LeafConfig,
    LeafValidator,
    NullableValidator,
    NullishValidator,
    OptionalValidator,
    PipeValidator,
    PrefaultValidator,
    PreprocessValidator,
    RefinementContext,
    RefineValidator,
    SuperRefineValidator,
    TransformValidator,
    Validator,
    ValidatorKind,
)
from .boolean import BooleanValidator, StringBoolValidator
from .containers import MapValidator, RecordValidator, SetValidator
from .date import DateValidator
from .number import BigIntValidator, NumberValidator
from .object import ObjectValidator, UnknownKeys
from .special import (
    AnyValidator,
    BytesValidator,
    EnumValidator,
    LazyValidator,
    LiteralValidator,
    NaNValidator,
    NeverValidator,
    NullValidator,
    SymbolValidator,
    UndefinedValidator,
    UnknownValidator,
)
from .string import StringValidator
from .union import (
    DiscriminatedUnionValidator,
    IntersectionValidator,
    UnionValidator,
    XorValidator,
    accepted_types,
)

__all__ = [
    "AnyValidator",
    "ArrayValidator",
    "BigIntValidator",
    "BooleanValidator",
    "BytesValidator",
    "CatchValidator",
    "Check",
    "DateValidator",
    "DefaultValidator",
    "DiscriminatedUnionValidator",
    "EnumValidator",
    "IntersectionValidator",
    "LazyValidator",
    "LeafConfig",
    "LeafValidator",
    "LiteralValidator",
    "MapValidator",
    "NaNValidator",
    "NeverValidator",
    "NullValidator",
    "NullableValidator",
    "NullishValidator",
    "NumberValidator",
    "ObjectValidator",
    "OptionalValidator",
    "PipeValidator",
    "PrefaultValidator",
    "PreprocessValidator",
    "RecordValidator",
    "RefineValidator",
    "RefinementContext",
    "SetValidator",
    "StringBoolValidator",
    "StringValidator",
    "SuperRefineValidator",
    "SymbolValidator",
    "TransformValidator",
    "TupleValidator",
    "UndefinedValidator",
    "UnionValidator",
    "UnknownKeys",
    "UnknownValidator",
    "Validator",
    "ValidatorKind",
    "XorValidator",
    "accepted_types",
]
