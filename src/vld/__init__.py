"""
VLD - runtime value validation with composable, immutable schemas.

Build a schema once, reuse it everywhere:
- Primitive validators: string, number, boolean, stringbool, date, bigint, symbol
- Structural validators: object_, array, tuple_, record, set_, map_
- Combinators: union, xor, discriminated_union, intersection, lazy
- Coercion: coerce.number(), coerce.boolean(), ...
- Codecs: vld.codecs
- Structured, path-addressed issues with localized messages

Example:
    >>> import vld
    >>> user = vld.object_({
    ...     "id": vld.string().uuid(),
    ...     "age": vld.number().int().positive(),
    ... })
    >>> result = user.safe_parse({"id": "not-a-uuid", "age": -1})
    >>> [issue.path for issue in result.issues]
    [('id',), ('age',)]
"""

from .builders import (
    any_,
    array,
    bigint,
    boolean,
    bytes_,
    coerce,
    coerce_bigint,
    coerce_boolean,
    coerce_date,
    coerce_number,
    coerce_string,
    date,
    discriminated_union,
    enum_,
    intersection,
    lazy,
    literal,
    map_,
    nan,
    never,
    null,
    number,
    object_,
    preprocess,
    record,
    set_,
    string,
    stringbool,
    symbol,
    tuple_,
    undefined,
    union,
    unknown,
    xor,
)
from .codecs import Codec
from .context import MISSING, ParseContext, Symbol, use_locale
from .declarative import FieldSpec, load_schema_file, schema_from_dict
from .errors import Issue, IssueCode, ValidationError
from .formatting import flatten_error, prettify_error, treeify_error
from .locales import UnsupportedLocaleError, available_locales, get_messages
from .result import ParseResult
from .security import is_dangerous_key
from .settings import VldSettings, get_settings, load_settings, reset_settings
from .validators import Validator, ValidatorKind

__version__ = "0.1.0"

__all__ = [
    # Builders
    "any_",
    "array",
    "bigint",
    "boolean",
    "bytes_",
    "coerce",
    "coerce_bigint",
    "coerce_boolean",
    "coerce_date",
    "coerce_number",
    "coerce_string",
    "date",
    "discriminated_union",
    "enum_",
    "intersection",
    "lazy",
    "literal",
    "map_",
    "nan",
    "never",
    "null",
    "number",
    "object_",
    "preprocess",
    "record",
    "set_",
    "string",
    "stringbool",
    "symbol",
    "tuple_",
    "undefined",
    "union",
    "unknown",
    "xor",
    # Core types
    "Codec",
    "Issue",
    "IssueCode",
    "MISSING",
    "ParseContext",
    "ParseResult",
    "Symbol",
    "ValidationError",
    "Validator",
    "ValidatorKind",
    # Messages and settings
    "UnsupportedLocaleError",
    "VldSettings",
    "available_locales",
    "get_messages",
    "get_settings",
    "load_settings",
    "reset_settings",
    "use_locale",
    # Utilities
    "FieldSpec",
    "flatten_error",
    "is_dangerous_key",
    "load_schema_file",
    "prettify_error",
    "schema_from_dict",
    "treeify_error",
    "__version__",
]
