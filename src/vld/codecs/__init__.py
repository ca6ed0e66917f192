"""
Codec layer for VLD.

Provides the ``Codec`` validator and ready-made codecs for common wire
representations.

Example:
    >>> from vld.codecs import iso_datetime_to_date
    >>> iso_datetime_to_date.parse("2024-01-15T10:30:00Z").year
    2024
"""

import base64
import binascii
import json
import math
from datetime import datetime, timedelta, timezone
from typing import Optional
from urllib.parse import quote, unquote

from ..builders import any_, bigint, boolean, bytes_, date, number, string
from ..coercion.boolean import FALSE_STRINGS, TRUE_STRINGS
from ..coercion.number import parse_number
from ..coercion.string import to_text
from ..validators import Validator
from ..validators.date import to_datetime
from .codec import Codec

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _decode_number(text: str):
    value = parse_number(text)
    if value is None:
        raise ValueError(f"Invalid number: {text!r}")
    return value


def _decode_int(text: str) -> int:
    value = _decode_number(text)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Invalid integer: {text!r}")
        return math.floor(value)
    return value


def _decode_boolean(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in TRUE_STRINGS:
        return True
    if lowered in FALSE_STRINGS:
        return False
    raise ValueError(f"Invalid boolean: {text!r}")


def _decode_datetime(text: str) -> datetime:
    value = to_datetime(text)
    if value is None:
        raise ValueError(f"Invalid ISO datetime: {text!r}")
    return value


def _decode_base64url(text: str) -> bytes:
    padded = text + "=" * (-len(text) % 4)
    return base64.urlsafe_b64decode(padded.encode("ascii"))


def _decode_base64(text: str) -> bytes:
    try:
        return base64.b64decode(text.encode("ascii"), validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64: {e}") from e


string_to_number = Codec(string(), number(), decode=_decode_number, encode=to_text)

string_to_int = Codec(
    string(),
    number().int(),
    decode=_decode_int,
    encode=lambda value: str(math.floor(value)),
)

string_to_bigint = Codec(string(), bigint(), decode=lambda text: int(text.strip()), encode=str)

number_to_bigint = Codec(number(), bigint(), decode=lambda value: math.floor(value), encode=lambda value: value)

string_to_boolean = Codec(
    string(),
    boolean(),
    decode=_decode_boolean,
    encode=lambda value: "true" if value else "false",
)

iso_datetime_to_date = Codec(
    string(),
    date(),
    decode=_decode_datetime,
    encode=lambda value: value.isoformat().replace("+00:00", "Z"),
)

epoch_seconds_to_date = Codec(
    number(),
    date(),
    decode=lambda seconds: datetime.fromtimestamp(seconds, tz=timezone.utc),
    encode=lambda value: (value - _EPOCH) // timedelta(seconds=1),
)

epoch_millis_to_date = Codec(
    number(),
    date(),
    decode=lambda millis: _EPOCH + timedelta(milliseconds=millis),
    encode=lambda value: (value - _EPOCH) // timedelta(milliseconds=1),
)

utf8_to_bytes = Codec(
    string(),
    bytes_(),
    decode=lambda text: text.encode("utf-8"),
    encode=lambda data: data.decode("utf-8"),
)

bytes_to_utf8 = Codec(
    bytes_(),
    string(),
    decode=lambda data: data.decode("utf-8"),
    encode=lambda text: text.encode("utf-8"),
)

base64_to_bytes = Codec(
    string(),
    bytes_(),
    decode=_decode_base64,
    encode=lambda data: base64.b64encode(data).decode("ascii"),
)

base64url_to_bytes = Codec(
    string(),
    bytes_(),
    decode=_decode_base64url,
    encode=lambda data: base64.urlsafe_b64encode(data).decode("ascii").rstrip("="),
)

hex_to_bytes = Codec(string(), bytes_(), decode=bytes.fromhex, encode=lambda data: data.hex())

uri_component = Codec(
    string(),
    string(),
    decode=lambda text: unquote(text, errors="strict"),
    encode=lambda text: quote(text, safe="!~*'()"),
)


def json_codec(schema: Optional[Validator] = None) -> Codec:
    """
    Codec between JSON text and a (optionally validated) Python value.

    Encoding produces compact JSON.
    """
    return Codec(
        string(),
        schema if schema is not None else any_(),
        decode=json.loads,
        encode=lambda data: json.dumps(data, separators=(",", ":")),
    )


__all__ = [
    "Codec",
    "base64_to_bytes",
    "base64url_to_bytes",
    "bytes_to_utf8",
    "epoch_millis_to_date",
    "epoch_seconds_to_date",
    "hex_to_bytes",
    "iso_datetime_to_date",
    "json_codec",
    "number_to_bigint",
    "string_to_bigint",
    "string_to_boolean",
    "string_to_int",
    "string_to_number",
    "uri_component",
    "utf8_to_bytes",
]
