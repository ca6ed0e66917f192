"""String validator."""

import ipaddress
import re
from typing import Callable, Optional, Pattern, Union

from ..errors import IssueCode
from ..result import ParseResult
from .base import LeafValidator, ValidatorKind

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$", re.IGNORECASE
)
URL_RE = re.compile(
    r"^https?://(www\.)?[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b([-a-zA-Z0-9()@:%_+.~#?&/=]*)$"
)
UUID_VERSION_RE = r"^[0-9a-f]{{8}}-[0-9a-f]{{4}}-{version}[0-9a-f]{{3}}-[89ab][0-9a-f]{{3}}-[0-9a-f]{{12}}$"
HOSTNAME_RE = re.compile(r"^(?=.{1,253}$)(?:(?!-)[a-zA-Z0-9-]{1,63}(?<!-)\.)+[a-zA-Z]{2,63}$")
BASE64_RE = re.compile(r"^(?:[A-Za-z0-9+/]{4})*(?:[A-Za-z0-9+/]{2}==|[A-Za-z0-9+/]{3}=)?$")
BASE64URL_RE = re.compile(r"^[A-Za-z0-9_-]*$")
HEX_RE = re.compile(r"^[0-9a-fA-F]*$")
JWT_RE = re.compile(r"^[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]*$")
NANOID_RE = re.compile(r"^[A-Za-z0-9_-]{21}$")
CUID_RE = re.compile(r"^c[^\s-]{8,}$", re.IGNORECASE)
CUID2_RE = re.compile(r"^[0-9a-z]+$")
ULID_RE = re.compile(r"^[0-9A-HJKMNP-TV-Z]{26}$")
MAC_RE = re.compile(r"^([0-9A-Fa-f]{2}:){5}[0-9A-Fa-f]{2}$")
E164_RE = re.compile(r"^\+[1-9]\d{1,14}$")
ISO_DATE_RE = re.compile(r"^\d{4}-(?:0[1-9]|1[0-2])-(?:0[1-9]|[12]\d|3[01])$")
ISO_TIME_RE = re.compile(r"^(?:[01]\d|2[0-3]):[0-5]\d(?::[0-5]\d(?:\.\d+)?)?$")
ISO_DATETIME_RE = re.compile(
    r"^\d{4}-(?:0[1-9]|1[0-2])-(?:0[1-9]|[12]\d|3[01])T(?:[01]\d|2[0-3]):[0-5]\d:[0-5]\d(?:\.\d+)?Z?$"
)
ISO_DATETIME_OFFSET_RE = re.compile(
    r"^\d{4}-(?:0[1-9]|1[0-2])-(?:0[1-9]|[12]\d|3[01])T(?:[01]\d|2[0-3]):[0-5]\d:[0-5]\d(?:\.\d+)?"
    r"(?:Z|[+-](?:[01]\d|2[0-3]):?[0-5]\d)?$"
)
ISO_DURATION_RE = re.compile(
    r"^P(?!$)(?:\d+(?:\.\d+)?Y)?(?:\d+(?:\.\d+)?M)?(?:\d+(?:\.\d+)?W)?(?:\d+(?:\.\d+)?D)?"
    r"(?:T(?=\d)(?:\d+(?:\.\d+)?H)?(?:\d+(?:\.\d+)?M)?(?:\d+(?:\.\d+)?S)?)?$"
)

_EMOJI_UNIT = "[\U0001F000-\U0001FAFF\u2300-\u23FF\u2600-\u27BF\u2B00-\u2BFF]\uFE0F?"
EMOJI_RE = re.compile(f"^(?:{_EMOJI_UNIT})+(?:\u200D(?:{_EMOJI_UNIT})+)*$")

HASH_LENGTHS = {"md5": 32, "sha1": 40, "sha256": 64, "sha384": 96, "sha512": 128}


def _is_ip(text: str, version: Optional[int] = None) -> bool:
    try:
        address = ipaddress.ip_address(text)
    except ValueError:
        return False
    return version is None or address.version == version


def _is_cidr(text: str, version: int) -> bool:
    if "/" not in text:
        return False
    try:
        network = ipaddress.ip_network(text, strict=False)
    except ValueError:
        return False
    return network.version == version


class StringValidator(LeafValidator):
    """
    Validates ``str`` values.

    Normalizing transforms (``trim``, ``to_lower_case``, ``to_upper_case``)
    run before every check, in declaration order.

    Example:
        >>> StringValidator().trim().min(3).parse("  abc  ")
        'abc'
    """

    kind = ValidatorKind.STRING
    expected = "string"

    def _check_type(self, value, ctx):
        if isinstance(value, str):
            return ParseResult.ok(value)
        return self._type_error(value, ctx)

    # Bounds

    def min(self, length: int, message: Optional[str] = None) -> "StringValidator":
        return self._add_check(
            IssueCode.TOO_SMALL,
            "string_min",
            lambda v: len(v) >= length,
            message,
            {"minimum": length},
            minimum=length,
            inclusive=True,
            origin="string",
        )

    def max(self, length: int, message: Optional[str] = None) -> "StringValidator":
        return self._add_check(
            IssueCode.TOO_BIG,
            "string_max",
            lambda v: len(v) <= length,
            message,
            {"maximum": length},
            maximum=length,
            inclusive=True,
            origin="string",
        )

    def length(self, length: int, message: Optional[str] = None) -> "StringValidator":
        return self._add_check(
            IssueCode.INVALID_LENGTH,
            "string_length",
            lambda v: len(v) == length,
            message,
            {"exact": length},
            exact=length,
            origin="string",
        )

    def nonempty(self, message: Optional[str] = None) -> "StringValidator":
        return self._add_check(
            IssueCode.TOO_SMALL,
            "string_empty",
            lambda v: len(v) > 0,
            message,
            minimum=1,
            inclusive=True,
            origin="string",
        )

    # Formats

    def _format(self, name: str, message_key: str, predicate, message, params=None):
        return self._add_check(
            IssueCode.INVALID_FORMAT, message_key, predicate, message, params, format=name
        )

    def _pattern(self, name: str, pattern: Pattern, message: Optional[str]) -> "StringValidator":
        return self._format(name, f"string_{name}", lambda v: pattern.fullmatch(v) is not None, message)

    def email(self, message: Optional[str] = None) -> "StringValidator":
        return self._format("email", "string_email", lambda v: EMAIL_RE.match(v) is not None, message)

    def url(self, message: Optional[str] = None) -> "StringValidator":
        return self._format("url", "string_url", lambda v: URL_RE.match(v) is not None, message)

    def uuid(self, message: Optional[str] = None, version: Optional[int] = None) -> "StringValidator":
        if version is None:
            pattern = UUID_RE
        elif version in range(1, 9):
            pattern = re.compile(UUID_VERSION_RE.format(version=version), re.IGNORECASE)
        else:
            raise ValueError(f"uuid version must be between 1 and 8, got {version}")
        return self._format("uuid", "string_uuid", lambda v: pattern.match(v) is not None, message)

    def regex(self, pattern: Union[str, Pattern], message: Optional[str] = None) -> "StringValidator":
        compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
        return self._format("regex", "string_regex", lambda v: compiled.search(v) is not None, message)

    def starts_with(self, prefix: str, message: Optional[str] = None) -> "StringValidator":
        return self._format(
            "starts_with", "string_starts_with", lambda v: v.startswith(prefix), message, {"prefix": prefix}
        )

    def ends_with(self, suffix: str, message: Optional[str] = None) -> "StringValidator":
        return self._format(
            "ends_with", "string_ends_with", lambda v: v.endswith(suffix), message, {"suffix": suffix}
        )

    def includes(self, substring: str, message: Optional[str] = None) -> "StringValidator":
        return self._format(
            "includes", "string_includes", lambda v: substring in v, message, {"substring": substring}
        )

    def ip(self, message: Optional[str] = None) -> "StringValidator":
        return self._format("ip", "string_ip", _is_ip, message)

    def ipv4(self, message: Optional[str] = None) -> "StringValidator":
        return self._format("ipv4", "string_ipv4", lambda v: _is_ip(v, 4), message)

    def ipv6(self, message: Optional[str] = None) -> "StringValidator":
        return self._format("ipv6", "string_ipv6", lambda v: _is_ip(v, 6), message)

    def cidrv4(self, message: Optional[str] = None) -> "StringValidator":
        return self._format("cidrv4", "string_cidrv4", lambda v: _is_cidr(v, 4), message)

    def cidrv6(self, message: Optional[str] = None) -> "StringValidator":
        return self._format("cidrv6", "string_cidrv6", lambda v: _is_cidr(v, 6), message)

    def mac(self, message: Optional[str] = None) -> "StringValidator":
        return self._pattern("mac", MAC_RE, message)

    def hostname(self, message: Optional[str] = None) -> "StringValidator":
        return self._pattern("hostname", HOSTNAME_RE, message)

    def e164(self, message: Optional[str] = None) -> "StringValidator":
        return self._pattern("e164", E164_RE, message)

    # Encodings and identifiers

    def base64(self, message: Optional[str] = None) -> "StringValidator":
        return self._pattern("base64", BASE64_RE, message)

    def base64url(self, message: Optional[str] = None) -> "StringValidator":
        return self._pattern("base64url", BASE64URL_RE, message)

    def hex(self, message: Optional[str] = None) -> "StringValidator":
        return self._pattern("hex", HEX_RE, message)

    def jwt(self, message: Optional[str] = None) -> "StringValidator":
        return self._pattern("jwt", JWT_RE, message)

    def nanoid(self, message: Optional[str] = None) -> "StringValidator":
        return self._pattern("nanoid", NANOID_RE, message)

    def cuid(self, message: Optional[str] = None) -> "StringValidator":
        return self._pattern("cuid", CUID_RE, message)

    def cuid2(self, message: Optional[str] = None) -> "StringValidator":
        return self._pattern("cuid2", CUID2_RE, message)

    def ulid(self, message: Optional[str] = None) -> "StringValidator":
        return self._pattern("ulid", ULID_RE, message)

    def emoji(self, message: Optional[str] = None) -> "StringValidator":
        return self._pattern("emoji", EMOJI_RE, message)

    def hash(self, algorithm: str, message: Optional[str] = None) -> "StringValidator":
        """Require a hex digest of ``algorithm`` (md5, sha1, sha256, sha384 or sha512)."""
        if algorithm not in HASH_LENGTHS:
            raise ValueError(f"Unsupported hash algorithm {algorithm!r}, expected one of {sorted(HASH_LENGTHS)}")
        pattern = re.compile(f"[0-9a-f]{{{HASH_LENGTHS[algorithm]}}}", re.IGNORECASE)
        return self._format(
            "hash", "string_hash", lambda v: pattern.fullmatch(v) is not None, message, {"algorithm": algorithm}
        )

    def custom_format(self, name: str, check: Union[str, Pattern, Callable[[str], bool]],
                      message: Optional[str] = None) -> "StringValidator":
        """
        Add a named format check from a regex or a predicate.

        Example:
            >>> StringValidator().custom_format("slug", r"^[a-z0-9-]+$")
        """
        if isinstance(check, (str, re.Pattern)):
            compiled = re.compile(check)

            def predicate(value: str) -> bool:
                return compiled.search(value) is not None
        else:
            predicate = check
        return self._format(name, "string_format", predicate, message, {"format": name})

    # ISO 8601

    def iso_date(self, message: Optional[str] = None) -> "StringValidator":
        return self._format("date", "string_iso_date", lambda v: ISO_DATE_RE.fullmatch(v) is not None, message)

    def iso_time(self, message: Optional[str] = None) -> "StringValidator":
        return self._format("time", "string_iso_time", lambda v: ISO_TIME_RE.fullmatch(v) is not None, message)

    def iso_datetime(self, message: Optional[str] = None, offset: bool = False) -> "StringValidator":
        """Require ``YYYY-MM-DDTHH:MM:SS[.fff][Z]``; ``offset=True`` also allows ``+HH:MM``."""
        pattern = ISO_DATETIME_OFFSET_RE if offset else ISO_DATETIME_RE
        return self._format("datetime", "string_iso_datetime", lambda v: pattern.fullmatch(v) is not None, message)

    def iso_duration(self, message: Optional[str] = None) -> "StringValidator":
        return self._format(
            "duration", "string_iso_duration", lambda v: ISO_DURATION_RE.fullmatch(v) is not None, message
        )

    # Normalizers

    def trim(self) -> "StringValidator":
        return self._add_transform(str.strip)

    def to_lower_case(self) -> "StringValidator":
        return self._add_transform(str.lower)

    def to_upper_case(self) -> "StringValidator":
        return self._add_transform(str.upper)
