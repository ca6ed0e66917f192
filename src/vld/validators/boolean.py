"""Boolean and string-boolean validators."""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from ..errors import Issue, IssueCode
from ..result import ParseResult
from .base import LeafConfig, LeafValidator, ValidatorKind
from .special import describe

DEFAULT_TRUTHY: Tuple[str, ...] = ("true", "1", "yes", "on", "y", "enabled")
DEFAULT_FALSY: Tuple[str, ...] = ("false", "0", "no", "off", "n", "disabled")


class BooleanValidator(LeafValidator):
    kind = ValidatorKind.BOOLEAN
    expected = "boolean"

    def _check_type(self, value, ctx):
        if isinstance(value, bool):
            return ParseResult.ok(value)
        return self._type_error(value, ctx)


@dataclass(frozen=True)
class StringBoolConfig(LeafConfig):
    truthy: Tuple[str, ...] = DEFAULT_TRUTHY
    falsy: Tuple[str, ...] = DEFAULT_FALSY
    case_sensitive: bool = False


class StringBoolValidator(LeafValidator):
    """
    Parses boolean spellings such as ``"yes"``/``"off"`` into ``bool``.

    Real booleans pass unchanged. Matching is case-insensitive unless
    ``case_sensitive()`` is chained.

    Example:
        >>> StringBoolValidator().parse("Enabled")
        True
    """

    kind = ValidatorKind.STRINGBOOL
    expected = "string"

    def __init__(
        self,
        truthy: Optional[Iterable[str]] = None,
        falsy: Optional[Iterable[str]] = None,
        case_sensitive: bool = False,
        message: Optional[str] = None,
    ):
        self._set(
            _config=StringBoolConfig(
                truthy=DEFAULT_TRUTHY if truthy is None else tuple(truthy),
                falsy=DEFAULT_FALSY if falsy is None else tuple(falsy),
                case_sensitive=case_sensitive,
                message=message,
            )
        )

    def _spellings(self) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
        config = self._config
        if config.case_sensitive:
            return config.truthy, config.falsy
        return tuple(v.lower() for v in config.truthy), tuple(v.lower() for v in config.falsy)

    def _check_type(self, value, ctx):
        if isinstance(value, bool):
            return ParseResult.ok(value)
        if not isinstance(value, str):
            return self._type_error(value, ctx)

        truthy, falsy = self._spellings()
        text = value if self._config.case_sensitive else value.lower()
        if text in truthy:
            return ParseResult.ok(True)
        if text in falsy:
            return ParseResult.ok(False)
        options = list(truthy + falsy)
        return ParseResult.fail(
            [
                Issue(
                    code=IssueCode.INVALID_ENUM_VALUE,
                    message=self._config.message
                    or ctx.render("stringbool_expected", options=options, received=describe(value)),
                    expected=" | ".join(options),
                    received="string",
                )
            ]
        )

    def with_truthy(self, values: Iterable[str]) -> "StringBoolValidator":
        return self._derive(truthy=tuple(values))

    def with_falsy(self, values: Iterable[str]) -> "StringBoolValidator":
        return self._derive(falsy=tuple(values))

    def case_sensitive(self) -> "StringBoolValidator":
        return self._derive(case_sensitive=True)

    def case_insensitive(self) -> "StringBoolValidator":
        return self._derive(case_sensitive=False)
