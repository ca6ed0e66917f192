"""Record, set and map validators."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..errors import Issue, IssueCode, get_value_type
from ..result import ParseResult
from ..security import is_dangerous_key, report_dropped_key
from .base import LeafConfig, LeafValidator, Validator, ValidatorKind, invalid_type, wrap_issues


def _segment(key: Any):
    if isinstance(key, (str, int)) and not isinstance(key, bool):
        return key
    return str(key)


def _require_validator(value: Any, where: str) -> Validator:
    if not isinstance(value, Validator):
        raise TypeError(f"{where} expects a validator, got {type(value).__name__}")
    return value


class RecordValidator(Validator):
    """
    Validates a string-keyed mapping whose values share one validator.

    Dangerous keys are dropped before their values are read. An optional
    key validator checks (and may normalize) each key.
    """

    kind = ValidatorKind.RECORD

    def __init__(
        self,
        value_validator: Validator,
        key_validator: Optional[Validator] = None,
        message: Optional[str] = None,
    ):
        self._set(
            _value=_require_validator(value_validator, "record()"),
            _key=None if key_validator is None else _require_validator(key_validator, "record()"),
            _message=message,
        )

    @property
    def value_validator(self) -> Validator:
        return self._value

    @property
    def key_validator(self) -> Optional[Validator]:
        return self._key

    def _parse(self, value, ctx):
        if not isinstance(value, Mapping):
            return invalid_type(ctx, "record", value, self._message)

        issues: List[Issue] = []
        output: Dict[str, Any] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                issues.append(
                    Issue(
                        code=IssueCode.INVALID_TYPE,
                        path=(_segment(key),),
                        message=ctx.render("invalid_record_key", received=get_value_type(key)),
                        expected="string",
                        received=get_value_type(key),
                    )
                )
                if not ctx.collect_all:
                    break
                continue
            if is_dangerous_key(key):
                report_dropped_key(key, "record")
                continue

            out_key = key
            if self._key is not None:
                key_result = self._key._parse(key, ctx)
                if not key_result.success:
                    wrap_issues(issues, key, key_result)
                    if not ctx.collect_all:
                        break
                    continue
                out_key = key_result.data
                if is_dangerous_key(out_key):
                    report_dropped_key(out_key, "record")
                    continue

            result = self._value._parse(item, ctx)
            if not result.success:
                wrap_issues(issues, key, result)
                if not ctx.collect_all:
                    break
                continue
            output[out_key] = result.data

        if issues:
            return ParseResult.fail(issues)
        return ParseResult.ok(output)


class MapValidator(Validator):
    """
    Validates a dict with arbitrary hashable keys, checking every key and value.

    The result is a new dict built from the validated keys and values.
    """

    kind = ValidatorKind.MAP

    def __init__(self, key_validator: Validator, value_validator: Validator, message: Optional[str] = None):
        self._set(
            _key=_require_validator(key_validator, "map_()"),
            _value=_require_validator(value_validator, "map_()"),
            _message=message,
        )

    def _parse(self, value, ctx):
        if not isinstance(value, Mapping):
            return invalid_type(ctx, "map", value, self._message)

        issues: List[Issue] = []
        output: Dict[Any, Any] = {}
        for key, item in value.items():
            segment = _segment(key)
            key_result = self._key._parse(key, ctx)
            value_result = self._value._parse(item, ctx)
            if key_result.success and value_result.success:
                output[key_result.data] = value_result.data
                continue
            wrap_issues(issues, segment, key_result)
            wrap_issues(issues, segment, value_result)
            if not ctx.collect_all:
                break

        if issues:
            return ParseResult.fail(issues)
        return ParseResult.ok(output)


@dataclass(frozen=True)
class SetConfig(LeafConfig):
    element: Optional[Validator] = None


class SetValidator(LeafValidator):
    """
    Validates ``set``/``frozenset`` values element by element.

    The output keeps the input's kind. Element issues are addressed by
    iteration index.
    """

    kind = ValidatorKind.SET
    expected = "set"

    def __init__(self, element: Validator, message: Optional[str] = None):
        self._set(_config=SetConfig(element=_require_validator(element, "set_()"), message=message))

    @property
    def element(self) -> Validator:
        return self._config.element

    def _bound(self, code, key, predicate, message, params=None, **detail):
        return self._add_check(code, key, predicate, message, params, origin="set", **detail)

    def min(self, size: int, message: Optional[str] = None) -> "SetValidator":
        return self._bound(
            IssueCode.TOO_SMALL, "set_min", lambda v: len(v) >= size, message,
            {"minimum": size}, minimum=size, inclusive=True,
        )

    def max(self, size: int, message: Optional[str] = None) -> "SetValidator":
        return self._bound(
            IssueCode.TOO_BIG, "set_max", lambda v: len(v) <= size, message,
            {"maximum": size}, maximum=size, inclusive=True,
        )

    def size(self, size: int, message: Optional[str] = None) -> "SetValidator":
        return self._bound(
            IssueCode.INVALID_LENGTH, "set_size", lambda v: len(v) == size, message,
            {"exact": size}, exact=size,
        )

    def nonempty(self, message: Optional[str] = None) -> "SetValidator":
        return self._bound(
            IssueCode.TOO_SMALL, "set_empty", lambda v: len(v) > 0, message, minimum=1, inclusive=True
        )

    def _parse(self, value, ctx):
        if not isinstance(value, (set, frozenset)):
            return self._type_error(value, ctx)

        issues: List[Issue] = []
        output = set()
        for index, item in enumerate(value):
            result = self.element._parse(item, ctx)
            if not result.success:
                wrap_issues(issues, index, result)
                if not ctx.collect_all:
                    break
                continue
            output.add(result.data)

        if issues:
            return ParseResult.fail(issues)
        if isinstance(value, frozenset):
            output = frozenset(output)
        return self._run_checks(output, ctx)
