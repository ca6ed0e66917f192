"""Array and tuple validators."""

import json
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from ..errors import Issue, IssueCode
from ..result import ParseResult
from .base import LeafConfig, LeafValidator, Validator, ValidatorKind, invalid_type, wrap_issues


def structural_key(value: Any) -> str:
    """Key under which structurally equal values compare equal."""
    try:
        return json.dumps(value, sort_keys=True, default=repr)
    except (TypeError, ValueError):
        return repr(value)


def _has_unique_items(items: List[Any]) -> bool:
    keys = [structural_key(item) for item in items]
    return len(set(keys)) == len(keys)


@dataclass(frozen=True)
class ArrayConfig(LeafConfig):
    element: Optional[Validator] = None


class ArrayValidator(LeafValidator):
    """
    Validates lists (or tuples) element by element, producing a list.

    Length checks run after every element has been validated.

    Example:
        >>> ArrayValidator(NumberValidator()).min(2).parse((1, 2))
        [1, 2]
    """

    kind = ValidatorKind.ARRAY
    expected = "array"

    def __init__(self, element: Validator, message: Optional[str] = None):
        if not isinstance(element, Validator):
            raise TypeError(f"array() expects a validator, got {type(element).__name__}")
        self._set(_config=ArrayConfig(element=element, message=message))

    @property
    def element(self) -> Validator:
        return self._config.element

    def _bound(self, code, key, predicate, message, params=None, **detail):
        return self._add_check(code, key, predicate, message, params, origin="array", **detail)

    def min(self, length: int, message: Optional[str] = None) -> "ArrayValidator":
        return self._bound(
            IssueCode.TOO_SMALL, "array_min", lambda v: len(v) >= length, message,
            {"minimum": length}, minimum=length, inclusive=True,
        )

    def max(self, length: int, message: Optional[str] = None) -> "ArrayValidator":
        return self._bound(
            IssueCode.TOO_BIG, "array_max", lambda v: len(v) <= length, message,
            {"maximum": length}, maximum=length, inclusive=True,
        )

    def length(self, length: int, message: Optional[str] = None) -> "ArrayValidator":
        return self._bound(
            IssueCode.INVALID_LENGTH, "array_length", lambda v: len(v) == length, message,
            {"exact": length}, exact=length,
        )

    def between(self, minimum: int, maximum: int, message: Optional[str] = None) -> "ArrayValidator":
        params = {"minimum": minimum, "maximum": maximum}
        return self._bound(
            IssueCode.TOO_SMALL, "array_between", lambda v: len(v) >= minimum, message,
            params, minimum=minimum, inclusive=True,
        )._bound(
            IssueCode.TOO_BIG, "array_between", lambda v: len(v) <= maximum, message,
            params, maximum=maximum, inclusive=True,
        )

    def nonempty(self, message: Optional[str] = None) -> "ArrayValidator":
        return self._bound(
            IssueCode.TOO_SMALL, "array_empty", lambda v: len(v) > 0, message, minimum=1, inclusive=True
        )

    def unique(self, message: Optional[str] = None) -> "ArrayValidator":
        """Reject arrays holding two structurally equal items."""
        return self._add_check(IssueCode.NOT_UNIQUE, "array_unique", _has_unique_items, message)

    def _parse(self, value, ctx):
        if not isinstance(value, (list, tuple)):
            return self._type_error(value, ctx)

        issues: List[Issue] = []
        output: List[Any] = []
        for index, item in enumerate(value):
            result = self.element._parse(item, ctx)
            if not result.success:
                wrap_issues(issues, index, result)
                if not ctx.collect_all:
                    break
                continue
            output.append(result.data)

        if issues:
            return ParseResult.fail(issues)
        return self._run_checks(output, ctx)

    def __repr__(self) -> str:
        return f"ArrayValidator({self.element!r}, checks={len(self.checks)})"


class TupleValidator(Validator):
    """
    Validates fixed-length sequences with one validator per position.

    The length must match exactly before any position is validated.
    The output is a tuple.
    """

    kind = ValidatorKind.TUPLE

    def __init__(self, items: Sequence[Validator], message: Optional[str] = None):
        items = tuple(items)
        for item in items:
            if not isinstance(item, Validator):
                raise TypeError(f"tuple_() expects validators, got {type(item).__name__}")
        self._set(_items=items, _message=message)

    @property
    def items(self):
        return self._items

    def _parse(self, value, ctx):
        if not isinstance(value, (list, tuple)):
            return invalid_type(ctx, "tuple", value, self._message)

        expected, received = len(self._items), len(value)
        if expected != received:
            return ParseResult.fail(
                [
                    Issue(
                        code=IssueCode.INVALID_TUPLE_LENGTH,
                        message=ctx.render("tuple_length", exact=expected, received=received),
                        exact=expected,
                        received=str(received),
                    )
                ]
            )

        issues: List[Issue] = []
        output: List[Any] = []
        for index, (validator, item) in enumerate(zip(self._items, value)):
            result = validator._parse(item, ctx)
            if not result.success:
                wrap_issues(issues, index, result)
                if not ctx.collect_all:
                    break
                continue
            output.append(result.data)

        if issues:
            return ParseResult.fail(issues)
        return ParseResult.ok(tuple(output))

    def __repr__(self) -> str:
        return f"TupleValidator({list(self._items)!r})"
