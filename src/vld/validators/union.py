"""
Union, discriminated union and intersection validators.

A union tries its options in declared order and returns the first
success. Before running an option it consults ``accepted_types``, a
classifier derived from the option's kind tag: an option that provably
cannot accept the input's value type is skipped with a synthesized type
issue. The classifier answers None ("could be anything") whenever it is
unsure, so skipping never changes which option wins.
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Tuple

from ..context import MISSING
from ..errors import Issue, IssueCode, get_value_type
from ..merge import deep_merge
from ..result import ParseResult
from .base import Validator, ValidatorKind, invalid_type
from .special import describe, strict_equal

logger = logging.getLogger(__name__)

_KIND_TYPES: Dict[ValidatorKind, FrozenSet[str]] = {
    ValidatorKind.STRING: frozenset({"string"}),
    ValidatorKind.NUMBER: frozenset({"number"}),
    ValidatorKind.BIGINT: frozenset({"number"}),
    ValidatorKind.BOOLEAN: frozenset({"boolean"}),
    ValidatorKind.STRINGBOOL: frozenset({"string", "boolean"}),
    ValidatorKind.DATE: frozenset({"date", "string", "number"}),
    ValidatorKind.SYMBOL: frozenset({"symbol"}),
    ValidatorKind.NEVER: frozenset(),
    ValidatorKind.NULL: frozenset({"null"}),
    ValidatorKind.UNDEFINED: frozenset({"undefined"}),
    ValidatorKind.NAN: frozenset({"nan"}),
    ValidatorKind.BYTES: frozenset({"bytes", "memoryview"}),
    ValidatorKind.OBJECT: frozenset({"object"}),
    ValidatorKind.RECORD: frozenset({"object"}),
    ValidatorKind.MAP: frozenset({"object"}),
    ValidatorKind.DISCRIMINATED_UNION: frozenset({"object"}),
    ValidatorKind.ARRAY: frozenset({"array"}),
    ValidatorKind.TUPLE: frozenset({"array"}),
    ValidatorKind.SET: frozenset({"set"}),
}

_PASS_THROUGH_KINDS = frozenset(
    {ValidatorKind.REFINE, ValidatorKind.SUPER_REFINE, ValidatorKind.TRANSFORM}
)


def accepted_types(validator: Validator) -> Optional[FrozenSet[str]]:
    """
    Return the value types (as named by ``get_value_type``) ``validator``
    could accept, or None when that cannot be decided from its kind.
    """
    if validator.coerces:
        return None
    kind = validator.kind
    if kind in _KIND_TYPES:
        return _KIND_TYPES[kind]
    if kind in (ValidatorKind.LITERAL, ValidatorKind.ENUM):
        return frozenset(get_value_type(value) for value in validator.values)
    if kind in _PASS_THROUGH_KINDS:
        return accepted_types(validator.inner)
    if kind == ValidatorKind.PIPE:
        return accepted_types(validator.source)

    extra: FrozenSet[str]
    if kind in (ValidatorKind.OPTIONAL, ValidatorKind.DEFAULT, ValidatorKind.PREFAULT):
        extra = frozenset({"undefined"})
    elif kind == ValidatorKind.NULLABLE:
        extra = frozenset({"null"})
    elif kind == ValidatorKind.NULLISH:
        extra = frozenset({"undefined", "null"})
    elif kind in (ValidatorKind.UNION, ValidatorKind.XOR):
        combined: FrozenSet[str] = frozenset()
        for option in validator.options:
            types = accepted_types(option)
            if types is None:
                return None
            combined |= types
        return combined
    else:
        # any, unknown, catch, lazy, preprocess, intersection, codec
        return None

    inner = accepted_types(validator.inner)
    return None if inner is None else inner | extra


class UnionValidator(Validator):
    """
    Accepts a value matching any option; the first matching option wins.

    When no option matches, a single ``invalid_union`` issue carries every
    option's issues in ``union_errors``.
    """

    kind = ValidatorKind.UNION

    def __init__(self, options: Sequence[Validator], message: Optional[str] = None):
        options = tuple(options)
        if len(options) < 1:
            raise ValueError("union() requires at least one option")
        for option in options:
            if not isinstance(option, Validator):
                raise TypeError(f"union() expects validators, got {type(option).__name__}")
        self._set(
            _options=options,
            _hints=tuple(accepted_types(option) for option in options),
            _message=message,
        )

    @property
    def options(self) -> Tuple[Validator, ...]:
        return self._options

    def _parse(self, value, ctx):
        received = get_value_type(value)
        failures: List[Tuple[Issue, ...]] = []

        for option, hint in zip(self._options, self._hints):
            if hint is not None and received not in hint:
                expected = " | ".join(sorted(hint)) or "never"
                failures.append(
                    (
                        Issue(
                            code=IssueCode.INVALID_TYPE,
                            message=ctx.render("invalid_type", expected=expected, received=received),
                            expected=expected,
                            received=received,
                        ),
                    )
                )
                continue
            result = option._parse(value, ctx)
            if result.success:
                return result
            failures.append(result.issues)

        messages = [alternative[0].message for alternative in failures]
        logger.debug(f"No union option matched {received}: {messages}")
        return ParseResult.fail(
            [
                Issue(
                    code=IssueCode.INVALID_UNION,
                    message=self._message or ctx.render("union_no_match", errors=messages),
                    received=received,
                    union_errors=tuple(failures),
                )
            ]
        )

    def __repr__(self) -> str:
        return f"UnionValidator({list(self._options)!r})"


class XorValidator(UnionValidator):
    """
    Exclusive union: exactly one option must accept the value.

    Every option is tried. No match fails like a union; more than one
    match fails with an ``invalid_union`` issue naming the count.
    """

    kind = ValidatorKind.XOR

    def __init__(self, options: Sequence[Validator], message: Optional[str] = None):
        options = tuple(options)
        if len(options) < 2:
            raise ValueError("xor() requires at least two options")
        super().__init__(options, message)

    def _parse(self, value, ctx):
        received = get_value_type(value)
        matches: List[ParseResult] = []
        failures: List[Tuple[Issue, ...]] = []

        for option, hint in zip(self._options, self._hints):
            if hint is not None and received not in hint:
                continue
            result = option._parse(value, ctx)
            if result.success:
                matches.append(result)
            else:
                failures.append(result.issues)

        if len(matches) == 1:
            return matches[0]
        if matches:
            message = self._message or ctx.render("xor_multiple", count=len(matches))
            return ParseResult.fail([Issue(code=IssueCode.INVALID_UNION, message=message, received=received)])

        logger.debug(f"No xor option matched {received}")
        return ParseResult.fail(
            [
                Issue(
                    code=IssueCode.INVALID_UNION,
                    message=self._message or ctx.render("xor_no_match"),
                    received=received,
                    union_errors=tuple(failures),
                )
            ]
        )

    def __repr__(self) -> str:
        return f"XorValidator({list(self._options)!r})"


def _discriminator_values(option: Validator, discriminator: str) -> Tuple[Any, ...]:
    if option.kind != ValidatorKind.OBJECT:
        raise TypeError("discriminated_union() options must be object validators")
    field = option.shape.get(discriminator)
    if field is None:
        raise ValueError(f"discriminated_union() option is missing discriminator field '{discriminator}'")
    if field.kind not in (ValidatorKind.LITERAL, ValidatorKind.ENUM):
        raise ValueError(f"Discriminator field '{discriminator}' must be a literal or enum validator")
    return tuple(field.values)


class DiscriminatedUnionValidator(Validator):
    """
    Union of object validators selected by the value of one key.

    Example:
        >>> shape = discriminated_union("type", [
        ...     object_({"type": literal("circle"), "radius": number()}),
        ...     object_({"type": literal("square"), "side": number()}),
        ... ])
    """

    kind = ValidatorKind.DISCRIMINATED_UNION

    def __init__(self, discriminator: str, options: Sequence[Validator], message: Optional[str] = None):
        options = tuple(options)
        if not options:
            raise ValueError("discriminated_union() requires at least one option")
        table: List[Tuple[Any, Validator]] = []
        for option in options:
            for value in _discriminator_values(option, discriminator):
                if any(strict_equal(value, seen) for seen, _ in table):
                    raise ValueError(f"Duplicate discriminator value {value!r}")
                table.append((value, option))
        self._set(
            _discriminator=discriminator,
            _options=options,
            _table=tuple(table),
            _message=message,
        )

    @property
    def discriminator(self) -> str:
        return self._discriminator

    @property
    def options(self) -> Tuple[Validator, ...]:
        return self._options

    def _parse(self, value, ctx):
        if not isinstance(value, Mapping):
            return invalid_type(ctx, "object", value, self._message)

        tag = value.get(self._discriminator, MISSING)
        for candidate, option in self._table:
            if strict_equal(tag, candidate):
                return option._parse(value, ctx)

        options = [describe(candidate) for candidate, _ in self._table]
        received = describe(tag)
        return ParseResult.fail(
            [
                Issue(
                    code=IssueCode.INVALID_UNION_DISCRIMINATOR,
                    path=(self._discriminator,),
                    message=self._message
                    or ctx.render(
                        "union_discriminator",
                        discriminator=self._discriminator,
                        options=options,
                        received=received,
                    ),
                    expected=" | ".join(options),
                    received=received,
                )
            ]
        )


class IntersectionValidator(Validator):
    """
    Requires both validators to accept the same raw input.

    Results are combined by category:
    - mapping and mapping: deep merge, right side wins on collisions
    - non-mapping and non-mapping: must be strictly equal
    - one of each: always a failure
    """

    kind = ValidatorKind.INTERSECTION

    def __init__(self, left: Validator, right: Validator):
        for side in (left, right):
            if not isinstance(side, Validator):
                raise TypeError(f"intersection() expects validators, got {type(side).__name__}")
        self._set(_left=left, _right=right)

    @property
    def left(self) -> Validator:
        return self._left

    @property
    def right(self) -> Validator:
        return self._right

    def _parse(self, value, ctx):
        left = self._left._parse(value, ctx)
        if not left.success and not ctx.collect_all:
            return left
        right = self._right._parse(value, ctx)
        if not (left.success and right.success):
            return ParseResult.fail(left.issues + right.issues)

        a, b = left.data, right.data
        a_is_object, b_is_object = isinstance(a, Mapping), isinstance(b, Mapping)

        if a_is_object and b_is_object:
            return ParseResult.ok(deep_merge(a, b))
        if not a_is_object and not b_is_object:
            if strict_equal(a, b):
                return ParseResult.ok(b)
            key = "intersection_mismatch"
        else:
            key = "intersection_category"
        return ParseResult.fail(
            [
                Issue(
                    code=IssueCode.INVALID_INTERSECTION,
                    message=ctx.render(key),
                    expected=get_value_type(a),
                    received=get_value_type(b),
                )
            ]
        )
