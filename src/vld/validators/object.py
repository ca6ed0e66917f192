"""
Object validator.

Fields are validated in shape order against ``input.get(name, MISSING)``;
a field whose output is ``MISSING`` is left out of the result. Keys not
in the shape are then handled by exactly one policy:

- strip (default): dropped
- strict: reported as one ``unrecognized_keys`` issue
- passthrough: copied into the result verbatim
- catchall: validated against the catchall validator

Passthrough and catchall screen every extra key with
``is_dangerous_key`` before reading or writing it.
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Optional

from ..context import MISSING
from ..errors import Issue, IssueCode
from ..result import ParseResult
from ..security import is_dangerous_key, report_dropped_key
from .base import (
    NullableValidator,
    Validator,
    ValidatorKind,
    invalid_type,
    wrap_issues,
)
from .special import EnumValidator


class UnknownKeys(str, Enum):
    """Extra-key policy of an object validator."""

    STRIP = "strip"
    STRICT = "strict"
    PASSTHROUGH = "passthrough"
    CATCHALL = "catchall"


@dataclass(frozen=True)
class ObjectConfig:
    shape: Mapping
    unknown_keys: UnknownKeys = UnknownKeys.STRIP
    catchall: Optional[Validator] = None
    message: Optional[str] = None
    strict_message: Optional[str] = None


def _freeze(shape: Mapping) -> Mapping:
    for name, validator in shape.items():
        if not isinstance(name, str):
            raise TypeError(f"Object field names must be strings, got {name!r}")
        if not isinstance(validator, Validator):
            raise TypeError(f"Field '{name}' must be a validator, got {type(validator).__name__}")
    return MappingProxyType(dict(shape))


def make_optional(validator: Validator) -> Validator:
    if validator.kind in (ValidatorKind.OPTIONAL, ValidatorKind.NULLISH):
        return validator
    return validator.optional()


def make_required(validator: Validator) -> Validator:
    if validator.kind == ValidatorKind.OPTIONAL:
        return validator.unwrap()
    if validator.kind == ValidatorKind.NULLISH:
        return NullableValidator(validator.unwrap())
    return validator


def make_deep_partial(validator: Validator) -> Validator:
    if validator.kind == ValidatorKind.OBJECT:
        return validator.deep_partial().optional()
    if validator.kind == ValidatorKind.OPTIONAL and validator.unwrap().kind == ValidatorKind.OBJECT:
        return validator.unwrap().deep_partial().optional()
    return make_optional(validator)


class ObjectValidator(Validator):
    """
    Validates mappings against a shape of field validators.

    Example:
        >>> user = ObjectValidator({"name": StringValidator(), "age": NumberValidator().optional()})
        >>> user.parse({"name": "Ada", "extra": 1})
        {'name': 'Ada'}
    """

    kind = ValidatorKind.OBJECT

    def __init__(self, shape: Mapping, message: Optional[str] = None):
        self._set(_config=ObjectConfig(shape=_freeze(shape), message=message))

    @classmethod
    def _from_config(cls, config: ObjectConfig) -> "ObjectValidator":
        validator = cls.__new__(cls)
        validator._set(_config=config)
        return validator

    def _derive(self, **changes: Any) -> "ObjectValidator":
        if "shape" in changes:
            changes["shape"] = _freeze(changes["shape"])
        return self._from_config(replace(self._config, **changes))

    @property
    def shape(self) -> Mapping:
        return self._config.shape

    @property
    def unknown_keys(self) -> UnknownKeys:
        return self._config.unknown_keys

    # ------------------------------------------------------------------
    # Extra-key policies
    # ------------------------------------------------------------------

    def strict(self, message: Optional[str] = None) -> "ObjectValidator":
        return self._derive(unknown_keys=UnknownKeys.STRICT, catchall=None, strict_message=message)

    def passthrough(self) -> "ObjectValidator":
        return self._derive(unknown_keys=UnknownKeys.PASSTHROUGH, catchall=None)

    def strip(self) -> "ObjectValidator":
        return self._derive(unknown_keys=UnknownKeys.STRIP, catchall=None)

    def catchall(self, validator: Validator) -> "ObjectValidator":
        if not isinstance(validator, Validator):
            raise TypeError(f"catchall() expects a validator, got {type(validator).__name__}")
        return self._derive(unknown_keys=UnknownKeys.CATCHALL, catchall=validator)

    # ------------------------------------------------------------------
    # Shape operations
    # ------------------------------------------------------------------

    def _check_keys(self, keys, operation: str) -> None:
        unknown = [key for key in keys if key not in self.shape]
        if unknown:
            raise ValueError(f"{operation}() got keys not in shape: {', '.join(map(str, unknown))}")

    def partial(self, *keys: str) -> "ObjectValidator":
        """Make the given fields (all fields if none given) optional."""
        self._check_keys(keys, "partial")
        targets = set(keys) if keys else set(self.shape)
        return self._derive(
            shape={
                name: make_optional(validator) if name in targets else validator
                for name, validator in self.shape.items()
            }
        )

    def required(self, *keys: str) -> "ObjectValidator":
        """Remove the optional wrapper from the given fields (all if none given)."""
        self._check_keys(keys, "required")
        targets = set(keys) if keys else set(self.shape)
        return self._derive(
            shape={
                name: make_required(validator) if name in targets else validator
                for name, validator in self.shape.items()
            }
        )

    def deep_partial(self) -> "ObjectValidator":
        """Make every field optional, recursing into nested object fields."""
        return self._derive(
            shape={name: make_deep_partial(validator) for name, validator in self.shape.items()}
        )

    def pick(self, *keys: str) -> "ObjectValidator":
        self._check_keys(keys, "pick")
        return self._derive(shape={name: self.shape[name] for name in self.shape if name in keys})

    def omit(self, *keys: str) -> "ObjectValidator":
        return self._derive(shape={name: v for name, v in self.shape.items() if name not in keys})

    def extend(self, shape: Mapping) -> "ObjectValidator":
        """Add fields (later fields replace same-named ones)."""
        if isinstance(shape, ObjectValidator):
            shape = shape.shape
        merged: Dict[str, Validator] = dict(self.shape)
        merged.update(shape)
        return self._derive(shape=merged)

    def merge(self, other: "ObjectValidator") -> "ObjectValidator":
        """Combine with another object validator; ``other`` wins on fields and key policy."""
        if not isinstance(other, ObjectValidator):
            raise TypeError(f"merge() expects an object validator, got {type(other).__name__}")
        merged: Dict[str, Validator] = dict(self.shape)
        merged.update(other.shape)
        return self._from_config(replace(other._config, shape=_freeze(merged)))

    def keyof(self) -> EnumValidator:
        return EnumValidator(list(self.shape))

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _parse(self, value, ctx):
        if not isinstance(value, Mapping):
            return invalid_type(ctx, "object", value, self._config.message)

        issues: List[Issue] = []
        output: Dict[Any, Any] = {}

        for name, validator in self.shape.items():
            result = validator._parse(value.get(name, MISSING), ctx)
            if not result.success:
                wrap_issues(issues, name, result)
                if not ctx.collect_all:
                    return ParseResult.fail(issues)
                continue
            if result.data is not MISSING:
                output[name] = result.data

        extra = [key for key in value if key not in self.shape]
        policy = self._config.unknown_keys

        if extra and policy == UnknownKeys.STRICT:
            keys = [str(key) for key in extra]
            issues.append(
                Issue(
                    code=IssueCode.UNRECOGNIZED_KEYS,
                    message=self._config.strict_message or ctx.render("unexpected_keys", keys=keys),
                    keys=tuple(keys),
                )
            )
        elif policy == UnknownKeys.PASSTHROUGH:
            for key in extra:
                if is_dangerous_key(key):
                    report_dropped_key(key, "object passthrough")
                    continue
                output[key] = value[key]
        elif policy == UnknownKeys.CATCHALL:
            for key in extra:
                if is_dangerous_key(key):
                    report_dropped_key(key, "object catchall")
                    continue
                result = self._config.catchall._parse(value[key], ctx)
                if not result.success:
                    wrap_issues(issues, key, result)
                    if not ctx.collect_all:
                        return ParseResult.fail(issues)
                    continue
                if result.data is not MISSING:
                    output[key] = result.data

        if issues:
            return ParseResult.fail(issues)
        return ParseResult.ok(output)

    def __repr__(self) -> str:
        return f"ObjectValidator(fields={list(self.shape)!r}, unknown_keys={self.unknown_keys.value!r})"
