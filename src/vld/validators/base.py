"""
Base validator contract and modifier wrappers.

Every validator is an immutable value. Chain methods never assign to the
receiver: they build a new validator from a new configuration record, so
a validator can be shared freely between threads and asyncio tasks.

Validation runs through ``_parse(value, ctx)``, which returns a
``ParseResult`` and never raises for bad input. The public entry points
(``parse``, ``safe_parse``, ``is_valid``, ``parse_or_default``) build a
``ParseContext`` and delegate to it.

Example:
    >>> import vld
    >>> schema = vld.string().min(3).optional()
    >>> schema.safe_parse("ab").success
    False
    >>> schema.parse()
    <MISSING>
"""

import copy
import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, TypeVar

from ..context import MISSING, ParseContext
from ..errors import Issue, IssueCode, PathSegment, get_value_type
from ..result import ParseResult

logger = logging.getLogger(__name__)

V = TypeVar("V", bound="Validator")


class ValidatorKind(str, Enum):
    """Closed set of validator kinds. Structural consumers switch on this tag."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRINGBOOL = "stringbool"
    DATE = "date"
    BIGINT = "bigint"
    SYMBOL = "symbol"
    LITERAL = "literal"
    ENUM = "enum"
    ANY = "any"
    UNKNOWN = "unknown"
    NEVER = "never"
    NULL = "null"
    UNDEFINED = "undefined"
    NAN = "nan"
    BYTES = "bytes"
    OBJECT = "object"
    ARRAY = "array"
    TUPLE = "tuple"
    RECORD = "record"
    SET = "set"
    MAP = "map"
    UNION = "union"
    XOR = "xor"
    DISCRIMINATED_UNION = "discriminated_union"
    INTERSECTION = "intersection"
    LAZY = "lazy"
    OPTIONAL = "optional"
    NULLABLE = "nullable"
    NULLISH = "nullish"
    DEFAULT = "default"
    PREFAULT = "prefault"
    CATCH = "catch"
    REFINE = "refine"
    SUPER_REFINE = "super_refine"
    TRANSFORM = "transform"
    PIPE = "pipe"
    PREPROCESS = "preprocess"
    CODEC = "codec"


def invalid_type(
    ctx: ParseContext, expected: str, value: Any, message: Optional[str] = None
) -> ParseResult:
    """Build the failure result for a value of the wrong dynamic kind."""
    received = get_value_type(value)
    return ParseResult.fail(
        [
            Issue(
                code=IssueCode.INVALID_TYPE,
                message=message or ctx.render("invalid_type", expected=expected, received=received),
                expected=expected,
                received=received,
            )
        ]
    )


def callback_failure(ctx: ParseContext, error: Exception, where: str) -> ParseResult:
    """Convert an exception raised by a user callback into a custom issue."""
    logger.warning(f"Unexpected error in {where}: {error}", exc_info=True)
    return ParseResult.fail(
        [Issue(code=IssueCode.CUSTOM, message=ctx.render("unexpected_error", error=str(error)))]
    )


class Validator:
    """
    Base class for all validators.

    Subclasses set ``kind`` and implement ``_parse``. Instances refuse
    attribute assignment after construction.
    """

    kind: ValidatorKind = ValidatorKind.ANY
    # True for validators that convert between dynamic kinds before checking
    coerces: bool = False

    def _set(self, **attrs: Any) -> None:
        for name, value in attrs.items():
            object.__setattr__(self, name, value)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(
            f"{type(self).__name__} is immutable; use its chain methods to derive a new validator"
        )

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r})"

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _parse(self, value: Any, ctx: ParseContext) -> ParseResult:
        raise NotImplementedError

    def _run(self, value: Any, ctx: ParseContext) -> ParseResult:
        try:
            return self._parse(value, ctx)
        except Exception as e:
            return callback_failure(ctx, e, f"{type(self).__name__}")

    def safe_parse(
        self,
        value: Any = MISSING,
        *,
        locale: Optional[str] = None,
        collect_all: Optional[bool] = None,
    ) -> ParseResult:
        """
        Validate ``value`` without raising.

        Args:
            value: Input value (omit to validate an absent value)
            locale: Message locale for this call
            collect_all: Accumulate every issue (defaults to settings)

        Returns:
            ParseResult with data on success or a ValidationError on failure
        """
        ctx = ParseContext.create(locale=locale, collect_all=collect_all)
        return self._run(value, ctx)

    def parse(self, value: Any = MISSING, *, locale: Optional[str] = None) -> Any:
        """
        Validate ``value`` and return the output.

        Stops at the first issue.

        Raises:
            ValidationError: If the value does not conform
        """
        ctx = ParseContext.create(locale=locale, collect_all=False)
        result = self._run(value, ctx)
        if not result.success:
            raise result.error
        return result.data

    def is_valid(self, value: Any = MISSING) -> bool:
        """Return True if ``value`` conforms. Never raises."""
        return self.safe_parse(value, collect_all=False).success

    def parse_or_default(self, value: Any, default: Any) -> Any:
        """
        Return the validated value, or the validated ``default`` on failure.

        Raises:
            ValueError: If ``default`` itself fails validation
        """
        fallback = self.safe_parse(default, collect_all=False)
        if not fallback.success:
            raise ValueError(f"Default value is invalid: {fallback.error}")
        result = self.safe_parse(value, collect_all=False)
        return result.data if result.success else fallback.data

    # ------------------------------------------------------------------
    # Modifiers
    # ------------------------------------------------------------------

    def optional(self) -> "OptionalValidator":
        return OptionalValidator(self)

    def nullable(self) -> "NullableValidator":
        return NullableValidator(self)

    def nullish(self) -> "NullishValidator":
        return NullishValidator(self)

    def default(self, value: Any) -> "DefaultValidator":
        """
        Succeed with ``value`` when the input is absent.

        A callable is invoked per call to produce the default; any other
        value is deep-copied so outputs never share mutable state.
        """
        return DefaultValidator(self, value)

    def prefault(self, value: Any) -> "PrefaultValidator":
        """Validate ``value`` through this validator when the input is absent."""
        return PrefaultValidator(self, value)

    def catch(self, value: Any) -> "CatchValidator":
        return CatchValidator(self, value)

    def refine(self, predicate: Callable[[Any], bool], message: Optional[str] = None) -> "RefineValidator":
        return RefineValidator(self, predicate, message)

    def super_refine(self, fn: Callable[[Any, "RefinementContext"], None]) -> "SuperRefineValidator":
        return SuperRefineValidator(self, fn)

    def transform(self, fn: Callable[[Any], Any]) -> "TransformValidator":
        return TransformValidator(self, fn)

    def pipe(self, target: "Validator") -> "PipeValidator":
        return PipeValidator(self, target)

    def apply(self, fn: Callable[["Validator"], V]) -> V:
        """Return ``fn(self)``; lets reusable chain fragments read left to right."""
        return fn(self)


class WrapperValidator(Validator):
    """A validator that wraps exactly one inner validator."""

    def __init__(self, inner: Validator):
        if not isinstance(inner, Validator):
            raise TypeError(f"Expected a validator, got {type(inner).__name__}")
        self._set(_inner=inner)

    @property
    def inner(self) -> Validator:
        return self._inner

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._inner!r})"


class OptionalValidator(WrapperValidator):
    """Accepts ``MISSING`` unchanged, otherwise delegates."""

    kind = ValidatorKind.OPTIONAL

    def _parse(self, value, ctx):
        if value is MISSING:
            return ParseResult.ok(MISSING)
        return self._inner._parse(value, ctx)

    def unwrap(self) -> Validator:
        return self._inner


class NullableValidator(WrapperValidator):
    """Accepts ``None`` unchanged, otherwise delegates."""

    kind = ValidatorKind.NULLABLE

    def _parse(self, value, ctx):
        if value is None:
            return ParseResult.ok(None)
        return self._inner._parse(value, ctx)

    def unwrap(self) -> Validator:
        return self._inner


class NullishValidator(WrapperValidator):
    """Accepts ``MISSING`` or ``None`` unchanged, otherwise delegates."""

    kind = ValidatorKind.NULLISH

    def _parse(self, value, ctx):
        if value is MISSING or value is None:
            return ParseResult.ok(value)
        return self._inner._parse(value, ctx)

    def unwrap(self) -> Validator:
        return self._inner


class DefaultValidator(WrapperValidator):
    kind = ValidatorKind.DEFAULT

    def __init__(self, inner: Validator, value: Any):
        super().__init__(inner)
        self._set(_default=value)

    def _resolve_default(self) -> Any:
        if callable(self._default):
            return self._default()
        return copy.deepcopy(self._default)

    def _parse(self, value, ctx):
        if value is MISSING:
            return ParseResult.ok(self._resolve_default())
        return self._inner._parse(value, ctx)

    def remove_default(self) -> Validator:
        return self._inner


class PrefaultValidator(DefaultValidator):
    kind = ValidatorKind.PREFAULT

    def _parse(self, value, ctx):
        if value is MISSING:
            value = self._resolve_default()
        return self._inner._parse(value, ctx)


class CatchValidator(WrapperValidator):
    """Succeeds with a fallback value whenever the inner validator fails."""

    kind = ValidatorKind.CATCH

    def __init__(self, inner: Validator, value: Any):
        super().__init__(inner)
        self._set(_fallback=value)

    def _parse(self, value, ctx):
        result = self._inner._run(value, ctx)
        if result.success:
            return result
        return ParseResult.ok(copy.deepcopy(self._fallback))


class RefineValidator(WrapperValidator):
    kind = ValidatorKind.REFINE

    def __init__(self, inner: Validator, predicate: Callable[[Any], bool], message: Optional[str] = None):
        super().__init__(inner)
        self._set(_predicate=predicate, _message=message)

    def _parse(self, value, ctx):
        result = self._inner._parse(value, ctx)
        if not result.success:
            return result
        try:
            passed = bool(self._predicate(result.data))
        except Exception as e:
            logger.debug(f"Refinement predicate raised, treating as failure: {e}")
            passed = False
        if passed:
            return result
        return ParseResult.fail(
            [Issue(code=IssueCode.CUSTOM, message=self._message or ctx.render("refinement_failed"))]
        )


class RefinementContext:
    """Collects issues reported from a ``super_refine`` callback."""

    def __init__(self, ctx: ParseContext):
        self._ctx = ctx
        self.issues: List[Issue] = []

    def add_issue(
        self,
        message: Optional[str] = None,
        code: IssueCode = IssueCode.CUSTOM,
        path: Tuple[PathSegment, ...] = (),
    ) -> None:
        self.issues.append(
            Issue(
                code=IssueCode(code),
                message=message or self._ctx.render("refinement_failed"),
                path=tuple(path),
            )
        )


class SuperRefineValidator(WrapperValidator):
    kind = ValidatorKind.SUPER_REFINE

    def __init__(self, inner: Validator, fn: Callable[[Any, RefinementContext], None]):
        super().__init__(inner)
        self._set(_fn=fn)

    def _parse(self, value, ctx):
        result = self._inner._parse(value, ctx)
        if not result.success:
            return result
        refinement = RefinementContext(ctx)
        try:
            self._fn(result.data, refinement)
        except Exception as e:
            return callback_failure(ctx, e, "super_refine callback")
        if refinement.issues:
            return ParseResult.fail(refinement.issues)
        return result


class TransformValidator(WrapperValidator):
    kind = ValidatorKind.TRANSFORM

    def __init__(self, inner: Validator, fn: Callable[[Any], Any]):
        super().__init__(inner)
        self._set(_fn=fn)

    def _parse(self, value, ctx):
        result = self._inner._parse(value, ctx)
        if not result.success:
            return result
        try:
            return ParseResult.ok(self._fn(result.data))
        except Exception as e:
            logger.debug(f"Transform failed: {e}")
            return ParseResult.fail(
                [
                    Issue(
                        code=IssueCode.TRANSFORM_FAILED,
                        message=ctx.render("transform_failed", error=str(e)),
                    )
                ]
            )


class PipeValidator(Validator):
    """Feeds the output of one validator into another."""

    kind = ValidatorKind.PIPE

    def __init__(self, source: Validator, target: Validator):
        self._set(_source=source, _target=target)

    @property
    def source(self) -> Validator:
        return self._source

    @property
    def target(self) -> Validator:
        return self._target

    def _parse(self, value, ctx):
        result = self._source._parse(value, ctx)
        if not result.success:
            return result
        return self._target._parse(result.data, ctx)


class PreprocessValidator(Validator):
    """Maps the raw input through ``fn`` before validating it."""

    kind = ValidatorKind.PREPROCESS

    def __init__(self, fn: Callable[[Any], Any], inner: Validator):
        self._set(_fn=fn, _inner=inner)

    @property
    def inner(self) -> Validator:
        return self._inner

    def _parse(self, value, ctx):
        try:
            value = self._fn(value)
        except Exception as e:
            logger.debug(f"Preprocess failed: {e}")
            return ParseResult.fail(
                [
                    Issue(
                        code=IssueCode.TRANSFORM_FAILED,
                        message=ctx.render("transform_failed", error=str(e)),
                    )
                ]
            )
        return self._inner._parse(value, ctx)


# ----------------------------------------------------------------------
# Leaf validators
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class Check:
    """
    One predicate check of a leaf validator.

    Attributes:
        code: Issue code emitted on failure
        message_key: Catalog key for the default message
        predicate: Returns True when the value passes
        params: Values bound into the message template
        detail: Structured fields copied onto the issue
        message: User-supplied message overriding the catalog
    """

    code: IssueCode
    message_key: str
    predicate: Callable[[Any], bool]
    params: Mapping[str, Any] = field(default_factory=dict)
    detail: Mapping[str, Any] = field(default_factory=dict)
    message: Optional[str] = None

    def run(self, value: Any, ctx: ParseContext) -> Optional[Issue]:
        if self.predicate(value):
            return None
        message = self.message or ctx.render(self.message_key, **self.params)
        return Issue(code=self.code, message=message, **self.detail)


@dataclass(frozen=True)
class LeafConfig:
    """
    Immutable configuration record of a leaf validator.

    Attributes:
        checks: Ordered predicate checks (first failure wins)
        transforms: Ordered normalizers applied before checks
        message: User-supplied message for type mismatches
    """

    checks: Tuple[Check, ...] = ()
    transforms: Tuple[Callable[[Any], Any], ...] = ()
    message: Optional[str] = None


class LeafValidator(Validator):
    """
    Validator holding a check/transform pipeline for one primitive type.

    Subclasses implement ``_check_type`` and add chain methods built on
    ``_add_check``. Chain methods return a new instance of ``type(self)``, so
    coercing subclasses keep coercing after chaining.
    """

    expected: str = "unknown"

    def __init__(self, message: Optional[str] = None):
        self._set(_config=LeafConfig(message=message))

    @property
    def config(self) -> LeafConfig:
        return self._config

    @property
    def checks(self) -> Tuple[Check, ...]:
        return self._config.checks

    @classmethod
    def _from_config(cls, config: LeafConfig):
        validator = cls.__new__(cls)
        validator._set(_config=config)
        return validator

    def _derive(self: V, **changes: Any) -> V:
        return self._from_config(replace(self._config, **changes))

    def _add_check(
        self: V,
        code: IssueCode,
        message_key: str,
        predicate: Callable[[Any], bool],
        message: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
        **detail: Any,
    ) -> V:
        check = Check(
            code=code,
            message_key=message_key,
            predicate=predicate,
            params=params or {},
            detail=detail,
            message=message,
        )
        return self._derive(checks=self._config.checks + (check,))

    def _add_transform(self: V, fn: Callable[[Any], Any]) -> V:
        return self._derive(transforms=self._config.transforms + (fn,))

    def _check_type(self, value: Any, ctx: ParseContext) -> ParseResult:
        raise NotImplementedError

    def _type_error(self, value: Any, ctx: ParseContext) -> ParseResult:
        return invalid_type(ctx, self.expected, value, self._config.message)

    def _parse(self, value, ctx):
        result = self._check_type(value, ctx)
        if not result.success:
            return result
        value = result.data
        for fn in self._config.transforms:
            value = fn(value)
        return self._run_checks(value, ctx)

    def _run_checks(self, value: Any, ctx: ParseContext) -> ParseResult:
        for check in self._config.checks:
            issue = check.run(value, ctx)
            if issue is not None:
                return ParseResult.fail([issue])
        return ParseResult.ok(value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(checks={len(self._config.checks)})"


def wrap_issues(issues: List[Issue], segment: PathSegment, result: ParseResult) -> None:
    """Append ``result``'s issues to ``issues`` re-rooted under ``segment``."""
    issues.extend(issue.with_prefix(segment) for issue in result.issues)
