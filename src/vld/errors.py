"""
Validation Error Types for the VLD engine.

Provides structured error handling for validation failures:
- IssueCode: Closed set of stable issue codes
- Issue: Single validation failure with a path into the input
- ValidationError: Exception carrying one or more issues

Composite validators never replace a child's issue. They re-address it
with ``Issue.with_prefix`` so the path grows outward from the leaf that
produced it.
"""

from collections.abc import Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from .context import MISSING, Symbol

PathSegment = Union[str, int]


class IssueCode(str, Enum):
    """Stable issue codes emitted by validators."""

    INVALID_TYPE = "invalid_type"
    TOO_SMALL = "too_small"
    TOO_BIG = "too_big"
    INVALID_LENGTH = "invalid_length"
    INVALID_FORMAT = "invalid_format"
    NOT_INTEGER = "not_integer"
    NOT_FINITE = "not_finite"
    NOT_SAFE_INTEGER = "not_safe_integer"
    NOT_MULTIPLE_OF = "not_multiple_of"
    INVALID_DATE = "invalid_date"
    INVALID_DAY = "invalid_day"
    INVALID_LITERAL = "invalid_literal"
    INVALID_ENUM_VALUE = "invalid_enum_value"
    UNRECOGNIZED_KEYS = "unrecognized_keys"
    INVALID_UNION = "invalid_union"
    INVALID_UNION_DISCRIMINATOR = "invalid_union_discriminator"
    INVALID_INTERSECTION = "invalid_intersection"
    INVALID_TUPLE_LENGTH = "invalid_tuple_length"
    NOT_UNIQUE = "not_unique"
    COERCION_FAILED = "coercion_failed"
    TRANSFORM_FAILED = "transform_failed"
    CUSTOM = "custom"


class Issue(BaseModel):
    """
    A single validation failure.

    Attributes:
        code: Stable issue code
        path: Location inside the original input (keys and indexes)
        message: Rendered, human-readable message
        expected: Expected type/value description (optional)
        received: Description of what was received (optional)
        keys: Offending keys for unrecognized-key issues (optional)
        minimum: Lower bound that was violated (optional)
        maximum: Upper bound that was violated (optional)
        exact: Exact size that was required (optional)
        inclusive: Whether the violated bound is inclusive (optional)
        origin: Kind of value a bounds issue applies to (string, array, ...)
        format: Name of the failed format check (email, uuid, ...)
        union_errors: Issues of every failed union alternative (optional)
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    code: IssueCode
    path: Tuple[PathSegment, ...] = ()
    message: str
    expected: Optional[str] = None
    received: Optional[str] = None
    keys: Optional[Tuple[str, ...]] = None
    minimum: Optional[Any] = None
    maximum: Optional[Any] = None
    exact: Optional[int] = None
    inclusive: Optional[bool] = None
    origin: Optional[str] = None
    format: Optional[str] = None
    union_errors: Optional[Tuple[Tuple["Issue", ...], ...]] = Field(default=None, repr=False)

    def with_prefix(self, segment: PathSegment) -> "Issue":
        """Return a copy of this issue located one level deeper under ``segment``."""
        return self.model_copy(update={"path": (segment,) + self.path})

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        result = {
            "code": self.code.value,
            "path": list(self.path),
            "message": self.message,
        }
        for name in ("expected", "received", "minimum", "maximum", "exact", "inclusive", "origin", "format"):
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, (datetime, date)):
                value = value.isoformat()
            result[name] = value
        if self.keys is not None:
            result["keys"] = list(self.keys)
        if self.union_errors is not None:
            result["union_errors"] = [
                [issue.to_dict() for issue in alternative] for alternative in self.union_errors
            ]
        return result

    def __repr__(self) -> str:
        return f"Issue(code={self.code.value!r}, path={list(self.path)!r}, message={self.message!r})"


class ValidationError(Exception):
    """
    Exception raised when validation fails.

    Carries an ordered, non-empty sequence of issues. The exception
    message is the issue's message when there is exactly one, otherwise
    a count summary.

    Attributes:
        issues: Tuple of Issue instances
    """

    def __init__(self, issues: Iterable[Issue]):
        self.issues: Tuple[Issue, ...] = tuple(issues)
        if not self.issues:
            raise ValueError("ValidationError requires at least one issue")
        if len(self.issues) == 1:
            message = self.issues[0].message
        else:
            message = f"{len(self.issues)} validation errors"
        super().__init__(message)

    @property
    def message(self) -> str:
        return str(self)

    @property
    def first_error(self) -> Issue:
        return self.issues[0]

    @property
    def formatted_errors(self) -> List[str]:
        return [issue.message for issue in self.issues]

    def to_dict(self) -> dict:
        """
        Convert to HTTP 422 response format.

        Returns:
            Dict with:
                - success: False
                - errors: List of issue dicts
        """
        return {
            "success": False,
            "errors": [issue.to_dict() for issue in self.issues],
        }

    def __repr__(self) -> str:
        return f"ValidationError({len(self.issues)} issues)"


def get_value_type(value: Any) -> str:
    """Describe the dynamic kind of ``value`` for error messages."""
    if value is MISSING:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, float) and value != value:
        return "nan"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, datetime):
        return "date"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (set, frozenset)):
        return "set"
    if isinstance(value, Symbol):
        return "symbol"
    if isinstance(value, (bytes, bytearray)):
        return "bytes"
    return type(value).__name__


Issue.model_rebuild()
