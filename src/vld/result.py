"""
Parse result type for VLD.

A validation call produces exactly one ``ParseResult``: either a success
carrying the output value or a failure carrying a ``ValidationError``.
"""

from dataclasses import dataclass
from typing import Any, Generic, Iterable, Optional, Tuple, TypeVar

from .errors import Issue, ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    """
    Outcome of ``safe_parse``.

    Attributes:
        success: True when the value conformed
        data: Output value on success (None on failure)
        error: ValidationError on failure (None on success)
    """

    success: bool
    data: Optional[T] = None
    error: Optional[ValidationError] = None

    @classmethod
    def ok(cls, data: Any) -> "ParseResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, issues: Iterable[Issue]) -> "ParseResult":
        return cls(success=False, error=ValidationError(issues))

    @property
    def issues(self) -> Tuple[Issue, ...]:
        if self.error is None:
            return ()
        return self.error.issues

    def prefixed(self, segment) -> "ParseResult":
        """Return this result with every issue path re-rooted under ``segment``."""
        if self.success:
            return self
        return ParseResult.fail(issue.with_prefix(segment) for issue in self.issues)

    def unwrap(self) -> T:
        """Return the data, raising the error on failure."""
        if not self.success:
            raise self.error
        return self.data

    def __bool__(self) -> bool:
        return self.success

    def __repr__(self) -> str:
        if self.success:
            return f"ParseResult(success=True, data={self.data!r})"
        return f"ParseResult(success=False, error={self.error!r})"
