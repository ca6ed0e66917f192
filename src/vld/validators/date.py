"""
Date validator.

Accepted inputs (the date parse rule):
- ``datetime``: passes (naive values are taken as UTC)
- ``date``: midnight UTC of that day
- ``str``: ISO 8601 via ``datetime.fromisoformat`` (a trailing ``Z`` means UTC)
- ``int``/``float``: POSIX timestamp in seconds, UTC

Anything else, or a string/number that cannot be parsed, fails with an
``invalid_date`` issue.

Time-relative checks (``past``, ``future``, ``today``) capture the
reference instant when the check is added, so a given validator answers
the same way on every call.
"""

import math
from datetime import date, datetime, timezone
from typing import Any, Optional

from ..errors import Issue, IssueCode
from ..result import ParseResult
from .base import LeafValidator, ValidatorKind


def to_datetime(value: Any) -> Optional[datetime]:
    """Apply the date parse rule, returning None when it does not apply."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _require_datetime(value: Any, what: str) -> datetime:
    parsed = to_datetime(value)
    if parsed is None:
        raise ValueError(f"Invalid {what} date: {value!r}")
    return parsed


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DateValidator(LeafValidator):
    """Validates dates, producing timezone-aware ``datetime`` values."""

    kind = ValidatorKind.DATE
    expected = "date"

    def _check_type(self, value, ctx):
        parsed = to_datetime(value)
        if parsed is not None:
            return ParseResult.ok(parsed)
        return ParseResult.fail(
            [
                Issue(
                    code=IssueCode.INVALID_DATE,
                    message=self._config.message or ctx.render("invalid_date"),
                    expected="date",
                    received=str(value) if isinstance(value, str) else None,
                )
            ]
        )

    def min(self, minimum: Any, message: Optional[str] = None) -> "DateValidator":
        bound = _require_datetime(minimum, "minimum")
        return self._add_check(
            IssueCode.TOO_SMALL, "date_min", lambda v: v >= bound, message,
            {"minimum": bound}, minimum=bound, inclusive=True, origin="date",
        )

    def max(self, maximum: Any, message: Optional[str] = None) -> "DateValidator":
        bound = _require_datetime(maximum, "maximum")
        return self._add_check(
            IssueCode.TOO_BIG, "date_max", lambda v: v <= bound, message,
            {"maximum": bound}, maximum=bound, inclusive=True, origin="date",
        )

    def between(self, minimum: Any, maximum: Any, message: Optional[str] = None) -> "DateValidator":
        low = _require_datetime(minimum, "minimum")
        high = _require_datetime(maximum, "maximum")
        if low > high:
            raise ValueError("between() minimum must not be after maximum")
        params = {"minimum": low, "maximum": high}
        return self._add_check(
            IssueCode.TOO_SMALL, "date_between", lambda v: v >= low, message,
            params, minimum=low, inclusive=True, origin="date",
        )._add_check(
            IssueCode.TOO_BIG, "date_between", lambda v: v <= high, message,
            params, maximum=high, inclusive=True, origin="date",
        )

    def past(self, message: Optional[str] = None, now: Optional[Any] = None) -> "DateValidator":
        """Require dates strictly before the instant this check is added (or ``now``)."""
        reference = _utcnow() if now is None else _require_datetime(now, "reference")
        return self._add_check(
            IssueCode.TOO_BIG, "date_past", lambda v: v < reference, message,
            maximum=reference, inclusive=False, origin="date",
        )

    def future(self, message: Optional[str] = None, now: Optional[Any] = None) -> "DateValidator":
        """Require dates strictly after the instant this check is added (or ``now``)."""
        reference = _utcnow() if now is None else _require_datetime(now, "reference")
        return self._add_check(
            IssueCode.TOO_SMALL, "date_future", lambda v: v > reference, message,
            minimum=reference, inclusive=False, origin="date",
        )

    def today(self, message: Optional[str] = None, now: Optional[Any] = None) -> "DateValidator":
        """Require dates on the UTC calendar day this check is added (or of ``now``)."""
        reference = (_utcnow() if now is None else _require_datetime(now, "reference")).date()
        return self._add_check(
            IssueCode.INVALID_DAY,
            "date_today",
            lambda v: v.astimezone(timezone.utc).date() == reference,
            message,
        )

    def weekday(self, message: Optional[str] = None) -> "DateValidator":
        return self._add_check(
            IssueCode.INVALID_DAY, "date_weekday", lambda v: v.astimezone(timezone.utc).weekday() < 5, message
        )

    def weekend(self, message: Optional[str] = None) -> "DateValidator":
        return self._add_check(
            IssueCode.INVALID_DAY, "date_weekend", lambda v: v.astimezone(timezone.utc).weekday() >= 5, message
        )
