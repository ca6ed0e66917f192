"""Shared helpers for coercing validators."""

from typing import Any

from ..context import MISSING
from ..errors import Issue, IssueCode, get_value_type
from ..result import ParseResult
from ..validators.special import describe


def is_absent(value: Any) -> bool:
    """Null and missing values are never coerced."""
    return value is None or value is MISSING


def coercion_failure(ctx, value: Any, target: str, message=None) -> ParseResult:
    received = get_value_type(value)
    return ParseResult.fail(
        [
            Issue(
                code=IssueCode.COERCION_FAILED,
                message=message or ctx.render("coercion_failed", value=describe(value), target=target),
                expected=target,
                received=received,
            )
        ]
    )
