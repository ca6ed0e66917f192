"""Coercion to date."""

from ..result import ParseResult
from ..validators.date import DateValidator, to_datetime
from .common import coercion_failure, is_absent


class CoerceDateValidator(DateValidator):
    """Date validator that reports unconvertible input as a coercion failure."""

    coerces = True

    def _check_type(self, value, ctx):
        parsed = None if is_absent(value) else to_datetime(value)
        if parsed is None:
            return coercion_failure(ctx, value, "date", self._config.message)
        return ParseResult.ok(parsed)
