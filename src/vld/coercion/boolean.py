"""Coercion to boolean."""

from ..result import ParseResult
from ..validators.boolean import BooleanValidator
from .common import coercion_failure

TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})
FALSE_STRINGS = frozenset({"false", "0", "no", "off"})


class CoerceBooleanValidator(BooleanValidator):
    """
    Boolean validator that first converts strings and the numbers 0 and 1.

    Strings are matched case-insensitively after trimming; anything
    outside the known spellings fails rather than falling back to
    truthiness.
    """

    coerces = True

    def _check_type(self, value, ctx):
        if isinstance(value, bool):
            return ParseResult.ok(value)
        if isinstance(value, str):
            text = value.strip().lower()
            if text in TRUE_STRINGS:
                return ParseResult.ok(True)
            if text in FALSE_STRINGS:
                return ParseResult.ok(False)
        elif isinstance(value, (int, float)):
            if value == 1:
                return ParseResult.ok(True)
            if value == 0:
                return ParseResult.ok(False)
        return coercion_failure(ctx, value, "boolean", self._config.message)
