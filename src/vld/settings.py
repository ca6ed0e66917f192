"""
Engine settings for VLD.

Pydantic model for the process-level defaults consulted when a
validation call does not say otherwise.

Precedence (highest to lowest):
1. Explicit call arguments (``safe_parse(value, locale="de")``)
2. Environment variables
3. Defaults

Environment variables:
    VLD_LOCALE: default message locale (e.g. "en", "de")
    VLD_COLLECT_ALL_ISSUES: "true"/"false", accumulate issues in safe_parse
    VLD_WARN_ON_DANGEROUS_KEYS: "true"/"false", log dropped dangerous keys
"""

import os
from functools import lru_cache
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

ENV_MAPPING = {
    "VLD_LOCALE": "default_locale",
    "VLD_COLLECT_ALL_ISSUES": "collect_all_issues",
    "VLD_WARN_ON_DANGEROUS_KEYS": "warn_on_dangerous_keys",
}


class VldSettings(BaseModel):
    """
    Process-level validation defaults.

    Attributes:
        default_locale: Locale used to render messages when none is given
        collect_all_issues: Whether safe_parse accumulates every issue
            (parse is always fail-fast)
        warn_on_dangerous_keys: Whether dropped dangerous keys are logged
    """

    default_locale: str = Field(
        default="en",
        min_length=2,
        description="Locale used to render messages when none is given",
    )
    collect_all_issues: bool = Field(
        default=True,
        description="Accumulate all field/element issues in safe_parse",
    )
    warn_on_dangerous_keys: bool = Field(
        default=True,
        description="Log a warning when a dangerous key is dropped from input",
    )

    @field_validator("collect_all_issues", "warn_on_dangerous_keys", mode="before")
    @classmethod
    def parse_flag(cls, v: Any) -> Any:
        """Accept the usual textual spellings of booleans from the environment."""
        if isinstance(v, str):
            lowered = v.strip().lower()
            if lowered in _TRUE_VALUES:
                return True
            if lowered in _FALSE_VALUES:
                return False
        return v


def load_settings(
    overrides: Optional[Dict[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> VldSettings:
    """
    Resolve settings from defaults, environment and explicit overrides.

    Args:
        overrides: Explicit values (highest priority). None entries are ignored.
        environ: Environment mapping, defaults to ``os.environ``

    Returns:
        Resolved VldSettings instance
    """
    environ = os.environ if environ is None else environ
    config: Dict[str, Any] = {}

    for env_var, key in ENV_MAPPING.items():
        env_value = environ.get(env_var)
        if env_value:
            config[key] = env_value

    if overrides:
        for key, value in overrides.items():
            if value is not None:
                config[key] = value

    return VldSettings(**config)


@lru_cache(maxsize=1)
def get_settings() -> VldSettings:
    """Return the cached process settings (defaults + environment)."""
    return load_settings()


def reset_settings() -> None:
    """Drop the cached settings so the environment is read again."""
    get_settings.cache_clear()
