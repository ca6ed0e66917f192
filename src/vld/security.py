"""
Dangerous-key screening for dynamic input keys.

Every code path that copies, looks up or validates attacker-controlled
key names (object passthrough and catchall, record entries, intersection
merge) goes through ``is_dangerous_key`` before touching the key.

The deny-list covers the JavaScript prototype-chain names the wire data
is often destined for, plus Python's attribute-hijacking dunders, in both
direct and dotted/chained form.
"""

import logging
from typing import Any, FrozenSet

from .settings import get_settings

logger = logging.getLogger(__name__)

DIRECT_DANGEROUS_KEYS: FrozenSet[str] = frozenset(
    {
        "__proto__",
        "constructor",
        "prototype",
        "__class__",
        "__dict__",
        "__globals__",
        "__builtins__",
        "__mro__",
        "__bases__",
        "__subclasses__",
        "__init__",
        "__getattribute__",
        "__setattr__",
        "__reduce__",
        "__reduce_ex__",
    }
)

NESTED_DANGEROUS_PATTERNS: FrozenSet[str] = frozenset(
    {
        "constructor.prototype",
        "__proto__.toString",
        "prototype.constructor",
        "__defineGetter__",
        "__defineSetter__",
        "__lookupGetter__",
        "__lookupSetter__",
        "__class__.__init__",
        "__init__.__globals__",
    }
)

SHADOWING_KEYS: FrozenSet[str] = frozenset(
    {
        "hasOwnProperty",
        "toString",
        "valueOf",
        "isPrototypeOf",
        "propertyIsEnumerable",
    }
)

_CHAINS = tuple(f"{key}." for key in sorted(DIRECT_DANGEROUS_KEYS))


def is_dangerous_key(key: Any) -> bool:
    """
    Return True if ``key`` could redirect into a prototype chain or
    hijack Python attribute lookup.

    Non-string keys are never dangerous.

    Examples:
        >>> is_dangerous_key("__proto__")
        True
        >>> is_dangerous_key("constructor.prototype.polluted")
        True
        >>> is_dangerous_key("name")
        False
    """
    if not isinstance(key, str):
        return False
    if key in DIRECT_DANGEROUS_KEYS:
        return True
    if any(pattern in key for pattern in NESTED_DANGEROUS_PATTERNS):
        return True
    if any(chain in key for chain in _CHAINS):
        return True
    if key in SHADOWING_KEYS or any(f".{name}" in key for name in SHADOWING_KEYS):
        return True
    return False


def report_dropped_key(key: str, where: str) -> None:
    """Log that ``key`` was dropped from input, if enabled in settings."""
    if get_settings().warn_on_dangerous_keys:
        logger.warning(f"Dropped dangerous key {key!r} from {where} input")
