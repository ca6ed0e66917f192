"""
Deep merge for intersection results.

Merge rules:
- Dicts are recursively merged
- Lists are replaced, not concatenated
- Scalars use last-wins (overlay overrides base)
- Dangerous keys from either side are never copied

Example:
    >>> base = {"a": 1, "b": {"x": 10, "y": 20}}
    >>> overlay = {"b": {"y": 30, "z": 40}, "c": 3}
    >>> deep_merge(base, overlay)
    {'a': 1, 'b': {'x': 10, 'y': 30, 'z': 40}, 'c': 3}
"""

import copy
from typing import Any, Dict, Mapping

from .security import is_dangerous_key, report_dropped_key


def _copy_value(value: Any) -> Any:
    if isinstance(value, (dict, list)):
        return copy.deepcopy(value)
    return value


def deep_merge(base: Mapping[Any, Any], overlay: Mapping[Any, Any]) -> Dict[Any, Any]:
    """
    Deep merge two dicts, ``overlay`` winning on key collisions.

    Neither argument is modified; the result is a new dict.

    Examples:
        >>> deep_merge({"items": [1, 2, 3]}, {"items": [4, 5]})
        {'items': [4, 5]}
        >>> deep_merge({"enabled": True}, {"enabled": None})
        {'enabled': None}
    """
    result: Dict[Any, Any] = {}

    for key, value in base.items():
        if is_dangerous_key(key):
            report_dropped_key(key, "intersection")
            continue
        result[key] = _copy_value(value)

    for key, overlay_value in overlay.items():
        if is_dangerous_key(key):
            report_dropped_key(key, "intersection")
            continue
        base_value = result.get(key)
        if isinstance(base_value, dict) and isinstance(overlay_value, dict):
            result[key] = deep_merge(base_value, overlay_value)
        else:
            # Lists, scalars, or type mismatch: overlay wins
            result[key] = _copy_value(overlay_value)

    return result
