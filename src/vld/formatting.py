"""
Read-only renderings of a ValidationError.

- treeify_error: nested tree keyed by path
- flatten_error: form-style mapping of top-level field to messages
- prettify_error: multi-line human-readable report

Example:
    >>> print(prettify_error(err))
    ✖ Invalid UUID
      → at id
"""

from typing import Any, Dict, List, Sequence

from .errors import PathSegment, ValidationError


def _new_node() -> Dict[str, Any]:
    return {"errors": []}


def treeify_error(error: ValidationError) -> Dict[str, Any]:
    """
    Arrange issue messages into a tree mirroring the input's shape.

    Object keys nest under ``properties``; sequence indexes nest under
    ``items`` (a list padded with None up to the highest failing index).
    Issues with an empty path land in the root ``errors``.
    """
    tree = _new_node()

    for issue in error.issues:
        node = tree
        for segment in issue.path:
            if isinstance(segment, int):
                items = node.setdefault("items", [])
                while len(items) <= segment:
                    items.append(None)
                if items[segment] is None:
                    items[segment] = _new_node()
                node = items[segment]
            else:
                node = node.setdefault("properties", {}).setdefault(str(segment), _new_node())
        node["errors"].append(issue.message)

    return tree


def flatten_error(error: ValidationError) -> Dict[str, Any]:
    """Group messages by top-level field; root issues go to ``form_errors``."""
    form_errors: List[str] = []
    field_errors: Dict[str, List[str]] = {}

    for issue in error.issues:
        if not issue.path:
            form_errors.append(issue.message)
        else:
            field_errors.setdefault(str(issue.path[0]), []).append(issue.message)

    return {"form_errors": form_errors, "field_errors": field_errors}


def format_path(path: Sequence[PathSegment]) -> str:
    """Render a path as ``a.b[0].c``."""
    parts: List[str] = []
    for index, segment in enumerate(path):
        if isinstance(segment, int):
            parts.append(f"[{segment}]")
        elif index == 0:
            parts.append(str(segment))
        else:
            parts.append(f".{segment}")
    return "".join(parts)


def prettify_error(error: ValidationError) -> str:
    lines: List[str] = []
    for issue in error.issues:
        line = f"✖ {issue.message}"
        if issue.path:
            line += f"\n  → at {format_path(issue.path)}"
        lines.append(line)
    return "\n".join(lines)
