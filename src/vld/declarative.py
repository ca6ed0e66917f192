"""
Declarative schemas built from plain dicts (usually loaded from YAML).

Example YAML:
    query:
      type: str
      required: true
      min_length: 1
      max_length: 1000
    options:
      type: dict
      strict: true
      properties:
        temperature:
          type: float
          default: 0.7
          min: 0.0
          max: 2.0

Fields are optional unless ``required: true`` or a ``default`` is given.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .builders import any_, array, boolean, date, enum_, number, object_, string
from .validators import ObjectValidator, Validator

TYPE_ALIASES = {
    "str": "str",
    "string": "str",
    "int": "int",
    "integer": "int",
    "float": "float",
    "number": "float",
    "bool": "bool",
    "boolean": "bool",
    "list": "list",
    "array": "list",
    "dict": "dict",
    "object": "dict",
    "date": "date",
    "any": "any",
}

_NOT_SET = object()


class FieldSpec:
    """
    Declarative definition of a single field.

    Attributes:
        type: Field type (str, int, float, bool, list, dict, date, any)
        required: Whether the field must be present
        default: Value used when the field is absent
        min_length: Minimum length (str and list)
        max_length: Maximum length (str and list)
        pattern: Regex the value must match (str only)
        min: Minimum value (int/float only)
        max: Maximum value (int/float only)
        choices: Allowed values (strings or numbers)
        properties: Nested field specs (dict only)
        items: Spec for list elements (list only)
        strict: Reject keys not listed in properties (dict only)
    """

    def __init__(
        self,
        type: str,
        required: bool = False,
        default: Any = _NOT_SET,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None,
        pattern: Optional[str] = None,
        min: Optional[Union[int, float]] = None,
        max: Optional[Union[int, float]] = None,
        choices: Optional[List[Any]] = None,
        properties: Optional[Dict[str, Any]] = None,
        items: Optional[Any] = None,
        strict: bool = False,
    ):
        if type not in TYPE_ALIASES:
            raise ValueError(
                f"Invalid type '{type}'. Must be one of: {', '.join(sorted(TYPE_ALIASES))}"
            )

        self.type = TYPE_ALIASES[type]
        self.required = required
        self.default = default
        self.min_length = min_length
        self.max_length = max_length
        self.pattern = pattern
        self.min = min
        self.max = max
        self.choices = choices
        self.strict = strict

        self.properties: Optional[Dict[str, "FieldSpec"]] = None
        if properties is not None:
            self.properties = {name: _to_spec(name, config) for name, config in properties.items()}

        self.items: Optional["FieldSpec"] = None
        if items is not None:
            self.items = _to_spec("items", items)

    def _base(self) -> Validator:
        if self.type == "str":
            validator = string()
            if self.min_length is not None:
                validator = validator.min(self.min_length)
            if self.max_length is not None:
                validator = validator.max(self.max_length)
            if self.pattern is not None:
                validator = validator.regex(self.pattern)
            return validator

        if self.type in ("int", "float"):
            validator = number().int() if self.type == "int" else number()
            if self.min is not None:
                validator = validator.min(self.min)
            if self.max is not None:
                validator = validator.max(self.max)
            return validator

        if self.type == "list":
            validator = array(self.items.to_validator() if self.items else any_())
            if self.min_length is not None:
                validator = validator.min(self.min_length)
            if self.max_length is not None:
                validator = validator.max(self.max_length)
            return validator

        if self.type == "dict":
            if self.properties is None:
                return object_().passthrough()
            validator = object_({name: spec.to_validator() for name, spec in self.properties.items()})
            return validator.strict() if self.strict else validator

        if self.type == "bool":
            return boolean()
        if self.type == "date":
            return date()
        return any_()

    def to_validator(self) -> Validator:
        """Build the validator for this field, including presence handling."""
        validator = self._base()
        if self.choices is not None:
            validator = validator.pipe(enum_(self.choices))
        if self.default is not _NOT_SET:
            return validator.default(self.default)
        if not self.required:
            return validator.optional()
        return validator

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        result: Dict[str, Any] = {"type": self.type}
        if self.required:
            result["required"] = True
        if self.default is not _NOT_SET:
            result["default"] = self.default
        for name in ("min_length", "max_length", "pattern", "min", "max", "choices"):
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        if self.strict:
            result["strict"] = True
        if self.properties is not None:
            result["properties"] = {name: spec.to_dict() for name, spec in self.properties.items()}
        if self.items is not None:
            result["items"] = self.items.to_dict()
        return result

    def __repr__(self) -> str:
        attrs = [f"type={self.type!r}"]
        if self.required:
            attrs.append("required=True")
        if self.default is not _NOT_SET:
            attrs.append(f"default={self.default!r}")
        return f"FieldSpec({', '.join(attrs)})"


def _to_spec(name: str, config: Any) -> FieldSpec:
    if isinstance(config, FieldSpec):
        return config
    if isinstance(config, dict):
        return FieldSpec(**config)
    raise ValueError(f"Invalid schema config for '{name}': must be dict or FieldSpec")


def schema_from_dict(config: Dict[str, Any], strict: bool = False) -> ObjectValidator:
    """
    Build an object validator from a field map.

    Args:
        config: Mapping of field name to field config
        strict: Reject keys that are not declared

    Returns:
        ObjectValidator for the declared fields

    Example:
        >>> schema = schema_from_dict({
        ...     "query": {"type": "str", "required": True},
        ...     "limit": {"type": "int", "default": 10},
        ... })
        >>> schema.parse({"query": "hi"})
        {'query': 'hi', 'limit': 10}
    """
    if not isinstance(config, dict):
        raise ValueError("Schema config must be a mapping of field names to field configs")
    validator = object_({name: _to_spec(name, field).to_validator() for name, field in config.items()})
    return validator.strict() if strict else validator


def load_schema_file(path: Union[str, Path]) -> ObjectValidator:
    """
    Load a declarative schema from a YAML file.

    The file holds either a plain field map, or ``fields`` plus an
    optional top-level ``strict`` flag.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if isinstance(data, dict) and isinstance(data.get("fields"), dict):
        return schema_from_dict(data["fields"], strict=bool(data.get("strict", False)))
    return schema_from_dict(data)
