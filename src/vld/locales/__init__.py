"""
Message catalogs for VLD.

Each supported locale ships a YAML table mapping message keys to Jinja2
templates. English is the complete reference table; other locales may
be partial and fall back to English key by key.

Example:
    >>> messages = get_messages("de")
    >>> messages.render("string_min", minimum=3)
    'Zeichenkette muss mindestens 3 Zeichen lang sein'
"""

import logging
from functools import lru_cache
from importlib import resources
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

import yaml
from jinja2 import Environment, StrictUndefined, Template

logger = logging.getLogger(__name__)

FALLBACK_LOCALE = "en"

_env = Environment(undefined=StrictUndefined, autoescape=False)


class UnsupportedLocaleError(ValueError):
    """Raised when a message catalog is requested for an unknown locale."""

    def __init__(self, locale: str):
        self.locale = locale
        super().__init__(
            f"Unsupported locale '{locale}'. Available: {', '.join(available_locales())}"
        )


class MessageCatalog:
    """
    Compiled message templates for one locale.

    Templates are compiled once when the catalog is built. Keys missing
    from this locale are looked up in the fallback catalog.
    """

    def __init__(
        self,
        locale: str,
        templates: Mapping[str, Template],
        fallback: Optional["MessageCatalog"] = None,
    ):
        self.locale = locale
        self._templates = MappingProxyType(dict(templates))
        self._fallback = fallback

    def __contains__(self, key: str) -> bool:
        return key in self._templates or (self._fallback is not None and key in self._fallback)

    def keys(self) -> List[str]:
        own = set(self._templates)
        if self._fallback is not None:
            own.update(self._fallback.keys())
        return sorted(own)

    def render(self, key: str, **params: Any) -> str:
        """
        Render the message ``key`` with the given parameters.

        Raises:
            KeyError: If no catalog in the chain defines ``key``
        """
        template = self._templates.get(key)
        if template is None:
            if self._fallback is None:
                raise KeyError(f"Unknown message key '{key}'")
            return self._fallback.render(key, **params)
        return template.render(**params)

    def __repr__(self) -> str:
        return f"MessageCatalog(locale={self.locale!r}, keys={len(self._templates)})"


def available_locales() -> List[str]:
    """Return the locale codes that ship a message table."""
    return sorted(
        entry.name[: -len(".yaml")]
        for entry in resources.files(__name__).iterdir()
        if entry.name.endswith(".yaml")
    )


def _load_table(locale: str) -> Dict[str, str]:
    resource = resources.files(__name__).joinpath(f"{locale}.yaml")
    if not resource.is_file():
        raise UnsupportedLocaleError(locale)
    data = yaml.safe_load(resource.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Message table for '{locale}' must be a mapping")
    return {str(key): str(value) for key, value in data.items()}


@lru_cache(maxsize=None)
def _load_catalog(locale: str) -> MessageCatalog:
    if not isinstance(locale, str) or not locale.isidentifier():
        raise UnsupportedLocaleError(str(locale))

    table = _load_table(locale)
    templates = {key: _env.from_string(text) for key, text in table.items()}
    fallback = None if locale == FALLBACK_LOCALE else _load_catalog(FALLBACK_LOCALE)
    logger.debug(f"Loaded {len(templates)} messages for locale '{locale}'")
    return MessageCatalog(locale, templates, fallback)


def get_messages(locale: Optional[str] = None) -> MessageCatalog:
    """
    Return the catalog for ``locale``.

    With no locale, the one set by ``use_locale`` is used, then
    ``VldSettings.default_locale``.

    Raises:
        UnsupportedLocaleError: If no message table exists for ``locale``
    """
    if locale is None:
        from ..context import get_active_locale
        from ..settings import get_settings

        locale = get_active_locale() or get_settings().default_locale
    return _load_catalog(locale)


__all__ = [
    "FALLBACK_LOCALE",
    "MessageCatalog",
    "UnsupportedLocaleError",
    "available_locales",
    "get_messages",
]
