"""
Parse context for VLD validators.

Holds the pieces of state a single validation call threads through the
validator tree: the message catalog for the active locale and the
issue-accumulation policy. Also defines the two host values with no
native Python counterpart: the ``MISSING`` sentinel for an absent value
and the ``Symbol`` token type.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional

if TYPE_CHECKING:
    from .locales import MessageCatalog


class _Missing:
    """Type of the ``MISSING`` sentinel (an absent value, not null)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "<MISSING>"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (_Missing, ())


MISSING = _Missing()


class Symbol:
    """
    Unique token compared by identity.

    Example:
        >>> Symbol("id") == Symbol("id")
        False
    """

    __slots__ = ("description",)

    def __init__(self, description: Optional[str] = None):
        self.description = description

    def __repr__(self) -> str:
        if self.description is None:
            return "Symbol()"
        return f"Symbol({self.description!r})"


_active_locale: ContextVar[Optional[str]] = ContextVar("vld_active_locale", default=None)


@contextmanager
def use_locale(locale: str) -> Iterator[str]:
    """
    Temporarily set the locale used when a call does not pass one.

    The locale is checked eagerly, so an unknown code fails here rather
    than on the first rendered message.

    Example:
        >>> with use_locale("de"):
        ...     schema.safe_parse(value)
    """
    from .locales import get_messages

    get_messages(locale)
    token = _active_locale.set(locale)
    try:
        yield locale
    finally:
        _active_locale.reset(token)


def get_active_locale() -> Optional[str]:
    """Return the locale set by ``use_locale``, if any."""
    return _active_locale.get()


@dataclass(frozen=True)
class ParseContext:
    """
    Per-call validation state.

    Attributes:
        messages: Message catalog used to render issue text
        collect_all: Whether composites keep validating after a failure
    """

    messages: "MessageCatalog"
    collect_all: bool = True

    @property
    def locale(self) -> str:
        return self.messages.locale

    def render(self, key: str, **params) -> str:
        return self.messages.render(key, **params)

    @classmethod
    def create(cls, locale: Optional[str] = None, collect_all: Optional[bool] = None) -> "ParseContext":
        """
        Build a context from call arguments, the active locale and settings.

        Precedence for the locale: explicit argument, ``use_locale``,
        ``VldSettings.default_locale``.
        """
        from .locales import get_messages
        from .settings import get_settings

        if collect_all is None:
            collect_all = get_settings().collect_all_issues
        return cls(messages=get_messages(locale), collect_all=collect_all)
