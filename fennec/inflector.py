"""
Property name normalization for fennec.

API payloads usually use camelCase or kebab-case property names. Models
expose those names as-is and also under a normalized snake_case form, so
``book.bookTitle`` and ``book.book_title`` return the same value.

Example:
    from fennec import Inflector

    inflector = Inflector(exceptions={"isbn13": "isbn_13"})
    inflector.normalize("bookTitle")   # 'book_title'
    inflector.normalize("HTTPStatus")  # 'http_status'
    inflector.normalize("isbn13")      # 'isbn_13'
"""

import re
from types import MappingProxyType
from typing import Mapping, Optional, Protocol, runtime_checkable


_ACRONYM_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_RE = re.compile(r"([a-z\d])([A-Z])")
_SEPARATOR_RE = re.compile(r"[-\s]+")


@runtime_checkable
class NormalizingInflector(Protocol):
    """Anything that can turn a property name into its alternate lookup form."""

    def normalize(self, name: str) -> str:
        ...


class Inflector:
    """Converts property names to snake_case.

    Names listed in ``exceptions`` are mapped verbatim instead of going
    through the rule. The exceptions table is copied on construction and
    never changes afterwards.
    """

    __slots__ = ('_exceptions',)

    def __init__(self, exceptions: Optional[Mapping[str, str]] = None) -> None:
        self._exceptions = MappingProxyType(dict(exceptions or {}))

    @property
    def exceptions(self) -> Mapping[str, str]:
        return self._exceptions

    def normalize(self, name: str) -> str:
        name = str(name)
        exception = self._exceptions.get(name)
        if exception is not None:
            return exception
        name = _ACRONYM_RE.sub(r"\1_\2", name)
        name = _WORD_RE.sub(r"\1_\2", name)
        return _SEPARATOR_RE.sub("_", name).lower()

    snake_case = normalize

    def __repr__(self) -> str:
        return f"Inflector(exceptions={dict(self._exceptions)!r})"


__all__ = ["Inflector", "NormalizingInflector"]
