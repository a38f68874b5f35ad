"""
Error types for fennec.

All errors derive from FennecError and also from the builtin exception
that Python code would expect in the same situation, so callers can keep
using ``hasattr``, ``getattr(obj, name, default)`` and ``except TypeError``.

Example:
    from fennec import Model, AttributeNotFoundError

    book = Model({"title": "Dune"})
    try:
        book.author
    except AttributeNotFoundError as e:
        print(e.attribute)  # 'author'
"""

from typing import Any


class FennecError(Exception):
    """Base class for every error raised by fennec."""


class InvalidInputError(FennecError, TypeError):
    """Raised when a model is constructed from something that is not a
    mapping or an iterable of key/value pairs."""

    def __init__(self, value: Any) -> None:
        self.value_repr = repr(value)
        super().__init__(
            "Models must be initialized with a mapping or an iterable of "
            f"key/value pairs, got: {self.value_repr}"
        )


class AttributeNotFoundError(FennecError, AttributeError):
    """Raised when neither the exact nor the normalized name resolves."""

    def __init__(self, model_repr: str, attribute: str) -> None:
        self.model_repr = model_repr
        self.attribute = attribute
        super().__init__(f"undefined attribute '{attribute}' for {model_repr}")


class ReadOnlyModelError(FennecError, AttributeError):
    """Raised on any attempt to assign or delete a model attribute."""

    def __init__(self, model_repr: str, attribute: str) -> None:
        self.model_repr = model_repr
        self.attribute = attribute
        super().__init__(f"{model_repr} is read-only, cannot modify '{attribute}'")


class SchemaError(FennecError, ValueError):
    """Raised when a schema node is not a JSON object."""


__all__ = [
    "FennecError",
    "InvalidInputError",
    "AttributeNotFoundError",
    "ReadOnlyModelError",
    "SchemaError",
]
