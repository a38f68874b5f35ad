"""
Model implementation for fennec - schema-aware, read-only API objects.

A Model wraps one parsed JSON object. Every property is readable as an
attribute, under its wire name and under its normalized (snake_case)
name. When the model class is bound to a Schema, nested objects and
arrays of objects are cast into nested models once, at construction.

The class namespace deliberately holds nothing but dunder methods, so a
payload may contain properties called ``schema``, ``items``, ``keys`` or
``get`` and they still resolve as data. Helpers that need to look inside
a model (``probe``, ``try_attribute``, ``model_dump``) are module-level
functions. Shape-level settings live on the metaclass and are only
reachable through the class: ``Book.schema``, never ``book.schema``.

Example:
    from fennec import Model, Schema, probe, try_attribute

    class Book(Model):
        pass

    Book.schema = Schema({"properties": {"author": {"type": "object"}}})

    book = Book({"bookTitle": "Dune", "author": {"name": "Frank Herbert"}})
    book.bookTitle          # 'Dune'
    book.book_title         # 'Dune'
    book.author.name        # 'Frank Herbert'
    book["book_title"]      # None, bracket access only takes wire names
    try_attribute(book, "isbn")  # None
"""

import threading
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from .config import ModelConfig, get_config_value
from .errors import AttributeNotFoundError, InvalidInputError, ReadOnlyModelError
from .inflector import Inflector, NormalizingInflector
from .log import get_logger
from .schema import Schema

logger = get_logger(__name__)

_MISSING = object()  # Sentinel for unresolved attributes

# Guards creation of the per-shape default inflector
_INFLECTOR_LOCK = threading.Lock()


class _ModelMeta(type):
    """Metaclass for Model that keeps shape-level settings off the instances."""

    def __new__(mcs, name: str, bases: tuple, namespace: dict, **kwargs: Any) -> type:
        model_config: Optional[ModelConfig] = namespace.pop('model_config', None)
        cls = super().__new__(mcs, name, bases, namespace, **kwargs)

        if name == 'Model' and not bases:
            cls.__fennec_schema__ = None
            cls.__fennec_inflector__ = None
            return cls

        # An explicit config binds the shape, None included; without one the
        # settings are inherited from the parent class.
        if model_config is not None:
            cls.__fennec_schema__ = get_config_value(model_config, 'schema')
            cls.__fennec_inflector__ = get_config_value(model_config, 'inflector')
        return cls

    @property
    def schema(cls) -> Optional[Schema]:
        """Schema used to cast properties of this shape, or None."""
        return cls.__fennec_schema__

    @schema.setter
    def schema(cls, schema: Optional[Schema]) -> None:
        cls.__fennec_schema__ = schema

    @property
    def inflector(cls) -> NormalizingInflector:
        """Inflector for this shape.

        An inflector set on the class or a parent class wins. Otherwise each
        shape gets its own standard Inflector, created once on first use.
        """
        inflector = cls.__fennec_inflector__
        if inflector is not None:
            return inflector
        default = cls.__dict__.get('__fennec_default_inflector__')
        if default is None:
            with _INFLECTOR_LOCK:
                default = cls.__dict__.get('__fennec_default_inflector__')
                if default is None:
                    default = Inflector()
                    cls.__fennec_default_inflector__ = default
        return default

    @inflector.setter
    def inflector(cls, inflector: Optional[NormalizingInflector]) -> None:
        cls.__fennec_inflector__ = inflector


def is_mapping(value: Any) -> bool:
    """True for mappings and for anything else that offers an ``items()`` method."""
    if isinstance(value, Model):
        return False
    return isinstance(value, Mapping) or callable(getattr(value, "items", None))


def _key_value_pairs(attributes: Any) -> List[Tuple[Any, Any]]:
    """Turn constructor input into a list of pairs, or raise InvalidInputError."""
    if isinstance(attributes, Model):
        return list(attributes)
    if is_mapping(attributes):
        return list(attributes.items())
    if attributes is None or isinstance(attributes, (str, bytes, bytearray)):
        raise InvalidInputError(attributes)
    try:
        iterator = iter(attributes)
    except TypeError:
        raise InvalidInputError(attributes) from None

    pairs: List[Tuple[Any, Any]] = []
    for item in iterator:
        if isinstance(item, (str, bytes, bytearray)):
            raise InvalidInputError(attributes)
        try:
            key, value = item
        except (TypeError, ValueError):
            raise InvalidInputError(attributes) from None
        pairs.append((key, value))
    return pairs


def _normalized_index(inflector: NormalizingInflector, names: Iterable[str]) -> Dict[str, str]:
    """Map normalized names back to wire names.

    Names that normalize to themselves are left out. When two wire names
    normalize to the same form the first one wins.
    """
    index: Dict[str, str] = {}
    for name in names:
        normalized = inflector.normalize(name)
        if normalized == name:
            continue
        if normalized in index:
            if index[normalized] != name:
                logger.debug(
                    "normalized name collision",
                    normalized=normalized,
                    kept=index[normalized],
                    ignored=name,
                )
            continue
        index[normalized] = name
    return index


def _cast(cls: _ModelMeta, name: str, value: Any) -> Any:
    if value is None:
        return None
    schema = cls.schema
    if schema is None:
        return value
    property_schema = schema.property_schema(name)
    if property_schema is None:
        return value

    from .object_builder import ObjectBuilder
    return ObjectBuilder(property_schema, cls.inflector, value).call()


def _resolve(model: "Model", name: str) -> Any:
    """Exact wire name first, then the normalized index. Returns _MISSING on failure."""
    try:
        attributes = object.__getattribute__(model, '_Model__attributes')
        normalized = object.__getattribute__(model, '_Model__normalized')
    except AttributeError:
        return _MISSING
    if name in attributes:
        return attributes[name]
    original = normalized.get(name)
    if original is not None and original in attributes:
        return attributes[original]
    return _MISSING


class Model(metaclass=_ModelMeta):
    """Read-only, attribute-accessible view of one JSON object.

    Subclass it (or let the object builder generate subclasses) to bind a
    schema and an inflector to a shape.
    """

    __slots__ = ('__attributes', '__normalized')

    def __init__(self, attributes: Any) -> None:
        cls = type(self)
        pairs = [(str(key), value) for key, value in _key_value_pairs(attributes)]

        _setattr = object.__setattr__
        _setattr(self, '_Model__normalized', _normalized_index(cls.inflector, [key for key, _ in pairs]))

        cast_attributes: Dict[str, Any] = {}
        for name, value in pairs:
            cast_attributes[name] = _cast(cls, name, value)
        _setattr(self, '_Model__attributes', cast_attributes)

    def __getattribute__(self, name: str) -> Any:
        # Payload keys win over the private slots that share their names
        if name.startswith('_Model__'):
            value = _resolve(self, name)
            if value is not _MISSING:
                return value
        return object.__getattribute__(self, name)

    def __getattr__(self, name: str) -> Any:
        value = _resolve(self, name)
        if value is _MISSING:
            raise AttributeNotFoundError(repr(self), name)
        return value

    def __getitem__(self, key: str) -> Any:
        try:
            return _attributes(self).get(key)
        except TypeError:
            return None

    def __contains__(self, key: object) -> bool:
        try:
            return key in _attributes(self)
        except TypeError:
            return False

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        """Iterate over (wire name, value) pairs."""
        return iter(list(_attributes(self).items()))

    def __dir__(self) -> List[str]:
        return sorted(set(_attributes(self)) | set(object.__getattribute__(self, '_Model__normalized')))

    def __setattr__(self, name: str, value: Any) -> None:
        raise ReadOnlyModelError(repr(self), name)

    def __delattr__(self, name: str) -> None:
        raise ReadOnlyModelError(repr(self), name)

    def __reduce__(self) -> Tuple[Any, ...]:
        """Rebuild from the wire pairs; used by copy, deepcopy and pickle.

        Values that are already models pass through casting unchanged.
        Generated classes live only in the object builder's cache, so only
        importable Model classes can be pickled.
        """
        return (type(self), (list(self),))

    def __repr__(self) -> str:
        return f"<{type(self).__qualname__}:0x{id(self):x}>"


def _attributes(model: Model) -> Dict[str, Any]:
    return object.__getattribute__(model, '_Model__attributes')


def probe(model: Model, name: str) -> bool:
    """Return True when ``name`` resolves on ``model`` by wire or normalized name."""
    return _resolve(model, name) is not _MISSING


def try_attribute(model: Model, name: str) -> Any:
    """Return the resolved attribute, or None when it does not resolve."""
    value = _resolve(model, name)
    if value is _MISSING:
        return None
    return value


def model_dump(value: Any) -> Any:
    """Convert a model tree back into plain dicts and lists keyed by wire names."""
    if isinstance(value, Model):
        return {name: model_dump(item) for name, item in value}
    if isinstance(value, list):
        return [model_dump(item) for item in value]
    return value


__all__ = ["Model", "probe", "try_attribute", "model_dump"]
