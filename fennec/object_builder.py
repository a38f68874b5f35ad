"""
Recursive construction of model trees from parsed JSON.

Example:
    from fennec import Schema, build, build_from_json

    schema = Schema({
        "title": "book",
        "properties": {
            "authors": {
                "type": "array",
                "items": {"title": "author", "properties": {"name": {"type": "string"}}},
            },
        },
    })
    book = build_from_json(schema, '{"authors": [{"name": "Ursula K. Le Guin"}]}')
    type(book).__name__          # 'Book'
    book.authors[0].name         # 'Ursula K. Le Guin'
    type(book.authors[0]).__name__  # 'Author'
"""

import json as _json
import threading
import weakref
from typing import Any, Optional, Tuple, Union

from .config import ModelConfig
from .inflector import Inflector, NormalizingInflector
from .log import get_logger
from .model import Model, is_mapping
from .schema import ANONYMOUS_MODEL_NAME, Schema

logger = get_logger(__name__)

# Standard inflector for callers that do not inject one
_DEFAULT_INFLECTOR = Inflector()

# Generated model classes per (schema, inflector). A live class keeps both
# objects alive, so the ids stay unique for as long as the entry exists; the
# entry goes away with the last reference to the class.
_MODEL_CLASSES: "weakref.WeakValueDictionary[Tuple[int, int], type]" = weakref.WeakValueDictionary()
_MODEL_CLASSES_LOCK = threading.Lock()


def model_class(schema: Optional[Schema], inflector: NormalizingInflector) -> type:
    """Return the Model subclass bound to ``schema`` and ``inflector``.

    The class is created on first request and reused by later requests
    with the same schema and inflector objects while it is still referenced,
    by a built model or otherwise.
    """
    key = (id(schema), id(inflector))
    cls = _MODEL_CLASSES.get(key)
    if cls is not None:
        return cls
    with _MODEL_CLASSES_LOCK:
        cls = _MODEL_CLASSES.get(key)
        if cls is None:
            name = schema.model_name if schema is not None else ANONYMOUS_MODEL_NAME
            cls = type(Model)(name, (Model,), {
                '__slots__': (),
                '__module__': __name__,
                '__qualname__': name,
                'model_config': ModelConfig(schema=schema, inflector=inflector),
            })
            _MODEL_CLASSES[key] = cls
            logger.debug("created model class", model=name, schema=repr(schema))
    return cls


class ObjectBuilder:
    """Builds one parsed JSON value into scalars, lists and models.

    Builders are cheap and meant to be thrown away after ``call()``.
    """

    __slots__ = ('schema', 'inflector', 'value')

    def __init__(self, schema: Optional[Schema], inflector: NormalizingInflector, value: Any) -> None:
        self.schema = schema
        self.inflector = inflector
        self.value = value

    def call(self) -> Any:
        value = self.value
        if isinstance(value, Model):
            return value
        if is_mapping(value):
            return model_class(self.schema, self.inflector)(value)
        if isinstance(value, (list, tuple)):
            element_schema = self._element_schema()
            return [
                ObjectBuilder(element_schema, self.inflector, element).call()
                for element in value
            ]
        return value

    def _element_schema(self) -> Optional[Schema]:
        # Array schemas describe their elements through ``items``
        if self.schema is None:
            return None
        item_schema = self.schema.item_schema
        if item_schema is not None:
            return item_schema
        if self.schema.type == 'array':
            return None
        return self.schema


def build(
    schema: Optional[Schema],
    value: Any,
    inflector: Optional[NormalizingInflector] = None,
) -> Any:
    """Build ``value`` against ``schema`` using the standard inflector by default."""
    if inflector is None:
        inflector = _DEFAULT_INFLECTOR
    return ObjectBuilder(schema, inflector, value).call()


def build_from_json(
    schema: Optional[Schema],
    data: Union[str, bytes, bytearray],
    inflector: Optional[NormalizingInflector] = None,
) -> Any:
    """Decode a JSON document and build the result against ``schema``.

    Raises:
        json.JSONDecodeError: If ``data`` is not valid JSON.
    """
    return build(schema, _json.loads(data), inflector=inflector)


__all__ = ["ObjectBuilder", "model_class", "build", "build_from_json"]
