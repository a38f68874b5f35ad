"""
Read-only view over a JSON-schema node.

A Schema answers one question for the model layer: which sub-schema
describes a given property? It also exposes the few other facts the
object builder needs (array item schema, model class name).

Resolving ``$ref`` pointers is the job of whatever loads the OpenAPI
document; Schema expects an already dereferenced node.

Example:
    from fennec import Schema

    schema = Schema({
        "title": "book",
        "properties": {
            "author": {"type": "object", "properties": {"name": {"type": "string"}}},
            "tags": {"type": "array", "items": {"type": "string"}},
        },
    })
    schema.property_schema("author").type   # 'object'
    schema.property_schema("missing")       # None
    schema.model_name                       # 'Book'
"""

import re
import threading
from typing import Any, Dict, List, Mapping, Optional

from .errors import SchemaError


_NON_IDENTIFIER_RE = re.compile(r"[^0-9a-zA-Z]+")

ANONYMOUS_MODEL_NAME = "AnonymousModel"


def _camelize(text: str) -> str:
    """Turn a title like ``"book cover"`` or ``"book_cover"`` into ``BookCover``."""
    words = [word for word in _NON_IDENTIFIER_RE.split(text) if word]
    name = "".join(word[0].upper() + word[1:] for word in words)
    if not name:
        return ANONYMOUS_MODEL_NAME
    if name[0].isdigit():
        name = "_" + name
    return name


class Schema:
    """Immutable description of one object, array or scalar shape.

    Child schemas are created on first lookup and cached, so the same
    property always yields the same Schema object. The object builder
    relies on that identity to reuse generated model classes.
    """

    __slots__ = ('_node', '_name', '_children', '_items', '_lock')

    _ITEMS_UNSET = object()

    def __init__(self, node: Mapping[str, Any], name: Optional[str] = None) -> None:
        if not isinstance(node, Mapping):
            raise SchemaError(f"Schema nodes must be JSON objects, got {type(node).__name__}")
        self._node = node
        self._name = name
        self._children: Dict[str, Optional["Schema"]] = {}
        self._items: Any = self._ITEMS_UNSET
        self._lock = threading.Lock()

    @property
    def node(self) -> Mapping[str, Any]:
        return self._node

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def type(self) -> Optional[str]:
        """Declared ``type``, or the type implied by ``properties``/``items``."""
        declared = self._node.get("type")
        if isinstance(declared, str):
            return declared
        if "properties" in self._node:
            return "object"
        if "items" in self._node:
            return "array"
        return None

    @property
    def property_names(self) -> List[str]:
        properties = self._node.get("properties")
        if not isinstance(properties, Mapping):
            return []
        return list(properties.keys())

    @property
    def model_name(self) -> str:
        title = self._node.get("title")
        if isinstance(title, str) and title.strip():
            return _camelize(title)
        if self._name:
            return _camelize(self._name)
        return ANONYMOUS_MODEL_NAME

    def property_schema(self, name: str) -> Optional["Schema"]:
        """Return the sub-schema for property ``name``, or None."""
        name = str(name)
        try:
            return self._children[name]
        except KeyError:
            pass
        with self._lock:
            if name not in self._children:
                self._children[name] = self._build_property_schema(name)
            return self._children[name]

    @property
    def item_schema(self) -> Optional["Schema"]:
        """Return the sub-schema describing array items, or None."""
        items = self._items
        if items is self._ITEMS_UNSET:
            with self._lock:
                if self._items is self._ITEMS_UNSET:
                    self._items = self._build_item_schema()
                items = self._items
        return items

    def _build_property_schema(self, name: str) -> Optional["Schema"]:
        properties = self._node.get("properties")
        if not isinstance(properties, Mapping):
            return None
        node = properties.get(name)
        if not isinstance(node, Mapping):
            return None
        return Schema(node, name=name)

    def _build_item_schema(self) -> Optional["Schema"]:
        node = self._node.get("items")
        if not isinstance(node, Mapping):
            return None
        item_name = f"{self._name}_item" if self._name else None
        return Schema(node, name=item_name)

    def __repr__(self) -> str:
        return f"Schema(model_name={self.model_name!r}, type={self.type!r})"


__all__ = ["Schema", "ANONYMOUS_MODEL_NAME"]
