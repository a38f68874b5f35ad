"""
Tests for ObjectBuilder and the build helpers.
"""

import gc
import json

import pytest
from structlog.testing import capture_logs

from fennec import object_builder
from fennec import (
    Inflector,
    Model,
    ObjectBuilder,
    Schema,
    build,
    build_from_json,
    model_class,
)


def library_schema():
    return Schema({
        "title": "library",
        "properties": {
            "name": {"type": "string"},
            "books": {
                "type": "array",
                "items": {
                    "title": "book",
                    "properties": {
                        "author": {
                            "title": "author",
                            "properties": {
                                "address": {"properties": {"city": {"type": "string"}}},
                            },
                        },
                    },
                },
            },
            "shelf": {"title": "shelf", "properties": {"label": {"type": "string"}}},
            "tags": {"type": "array"},
        },
    })


# ============================================================
# Test: Scalars
# ============================================================

class TestScalars:

    @pytest.mark.parametrize("value", [None, 1, 2.5, "text", True])
    def test_scalars_pass_through(self, value):
        assert build(library_schema(), value) is value

    def test_scalars_without_schema(self):
        assert build(None, "text") == "text"


# ============================================================
# Test: Mappings
# ============================================================

class TestMappings:

    def test_mapping_becomes_bound_model(self):
        schema = library_schema()
        library = build(schema, {"name": "Central"})
        assert isinstance(library, Model)
        assert type(library).schema is schema
        assert type(library).__name__ == "Library"
        assert library.name == "Central"

    def test_class_is_reused_for_the_same_shape(self):
        schema = library_schema()
        first = build(schema, {"name": "Central"})
        second = build(schema, {"name": "East"})
        assert type(first) is type(second)

    def test_different_inflector_gets_different_class(self):
        schema = library_schema()
        first = build(schema, {}, inflector=Inflector())
        second = build(schema, {}, inflector=Inflector())
        assert type(first) is not type(second)

    def test_model_class_directly(self):
        schema = library_schema()
        inflector = Inflector()
        cls = model_class(schema, inflector)
        assert cls is model_class(schema, inflector)
        assert issubclass(cls, Model)
        assert cls.inflector is inflector
        assert cls.__module__ == "fennec.object_builder"

    def test_schema_less_mapping(self):
        shelf = build(None, {"label": "A", "nested": {"x": 1}})
        assert type(shelf).__name__ == "AnonymousModel"
        assert type(shelf).schema is None
        assert shelf.nested == {"x": 1}

    def test_existing_model_is_returned_as_is(self):
        book = Model({"title": "Dune"})
        assert build(library_schema(), book) is book

    def test_mapping_like_objects(self):
        class Record:
            def __init__(self, data):
                self._data = data

            def items(self):
                return self._data.items()

        library = build(library_schema(), Record({"shelf": Record({"label": "A"})}))
        assert type(library).__name__ == "Library"
        assert type(library.shelf).__name__ == "Shelf"
        assert library.shelf.label == "A"

    def test_schema_on_base_model_does_not_leak(self):
        Model.schema = library_schema()
        try:
            shelf = build(None, {"shelf": {"label": "A"}})
        finally:
            Model.schema = None
        assert type(shelf).schema is None
        assert shelf.shelf == {"label": "A"}

    def test_unreferenced_classes_are_released(self):
        schema = library_schema()
        gc.collect()
        before = len(object_builder._MODEL_CLASSES)
        for _ in range(200):
            build(schema, {"name": "Central"}, inflector=Inflector())
        gc.collect()
        assert len(object_builder._MODEL_CLASSES) <= before

    def test_referenced_class_stays_cached(self):
        schema = library_schema()
        inflector = Inflector()
        first = build(schema, {}, inflector=inflector)
        gc.collect()
        assert type(build(schema, {}, inflector=inflector)) is type(first)


# ============================================================
# Test: Sequences
# ============================================================

class TestSequences:

    def test_array_items_use_item_schema(self):
        library = build(library_schema(), {"books": [{"author": {"name": "X"}}, {"author": None}]})
        assert isinstance(library.books, list)
        first, second = library.books
        assert type(first).__name__ == "Book"
        assert type(first.author).__name__ == "Author"
        assert first.author.name == "X"
        assert second.author is None

    def test_deep_nesting(self):
        library = build(library_schema(), {
            "books": [{"author": {"address": {"city": "Arrakeen"}}}],
        })
        address = library.books[0].author.address
        assert isinstance(address, Model)
        assert address.city == "Arrakeen"

    def test_list_against_object_schema_reuses_schema(self):
        library = build(library_schema(), {"shelf": [{"label": "A"}, "loose", None]})
        first, loose, missing = library.shelf
        assert type(first).__name__ == "Shelf"
        assert first.label == "A"
        assert loose == "loose"
        assert missing is None

    def test_array_without_items(self):
        library = build(library_schema(), {"tags": [{"name": "sf", "meta": {"x": 1}}]})
        tag = library.tags[0]
        assert isinstance(tag, Model)
        assert type(tag).schema is None
        assert tag.meta == {"x": 1}

    def test_top_level_list(self):
        schema = library_schema()
        libraries = build(schema, [{"name": "A"}, {"name": "B"}])
        assert [library.name for library in libraries] == ["A", "B"]

    def test_tuple_becomes_list(self):
        result = build(None, ({"a": 1}, 2))
        assert isinstance(result, list)
        assert result[0].a == 1
        assert result[1] == 2

    def test_nested_lists(self):
        result = build(None, [[{"a": 1}], []])
        assert result[0][0].a == 1
        assert result[1] == []


# ============================================================
# Test: ObjectBuilder
# ============================================================

class TestObjectBuilder:

    def test_call(self):
        schema = library_schema()
        inflector = Inflector()
        library = ObjectBuilder(schema, inflector, {"name": "Central"}).call()
        assert type(library) is model_class(schema, inflector)

    def test_nested_failure_surfaces_at_construction(self):
        class Strict:
            def normalize(self, name):
                if name == "explode":
                    raise ValueError("bad property name")
                return name

        payload = {"shelf": {"explode": 1}}
        with pytest.raises(ValueError, match="bad property name"):
            build(library_schema(), payload, inflector=Strict())

    def test_logs_class_creation(self):
        schema = Schema({"title": "ledger"})
        with capture_logs() as logs:
            first = build(schema, {})
            second = build(schema, {})
        assert type(first) is type(second)
        created = [entry for entry in logs if entry["event"] == "created model class"]
        assert len(created) == 1
        assert created[0]["model"] == "Ledger"
        assert created[0]["log_level"] == "debug"

    def test_logs_normalization_collision(self):
        with capture_logs() as logs:
            build(None, {"bookTitle": 1, "book-title": 2})
        collisions = [entry for entry in logs if entry["event"] == "normalized name collision"]
        assert collisions == [{
            "event": "normalized name collision",
            "log_level": "debug",
            "normalized": "book_title",
            "kept": "bookTitle",
            "ignored": "book-title",
        }]


# ============================================================
# Test: JSON input
# ============================================================

class TestBuildFromJson:

    def test_str(self):
        library = build_from_json(library_schema(), '{"name": "Central", "books": [{"author": {"name": "X"}}]}')
        assert library.name == "Central"
        assert library.books[0].author.name == "X"

    def test_bytes(self):
        library = build_from_json(library_schema(), b'{"shelf": {"label": "A"}}')
        assert library.shelf.label == "A"

    def test_scalar_document(self):
        assert build_from_json(None, "42") == 42

    def test_invalid_json(self):
        with pytest.raises(json.JSONDecodeError):
            build_from_json(library_schema(), "{not json")
