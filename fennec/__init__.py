"""
fennec - schema-aware dynamic models for OpenAPI clients

Turns parsed JSON into read-only, attribute-accessible models. Nested
objects and arrays of objects are cast into nested models according to
the schema, and every property can be read under its wire name or its
snake_case form.

Example:
    from fennec import Schema, build

    schema = Schema({
        "title": "book",
        "properties": {"author": {"properties": {"fullName": {"type": "string"}}}},
    })
    book = build(schema, {"bookTitle": "Dune", "author": {"fullName": "Frank Herbert"}})

    book.book_title         # 'Dune'
    book.author.full_name   # 'Frank Herbert'
"""

__version__ = "0.1.0"

# --- Errors ---
from .errors import (
    FennecError,
    InvalidInputError,
    AttributeNotFoundError,
    ReadOnlyModelError,
    SchemaError,
)

# --- Name normalization ---
from .inflector import Inflector, NormalizingInflector

# --- Schema ---
from .schema import Schema

# --- Configuration ---
from .config import ModelConfig, CONFIG_DEFAULTS, get_config_value

# --- Model ---
from .model import Model, probe, try_attribute, model_dump

# --- Object builder ---
from .object_builder import ObjectBuilder, model_class, build, build_from_json

# --- Logging ---
from .log import configure_logging, get_logger


__all__ = [
    # Errors
    "FennecError", "InvalidInputError", "AttributeNotFoundError",
    "ReadOnlyModelError", "SchemaError",

    # Name normalization
    "Inflector", "NormalizingInflector",

    # Schema
    "Schema",

    # Configuration
    "ModelConfig", "CONFIG_DEFAULTS", "get_config_value",

    # Model
    "Model", "probe", "try_attribute", "model_dump",

    # Object builder
    "ObjectBuilder", "model_class", "build", "build_from_json",

    # Logging
    "configure_logging", "get_logger",
]
