"""
ModelConfig for fennec - per-shape model configuration.

A model class may declare its schema and inflector in the class body
instead of assigning them afterwards. The metaclass consumes
``model_config`` when the class is created, so a payload property named
``model_config`` still resolves as data on instances.

Example:
    from fennec import Inflector, Model, ModelConfig, Schema

    class Book(Model):
        model_config = ModelConfig(
            schema=Schema({"properties": {"author": {"type": "object"}}}),
            inflector=Inflector(exceptions={"isbn13": "isbn_13"}),
        )
"""

from typing import Any, Optional, TypedDict

from .inflector import NormalizingInflector
from .schema import Schema


class ModelConfig(TypedDict, total=False):
    """Configuration dictionary for Model subclasses."""

    schema: Optional[Schema]
    """Schema used to cast nested properties. Default: None (no casting)."""

    inflector: Optional[NormalizingInflector]
    """Inflector used for normalized names. Default: None (a standard
    Inflector is created on first use)."""


# Default configuration values
CONFIG_DEFAULTS: ModelConfig = {
    'schema': None,
    'inflector': None,
}


def get_config_value(config: Optional[ModelConfig], key: str, default: Any = None) -> Any:
    """Get a configuration value with fallback to defaults."""
    if config is None:
        return CONFIG_DEFAULTS.get(key, default)
    return config.get(key, CONFIG_DEFAULTS.get(key, default))


__all__ = ["ModelConfig", "CONFIG_DEFAULTS", "get_config_value"]
