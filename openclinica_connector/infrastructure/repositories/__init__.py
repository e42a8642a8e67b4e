"""Repository implementations for persisted connector settings."""

from .mapping_config_repository import (
    MappingConfigLoadError,
    MappingConfigSaveError,
    load_item_column_mapping,
    save_item_column_mapping,
)

__all__ = [
    "MappingConfigLoadError",
    "MappingConfigSaveError",
    "load_item_column_mapping",
    "save_item_column_mapping",
]
