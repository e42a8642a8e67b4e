"""JSON files naming the CSV columns of an item value table.

A mapping file only needs the keys that differ from the ODM attribute names::

    {"subject_key": "Subject", "value": "Result", "default_repeat_key": "1"}
"""

from pathlib import Path

from pydantic import ValidationError

from ...domain.entities.item_rows import ItemColumnMapping
from ..io.exceptions import DataParseError, DataSourceNotFoundError


class MappingConfigLoadError(DataParseError):
    pass


class MappingConfigSaveError(DataParseError):
    pass


def load_item_column_mapping(path: str | Path) -> ItemColumnMapping:
    """Load and validate a column mapping.

    Raises:
        DataSourceNotFoundError: If the file does not exist
        MappingConfigLoadError: If it is not JSON or names invalid columns
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise DataSourceNotFoundError(f"Column mapping not found: {file_path}")
    text = file_path.read_text(encoding="utf-8")
    try:
        return ItemColumnMapping.model_validate_json(text)
    except ValidationError as exc:
        if any(error["type"] == "json_invalid" for error in exc.errors()):
            raise MappingConfigLoadError(
                f"Invalid JSON in {file_path}: {exc.errors()[0]['msg']}"
            ) from exc
        raise MappingConfigLoadError(
            f"Invalid column mapping in {file_path}: {exc}"
        ) from exc


def save_item_column_mapping(mapping: ItemColumnMapping, path: str | Path) -> None:
    file_path = Path(path)
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(mapping.model_dump_json(indent=2), encoding="utf-8")
    except OSError as exc:
        raise MappingConfigSaveError(
            f"Failed to save column mapping to {file_path}: {exc}"
        ) from exc
