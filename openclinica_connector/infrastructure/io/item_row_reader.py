"""Read long-format item value tables into ItemRow records.

One row per item value; the columns holding each part of the ODM key path are
named by an ItemColumnMapping.
"""

from __future__ import annotations

from pathlib import Path
from typing import override

import pandas as pd

from ...application.ports.repositories import ItemRowRepositoryPort
from ...domain.entities.item_rows import ItemColumnMapping, ItemRow
from .csv_reader import CSVReader, CSVReadOptions
from .exceptions import DataValidationError


class ItemRowReader(ItemRowRepositoryPort):
    pass

    def __init__(
        self,
        csv_reader: CSVReader | None = None,
        options: CSVReadOptions | None = None,
    ) -> None:
        super().__init__()
        self._csv_reader = csv_reader or CSVReader()
        self._options = options

    @override
    def read(
        self, path: str | Path, mapping: ItemColumnMapping | None = None
    ) -> list[ItemRow]:
        mapping = mapping or ItemColumnMapping()
        path = Path(path)
        frame = self._csv_reader.read(path, self._options)
        return rows_from_frame(frame, mapping, source=str(path))


def rows_from_frame(
    frame: pd.DataFrame, mapping: ItemColumnMapping, *, source: str = "<frame>"
) -> list[ItemRow]:
    """Convert a DataFrame into ItemRow records.

    Raises:
        DataValidationError: If a required column is missing
    """
    missing = [col for col in mapping.required_columns if col not in frame.columns]
    if missing:
        raise DataValidationError(
            f"Missing required columns in {source}: {', '.join(missing)}"
        )
    has_event_repeat = mapping.study_event_repeat_key in frame.columns
    has_group_repeat = mapping.item_group_repeat_key in frame.columns
    has_status = bool(mapping.form_status) and mapping.form_status in frame.columns

    rows: list[ItemRow] = []
    for record in frame.to_dict(orient="records"):
        rows.append(
            ItemRow(
                subject_key=_text(record[mapping.subject_key]),
                study_event_oid=_text(record[mapping.study_event_oid]),
                study_event_repeat_key=(
                    _repeat_key(
                        record[mapping.study_event_repeat_key],
                        mapping.default_repeat_key,
                    )
                    if has_event_repeat
                    else mapping.default_repeat_key
                ),
                form_oid=_text(record[mapping.form_oid]),
                item_group_oid=_text(record[mapping.item_group_oid]),
                item_group_repeat_key=(
                    _repeat_key(
                        record[mapping.item_group_repeat_key],
                        mapping.default_repeat_key,
                    )
                    if has_group_repeat
                    else mapping.default_repeat_key
                ),
                item_oid=_text(record[mapping.item_oid]),
                value=_value(record[mapping.value]),
                form_status=(
                    _optional_text(record[mapping.form_status])
                    if has_status and mapping.form_status
                    else None
                ),
            )
        )
    return rows


def _is_missing(value: object) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _text(value: object) -> str:
    if _is_missing(value):
        return ""
    return str(value).strip()


def _value(value: object) -> str:
    # Item values keep surrounding whitespace.
    if _is_missing(value):
        return ""
    return str(value)


def _optional_text(value: object) -> str | None:
    text = _text(value)
    return text or None


def _repeat_key(value: object, default: str) -> str:
    text = _text(value)
    return text or default
