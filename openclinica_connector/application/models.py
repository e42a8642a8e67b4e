from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..constants import Defaults

if TYPE_CHECKING:
    from pathlib import Path

    from ..domain.entities.item_rows import ItemColumnMapping
    from ..domain.entities.odm import ClinicalData


def _empty_str_list() -> list[str]:
    return []


@dataclass(slots=True)
class ImportDataRequest:
    input_path: Path
    study_oid: str
    metadata_version_oid: str = Defaults.METADATA_VERSION_OID
    mapping: ItemColumnMapping | None = None
    output_path: Path | None = None
    dry_run: bool = False
    pretty: bool = False


@dataclass(slots=True)
class ImportDataResponse:
    success: bool = True
    study_oid: str = ""
    row_count: int = 0
    subject_count: int = 0
    item_count: int = 0
    clinical_data: ClinicalData | None = None
    odm_xml: str | None = None
    output_path: Path | None = None
    submitted: bool = False
    result: str | None = None
    errors: list[str] = field(default_factory=_empty_str_list)
    error: str | None = None

    @property
    def has_errors(self) -> bool:
        return self.error is not None or len(self.errors) > 0
