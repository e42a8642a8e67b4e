from __future__ import annotations

from typing import TYPE_CHECKING

from ..entities.odm import ClinicalData

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..entities.item_rows import ItemRow


def build_clinical_data(
    rows: Iterable[ItemRow],
    study_oid: str,
    metadata_version_oid: str,
    *,
    clinical_data: ClinicalData | None = None,
) -> ClinicalData:
    """Upsert every row into a ClinicalData tree, in row order.

    A later row for the same item path overwrites the earlier value. Pass
    ``clinical_data`` to extend an existing tree instead of starting a new one.
    """
    tree = clinical_data
    if tree is None:
        tree = ClinicalData(study_oid, metadata_version_oid)
    for row in rows:
        tree.upsert_item(
            row.subject_key,
            row.study_event_oid,
            row.study_event_repeat_key,
            row.form_oid,
            row.item_group_oid,
            row.item_group_repeat_key,
            row.item_oid,
            row.value,
            form_status=row.form_status,
        )
    return tree
