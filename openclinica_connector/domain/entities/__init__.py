"""Domain entities.

The ODM clinical data tree and the tabular item rows that feed it.
"""

from .item_rows import ItemColumnMapping, ItemRow
from .odm import (
    ClinicalData,
    FormData,
    ItemData,
    ItemGroupData,
    ItemPath,
    OrderedChildren,
    StudyEventData,
    SubjectData,
    normalize_repeat_key,
)

__all__ = [
    # ODM tree
    "ClinicalData",
    "SubjectData",
    "StudyEventData",
    "FormData",
    "ItemGroupData",
    "ItemData",
    "ItemPath",
    "OrderedChildren",
    "normalize_repeat_key",
    # Item rows
    "ItemColumnMapping",
    "ItemRow",
]
