"""Builder for OpenClinica ODM import document trees.

Walks a ClinicalData tree in child insertion order and produces the element
structure accepted by the OpenClinica ``data/v1`` import operation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from xml.etree import ElementTree as ET

from ..exceptions import OdmSerializationError
from ..xml_utils import attr, find_invalid_xml_char
from .constants import (
    FORM_STATUS_TRANSLATIONS,
    OPENCLINICA_NS,
    TRANSACTION_TYPE_INSERT,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ....domain.entities.odm import (
        ClinicalData,
        FormData,
        ItemGroupData,
        StudyEventData,
        SubjectData,
    )


def translate_form_status(form_status: str | None) -> str:
    """Map a form status onto the value written to ``OpenClinica:Status``.

    Args:
        form_status: Status given when the form was created, or None

    Returns:
        The translated status, the status itself when no translation exists,
        or an empty string when the status is unset
    """
    if form_status is None:
        return ""
    return FORM_STATUS_TRANSLATIONS.get(form_status, form_status)


def build_odm_tree(clinical_data: ClinicalData) -> ET.Element:
    """Build the ODM document tree for a clinical data submission.

    Args:
        clinical_data: Root of the tree to serialize

    Returns:
        The root ``ODM`` Element

    Raises:
        OdmSerializationError: If a key or value holds a character XML 1.0
            does not allow, such as a vertical tab from a spreadsheet cell
    """
    check_xml_characters(clinical_data)
    root = ET.Element("ODM")
    append_clinical_data(root, clinical_data)
    return root


def append_clinical_data(parent: ET.Element, clinical_data: ClinicalData) -> None:
    element = ET.SubElement(
        parent,
        "ClinicalData",
        attrib={
            "StudyOID": clinical_data.study_oid,
            "MetaDataVersionOID": clinical_data.metadata_version_oid,
        },
    )
    for subject in clinical_data.subject_data:
        append_subject_data(element, subject)


def append_subject_data(parent: ET.Element, subject: SubjectData) -> None:
    element = ET.SubElement(
        parent, "SubjectData", attrib={"SubjectKey": subject.subject_key}
    )
    for event in subject.study_event_data:
        append_study_event_data(element, event)


def append_study_event_data(parent: ET.Element, event: StudyEventData) -> None:
    element = ET.SubElement(
        parent,
        "StudyEventData",
        attrib={
            "StudyEventOID": event.study_event_oid,
            "StudyEventRepeatKey": event.study_event_repeat_key,
        },
    )
    for form in event.form_data:
        append_form_data(element, form)


def append_form_data(parent: ET.Element, form: FormData) -> None:
    # Status is always written, even when unset.
    element = ET.SubElement(parent, "FormData")
    element.set(attr(OPENCLINICA_NS, "Status"), translate_form_status(form.form_status))
    element.set("FormOID", form.form_oid)
    for group in form.item_group_data:
        append_item_group_data(element, group)


def append_item_group_data(parent: ET.Element, group: ItemGroupData) -> None:
    element = ET.SubElement(
        parent,
        "ItemGroupData",
        attrib={
            "ItemGroupOID": group.item_group_oid,
            "ItemGroupRepeatKey": group.item_group_repeat_key,
            "TransactionType": TRANSACTION_TYPE_INSERT,
        },
    )
    for item in group.item_data:
        ET.SubElement(
            element,
            "ItemData",
            attrib={
                "ItemOID": item.item_oid,
                "Value": format_item_value(item.value),
            },
        )


def format_item_value(value: object) -> str:
    if value is None:
        return ""
    return str(value)


def check_xml_characters(clinical_data: ClinicalData) -> None:
    """Reject trees whose text cannot appear in a well-formed document.

    Values are not altered; the error names the path of the offending node,
    written as ``Subject/Event[repeat]/Form/Group[repeat]/Item``.
    """
    for path, text in _text_fields(clinical_data):
        char = find_invalid_xml_char(text)
        if char is not None:
            raise OdmSerializationError(
                f"Cannot write {path!r} as XML: character U+{ord(char):04X} "
                "is not allowed in XML 1.0"
            )


def _text_fields(clinical_data: ClinicalData) -> Iterator[tuple[str, str]]:
    yield "ClinicalData", clinical_data.study_oid
    yield "ClinicalData", clinical_data.metadata_version_oid
    for subject in clinical_data.subject_data:
        subject_path = subject.subject_key
        yield subject_path, subject.subject_key
        for event in subject.study_event_data:
            event_path = (
                f"{subject_path}/{event.study_event_oid}"
                f"[{event.study_event_repeat_key}]"
            )
            yield event_path, event.study_event_oid
            yield event_path, event.study_event_repeat_key
            for form in event.form_data:
                form_path = f"{event_path}/{form.form_oid}"
                yield form_path, form.form_oid
                yield form_path, translate_form_status(form.form_status)
                for group in form.item_group_data:
                    group_path = (
                        f"{form_path}/{group.item_group_oid}"
                        f"[{group.item_group_repeat_key}]"
                    )
                    yield group_path, group.item_group_oid
                    yield group_path, group.item_group_repeat_key
                    for item in group.item_data:
                        item_path = f"{group_path}/{item.item_oid}"
                        yield item_path, item.item_oid
                        yield item_path, format_item_value(item.value)
