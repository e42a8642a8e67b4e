"""Serialization of ODM import documents to strings and files."""

from __future__ import annotations

from typing import TYPE_CHECKING, override
from xml.etree import ElementTree as ET

from ....application.ports.services import OdmWriterPort
from ..xml_utils import to_utf8_string
from .builder import build_odm_tree

if TYPE_CHECKING:
    from pathlib import Path

    from ....domain.entities.odm import ClinicalData


def serialize_to_xml(
    clinical_data: ClinicalData,
    *,
    xml_declaration: bool = True,
    pretty: bool = False,
) -> str:
    """Serialize a ClinicalData tree to an ODM XML string.

    The tree is not modified, so serializing again after further upserts
    reflects the new state. Identical trees give identical output.

    Args:
        clinical_data: Root of the tree
        xml_declaration: Prefix the document with an XML declaration
        pretty: Indent nested elements

    Returns:
        The ODM document
    """
    root = build_odm_tree(clinical_data)
    if pretty:
        ET.indent(root)
    return to_utf8_string(root, xml_declaration=xml_declaration)


def write_odm_xml(
    clinical_data: ClinicalData, output: Path, *, pretty: bool = False
) -> None:
    """Write a ClinicalData tree to an ODM XML file.

    The file content is exactly what serialize_to_xml returns.
    """
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(
        serialize_to_xml(clinical_data, pretty=pretty), encoding="utf-8"
    )


class OdmXmlWriter(OdmWriterPort):
    @override
    def serialize(self, clinical_data: ClinicalData, *, pretty: bool = False) -> str:
        return serialize_to_xml(clinical_data, pretty=pretty)

    @override
    def write(
        self, clinical_data: ClinicalData, output_path: Path, *, pretty: bool = False
    ) -> None:
        write_odm_xml(clinical_data, output_path, pretty=pretty)
