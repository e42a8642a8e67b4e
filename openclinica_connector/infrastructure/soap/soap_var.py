"""Named, namespaced, typed values for building SOAP request payloads.

A SoapVar tree describes the body of one request independently of how it is
rendered; ``to_element`` turns it into ElementTree elements.
"""

from __future__ import annotations

from collections.abc import Sequence
from copy import deepcopy
from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from xml.etree import ElementTree as ET

from ..io.xml_utils import strip_xml_declaration, tag
from .exceptions import OdmDocumentError

type SoapValue = str | date | Sequence[SoapVar] | ET.Element | None


class XsdType(StrEnum):
    STRING = "string"
    DATE = "date"
    OBJECT = "object"
    ANY_XML = "anyxml"


@dataclass(frozen=True, slots=True)
class SoapVar:
    name: str
    value: SoapValue
    xsd_type: XsdType = XsdType.STRING
    namespace: str | None = None

    @classmethod
    def string(
        cls, name: str, value: str | None, namespace: str | None = None
    ) -> SoapVar:
        return cls(name, value, XsdType.STRING, namespace)

    @classmethod
    def iso_date(
        cls, name: str, value: str | date | None, namespace: str | None = None
    ) -> SoapVar:
        return cls(name, value, XsdType.DATE, namespace)

    @classmethod
    def struct(
        cls, name: str, children: Sequence[SoapVar], namespace: str | None = None
    ) -> SoapVar:
        return cls(name, tuple(children), XsdType.OBJECT, namespace)

    @classmethod
    def any_xml(cls, document: str | ET.Element) -> SoapVar:
        """Embed an XML document as elements rather than escaped text."""
        if isinstance(document, ET.Element):
            element = deepcopy(document)
        else:
            element = parse_xml_fragment(document)
        return cls(element.tag, element, XsdType.ANY_XML)

    @property
    def qualified_name(self) -> str:
        if self.namespace:
            return tag(self.namespace, self.name)
        return self.name

    @property
    def children(self) -> tuple[SoapVar, ...]:
        if self.xsd_type is XsdType.OBJECT and isinstance(self.value, Sequence):
            return tuple(
                child for child in self.value if isinstance(child, SoapVar)
            )
        return ()

    def to_element(self, parent: ET.Element | None = None) -> ET.Element:
        if self.xsd_type is XsdType.ANY_XML:
            element = self._any_xml_element()
            if parent is not None:
                parent.append(element)
            return element

        if parent is None:
            element = ET.Element(self.qualified_name)
        else:
            element = ET.SubElement(parent, self.qualified_name)

        if self.xsd_type is XsdType.OBJECT:
            for child in self.children:
                child.to_element(element)
        else:
            text = format_simple_value(self.value, self.xsd_type)
            if text:
                element.text = text
        return element

    def _any_xml_element(self) -> ET.Element:
        if not isinstance(self.value, ET.Element):
            raise OdmDocumentError(f"{self.name} does not hold an XML element")
        return deepcopy(self.value)


def format_simple_value(value: SoapValue, xsd_type: XsdType) -> str:
    if value is None:
        return ""
    if xsd_type is XsdType.DATE:
        if isinstance(value, datetime):
            return value.date().isoformat()
        if isinstance(value, date):
            return value.isoformat()
    return str(value)


def parse_xml_fragment(document: str) -> ET.Element:
    text = strip_xml_declaration(document)
    if not text:
        raise OdmDocumentError("XML document is empty")
    try:
        return ET.fromstring(text)
    except ET.ParseError as exc:
        raise OdmDocumentError(f"XML document is not well-formed: {exc}") from exc
