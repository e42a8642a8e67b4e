from datetime import date, datetime
from xml.etree import ElementTree as ET

import pytest

from openclinica_connector.infrastructure.soap.exceptions import OdmDocumentError
from openclinica_connector.infrastructure.soap.soap_var import (
    SoapVar,
    XsdType,
    format_simple_value,
    parse_xml_fragment,
)

NS = "http://example.org/ns"


class TestSoapVarFactories:
    def test_string(self):
        var = SoapVar.string("label", "SS_1", NS)

        assert var.xsd_type is XsdType.STRING
        assert var.qualified_name == f"{{{NS}}}label"

    def test_unqualified_name(self):
        assert SoapVar.string("label", "x").qualified_name == "label"

    def test_struct_keeps_children_in_order(self):
        children = [SoapVar.string("a", "1"), SoapVar.string("b", "2")]

        var = SoapVar.struct("parent", children)

        assert var.xsd_type is XsdType.OBJECT
        assert [child.name for child in var.children] == ["a", "b"]

    def test_simple_var_has_no_children(self):
        assert SoapVar.string("a", "1").children == ()


class TestToElement:
    def test_renders_nested_struct(self):
        var = SoapVar.struct(
            "studyRef",
            [
                SoapVar.string("identifier", "DEMO", NS),
                SoapVar.struct("siteRef", [SoapVar.string("identifier", "SITE", NS)], NS),
            ],
            NS,
        )

        element = var.to_element()

        assert element.tag == f"{{{NS}}}studyRef"
        assert element.findtext(f"{{{NS}}}identifier") == "DEMO"
        assert element.findtext(f"{{{NS}}}siteRef/{{{NS}}}identifier") == "SITE"

    def test_appends_to_parent(self):
        parent = ET.Element("parent")

        SoapVar.string("child", "x").to_element(parent)

        assert parent.findtext("child") == "x"

    def test_none_renders_empty_element(self):
        element = SoapVar.iso_date("endDate", None).to_element()

        assert element.text is None

    def test_date_value_is_iso_formatted(self):
        element = SoapVar.iso_date("startDate", date(2024, 3, 1)).to_element()

        assert element.text == "2024-03-01"

    def test_any_xml_embeds_elements(self):
        parent = ET.Element("request")
        var = SoapVar.any_xml('<?xml version="1.0"?><ODM><ClinicalData/></ODM>')

        var.to_element(parent)

        assert parent.find("ODM/ClinicalData") is not None
        assert parent.text is None

    def test_any_xml_copies_source_element(self):
        source = ET.Element("ODM")
        var = SoapVar.any_xml(source)
        source.set("changed", "yes")

        assert var.to_element().get("changed") is None


class TestFormatSimpleValue:
    def test_datetime_as_date(self):
        value = datetime(2024, 3, 1, 12, 30)
        assert format_simple_value(value, XsdType.DATE) == "2024-03-01"

    def test_string_date_passes_through(self):
        assert format_simple_value("2024-03-01", XsdType.DATE) == "2024-03-01"

    def test_none_is_empty(self):
        assert format_simple_value(None, XsdType.STRING) == ""


class TestParseXmlFragment:
    def test_strips_declaration(self):
        element = parse_xml_fragment("<?xml version='1.0'?>\n<ODM/>")
        assert element.tag == "ODM"

    @pytest.mark.parametrize("document", ["", "   ", "<?xml version='1.0'?>"])
    def test_empty_document_rejected(self, document: str):
        with pytest.raises(OdmDocumentError, match="empty"):
            parse_xml_fragment(document)

    def test_malformed_document_rejected(self):
        with pytest.raises(OdmDocumentError, match="well-formed"):
            parse_xml_fragment("<ODM><ClinicalData></ODM>")
