import re
from xml.etree import ElementTree as ET


def tag(namespace: str, name: str) -> str:
    return f"{{{namespace}}}{name}"


def attr(namespace: str, name: str) -> str:
    return f"{{{namespace}}}{name}"


def local_name(qualified: str) -> str:
    return qualified.rsplit("}", 1)[-1]


def strip_xml_declaration(xml_text: str) -> str:
    text = xml_text.lstrip()
    if text.startswith("<?xml"):
        end = text.find("?>")
        if end != -1:
            return text[end + 2 :].lstrip()
    return text


def to_utf8_string(element: ET.Element, *, xml_declaration: bool) -> str:
    """Serialize with a fixed utf-8 declaration regardless of the locale."""
    if xml_declaration:
        return ET.tostring(element, encoding="utf-8", xml_declaration=True).decode(
            "utf-8"
        )
    return ET.tostring(element, encoding="unicode")


# Anything outside the XML 1.0 Char production, lone surrogates included.
_INVALID_XML_CHAR = re.compile(
    r"[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


def find_invalid_xml_char(text: str) -> str | None:
    match = _INVALID_XML_CHAR.search(text)
    return match.group() if match else None
