"""WS-Security UsernameToken header sent with every OpenClinica call."""

from dataclasses import dataclass
from xml.etree import ElementTree as ET

from ...constants import Namespaces
from ..io.xml_utils import attr, tag

WSSE_NS = Namespaces.WSSE
SOAP_ENV_NS = Namespaces.SOAP_ENV

ET.register_namespace("wsse", WSSE_NS)


@dataclass(frozen=True, slots=True)
class UsernameToken:
    """Credentials for the security header.

    ``password_hash`` is the SHA-1 hex digest of the account password, which
    OpenClinica compares against its stored hash.
    """

    username: str
    password_hash: str

    def to_element(self, parent: ET.Element | None = None) -> ET.Element:
        if parent is None:
            security = ET.Element(tag(WSSE_NS, "Security"))
        else:
            security = ET.SubElement(parent, tag(WSSE_NS, "Security"))
        security.set(attr(SOAP_ENV_NS, "mustUnderstand"), "1")
        token = ET.SubElement(security, tag(WSSE_NS, "UsernameToken"))
        ET.SubElement(token, tag(WSSE_NS, "Username")).text = self.username
        password = ET.SubElement(
            token,
            tag(WSSE_NS, "Password"),
            attrib={"Type": Namespaces.WSSE_PASSWORD_TEXT},
        )
        password.text = self.password_hash
        return security

    def __repr__(self) -> str:
        return f"UsernameToken(username={self.username!r}, password_hash='***')"
