"""SOAP 1.1 envelope construction and response parsing."""

from __future__ import annotations

from dataclasses import dataclass, field
import re
from typing import TYPE_CHECKING
from xml.etree import ElementTree as ET

from ...constants import Namespaces, ResultCodes, Services
from ..io.xml_utils import local_name, tag, to_utf8_string
from .exceptions import RemoteOperationFault

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ...constants import ServiceDefinition
    from .security import UsernameToken
    from .soap_var import SoapVar

SOAP_ENV_NS = Namespaces.SOAP_ENV

ET.register_namespace("SOAP-ENV", SOAP_ENV_NS)
ET.register_namespace("beans", Namespaces.OC_BEANS)
for service_definition in Services.ALL:
    ET.register_namespace(service_definition.prefix, service_definition.namespace)

_ENVELOPE_START = re.compile(r"<(?:[A-Za-z_][\w.-]*:)?Envelope[\s>/]")
_ENVELOPE_END = re.compile(r"</(?:[A-Za-z_][\w.-]*:)?Envelope\s*>")


def build_envelope(
    service: ServiceDefinition,
    operation: str,
    payload: Sequence[SoapVar],
    *,
    security: UsernameToken | None = None,
) -> ET.Element:
    """Build the request envelope for one operation.

    The body holds a single ``{operation}Request`` element in the service
    namespace, wrapping the rendered payload.
    """
    envelope = ET.Element(tag(SOAP_ENV_NS, "Envelope"))
    header = ET.SubElement(envelope, tag(SOAP_ENV_NS, "Header"))
    if security is not None:
        security.to_element(header)
    body = ET.SubElement(envelope, tag(SOAP_ENV_NS, "Body"))
    request = ET.SubElement(body, tag(service.namespace, f"{operation}Request"))
    for var in payload:
        var.to_element(request)
    return envelope


def envelope_to_bytes(envelope: ET.Element) -> bytes:
    return to_utf8_string(envelope, xml_declaration=True).encode("utf-8")


def extract_envelope(raw: str) -> str:
    """Cut the SOAP envelope out of a response body.

    MTOM/XOP responses wrap the envelope in a multipart body. Anything outside
    the outermost Envelope element, including an XML declaration, is dropped.
    """
    start = _ENVELOPE_START.search(raw)
    if start is None:
        return raw.strip()
    ends = list(_ENVELOPE_END.finditer(raw, start.start()))
    if not ends:
        return raw[start.start() :].strip()
    return raw[start.start() : ends[-1].end()]


@dataclass(slots=True)
class SoapResponse:
    """Parsed response to one web service call."""

    operation: str
    service: ServiceDefinition
    envelope: ET.Element
    raw: str
    namespaces: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        defaults = {
            "v1": self.service.namespace,
            "beans": Namespaces.OC_BEANS,
            "odm": Namespaces.ODM,
            "OpenClinica": Namespaces.OPENCLINICA,
            "SOAP-ENV": SOAP_ENV_NS,
        }
        defaults.update(self.namespaces)
        self.namespaces = defaults

    @property
    def body(self) -> ET.Element | None:
        return self.envelope.find(tag(SOAP_ENV_NS, "Body"))

    @property
    def payload(self) -> ET.Element | None:
        body = self.body
        if body is None or len(body) == 0:
            return None
        return body[0]

    @property
    def result(self) -> str | None:
        payload = self.payload
        if payload is None:
            return None
        for child in payload:
            if local_name(child.tag) == "result":
                return (child.text or "").strip()
        return None

    @property
    def errors(self) -> list[str]:
        payload = self.payload
        if payload is None:
            return []
        return [
            (child.text or "").strip()
            for child in payload.iter()
            if local_name(child.tag) == "error" and (child.text or "").strip()
        ]

    @property
    def is_success(self) -> bool:
        return (self.result or "").lower() == ResultCodes.SUCCESS

    def find(self, path: str) -> ET.Element | None:
        payload = self.payload
        if payload is None:
            return None
        return payload.find(path, self.namespaces)

    def findall(self, path: str) -> list[ET.Element]:
        payload = self.payload
        if payload is None:
            return []
        return payload.findall(path, self.namespaces)

    def findtext(self, path: str, default: str | None = None) -> str | None:
        payload = self.payload
        if payload is None:
            return default
        return payload.findtext(path, default, self.namespaces)

    def raise_for_result(self) -> None:
        """Raise RemoteOperationFault unless the service reported success."""
        if self.is_success:
            return
        diagnostic = "; ".join(self.errors) or f"result={self.result!r}"
        raise RemoteOperationFault(
            self.operation, diagnostic, last_response=self.raw
        )


def parse_response(
    service: ServiceDefinition,
    operation: str,
    raw: str,
    *,
    status_code: int | None = None,
    last_request: str | None = None,
) -> SoapResponse:
    """Parse a response body, raising RemoteOperationFault on SOAP faults.

    Raises:
        RemoteOperationFault: If the body is not a SOAP envelope, holds a
            Fault, or came with a non-2xx status
    """
    text = extract_envelope(raw)
    try:
        envelope = ET.fromstring(text)
    except ET.ParseError as exc:
        diagnostic = f"Response is not well-formed XML: {exc}"
        if not _is_ok(status_code):
            diagnostic = f"HTTP {status_code}: {diagnostic}"
        raise RemoteOperationFault(
            operation,
            diagnostic,
            status_code=status_code,
            last_request=last_request,
            last_response=raw,
        ) from exc

    fault = envelope.find(f"{tag(SOAP_ENV_NS, 'Body')}/{tag(SOAP_ENV_NS, 'Fault')}")
    if fault is not None:
        raise RemoteOperationFault(
            operation,
            (fault.findtext("faultstring") or "SOAP fault").strip(),
            fault_code=(fault.findtext("faultcode") or "").strip() or None,
            status_code=status_code,
            last_request=last_request,
            last_response=raw,
        )
    if local_name(envelope.tag) != "Envelope":
        raise RemoteOperationFault(
            operation,
            f"Unexpected response root element {envelope.tag!r}",
            status_code=status_code,
            last_request=last_request,
            last_response=raw,
        )
    if not _is_ok(status_code):
        raise RemoteOperationFault(
            operation,
            f"HTTP {status_code}",
            status_code=status_code,
            last_request=last_request,
            last_response=raw,
        )
    return SoapResponse(
        operation=operation, service=service, envelope=envelope, raw=text
    )


def _is_ok(status_code: int | None) -> bool:
    return status_code is None or 200 <= status_code < 300
