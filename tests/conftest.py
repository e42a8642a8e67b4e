from collections.abc import Callable
from dataclasses import dataclass, field
from xml.etree import ElementTree as ET

import pytest

from openclinica_connector.infrastructure.soap.transport import TransportResponse

_CONFIG_ENV_VARS = (
    "OPENCLINICA_WS_URL",
    "OPENCLINICA_USERNAME",
    "OPENCLINICA_PASSWORD",
    "OPENCLINICA_PASSWORD_HASH",
    "OPENCLINICA_TIMEOUT",
    "OPENCLINICA_VERIFY_TLS",
    "OPENCLINICA_METADATA_VERSION_OID",
)

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"


@pytest.fixture(autouse=True)
def _isolated_connector_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's OpenClinica settings out of the tests."""
    for name in _CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def soap_envelope(body: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<SOAP-ENV:Envelope xmlns:SOAP-ENV="{SOAP_ENV_NS}">'
        f"<SOAP-ENV:Header/><SOAP-ENV:Body>{body}</SOAP-ENV:Body>"
        "</SOAP-ENV:Envelope>"
    )


@dataclass
class RecordedRequest:
    url: str
    envelope: bytes
    operation: str

    @property
    def root(self) -> ET.Element:
        return ET.fromstring(self.envelope)


@dataclass
class FakeTransport:
    """Transport returning canned bodies and recording every request."""

    responses: list[TransportResponse] = field(default_factory=list)
    requests: list[RecordedRequest] = field(default_factory=list)

    def queue(self, body: str, *, status_code: int = 200) -> None:
        self.responses.append(
            TransportResponse(
                status_code=status_code,
                content_type="text/xml;charset=utf-8",
                text=soap_envelope(body),
            )
        )

    def queue_raw(self, text: str, *, status_code: int = 200) -> None:
        self.responses.append(
            TransportResponse(
                status_code=status_code, content_type="text/xml", text=text
            )
        )

    def post(
        self, url: str, envelope: bytes, *, operation: str, soap_action: str = ""
    ) -> TransportResponse:
        self.requests.append(RecordedRequest(url, envelope, operation))
        return self.responses.pop(0)

    @property
    def last_request(self) -> RecordedRequest:
        return self.requests[-1]


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def envelope_factory() -> Callable[[str], str]:
    return soap_envelope
