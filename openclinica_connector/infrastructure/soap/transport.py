"""HTTP transport for SOAP requests, built on requests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import override

import requests

from ...application.ports.services import SoapTransportPort
from ...constants import Defaults
from .exceptions import RemoteOperationFault

SOAP_CONTENT_TYPE = "text/xml; charset=utf-8"


@dataclass(frozen=True, slots=True)
class TransportResponse:
    status_code: int
    content_type: str
    text: str


class HttpSoapTransport(SoapTransportPort):
    """POST SOAP envelopes over a shared requests session.

    No retries are attempted; a failed request surfaces as a
    RemoteOperationFault for the calling operation.
    """

    def __init__(
        self,
        *,
        timeout: float | None = Defaults.TIMEOUT_SECONDS,
        verify_tls: bool = Defaults.VERIFY_TLS,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__()
        self.timeout = timeout
        self.verify_tls = verify_tls
        self._session = session or requests.Session()

    @override
    def post(
        self, url: str, envelope: bytes, *, operation: str, soap_action: str = ""
    ) -> TransportResponse:
        headers = {
            "Content-Type": SOAP_CONTENT_TYPE,
            "Accept": "text/xml, multipart/related",
            "SOAPAction": f'"{soap_action}"',
        }
        try:
            response = self._session.post(
                url,
                data=envelope,
                headers=headers,
                timeout=self.timeout,
                verify=self.verify_tls,
            )
        except requests.RequestException as exc:
            raise RemoteOperationFault(
                operation,
                f"Request to {url} failed: {exc}",
                last_request=envelope.decode("utf-8", errors="replace"),
            ) from exc
        return TransportResponse(
            status_code=response.status_code,
            content_type=response.headers.get("Content-Type", ""),
            text=_decode(response),
        )

    def close(self) -> None:
        self._session.close()


def _decode(response: requests.Response) -> str:
    # MTOM responses are multipart without a charset; the envelope part is utf-8.
    if response.encoding is None:
        return response.content.decode("utf-8", errors="replace")
    return response.text
