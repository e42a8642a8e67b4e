"""SOAP client for the OpenClinica 3.x web services.

- soap_var: typed request values
- payloads: request bodies for each operation
- security: WS-Security UsernameToken header
- envelope: envelope construction and response parsing
- transport: HTTP transport
- web_service: the client
"""

from .envelope import SoapResponse, build_envelope, parse_response
from .exceptions import OdmDocumentError, RemoteOperationFault, WebServiceError
from .security import UsernameToken
from .soap_var import SoapVar, XsdType
from .transport import HttpSoapTransport, TransportResponse
from .web_service import OpenClinicaWebService

__all__ = [
    "HttpSoapTransport",
    "OdmDocumentError",
    "OpenClinicaWebService",
    "RemoteOperationFault",
    "SoapResponse",
    "SoapVar",
    "TransportResponse",
    "UsernameToken",
    "WebServiceError",
    "XsdType",
    "build_envelope",
    "parse_response",
]
