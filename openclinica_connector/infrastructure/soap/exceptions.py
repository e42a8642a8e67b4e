from ..io.exceptions import ConnectorInfrastructureError


class WebServiceError(ConnectorInfrastructureError):
    pass


class OdmDocumentError(WebServiceError):
    pass


class RemoteOperationFault(WebServiceError):
    """A web service call failed at the transport or on the server.

    Carries the server diagnostic and, when available, the raw request and
    response so callers can decide how to report or recover.
    """

    def __init__(
        self,
        operation: str,
        diagnostic: str,
        *,
        fault_code: str | None = None,
        status_code: int | None = None,
        last_request: str | None = None,
        last_response: str | None = None,
    ) -> None:
        super().__init__(f"{operation}: {diagnostic}")
        self.operation = operation
        self.diagnostic = diagnostic
        self.fault_code = fault_code
        self.status_code = status_code
        self.last_request = last_request
        self.last_response = last_response
