from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path

    from ...domain.entities.odm import ClinicalData
    from ...infrastructure.soap.envelope import SoapResponse
    from ...infrastructure.soap.transport import TransportResponse


@runtime_checkable
class LoggerPort(Protocol):
    pass

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def debug(self, message: str) -> None: ...

    def verbose(self, message: str) -> None: ...

    def log_request(self, operation: str, url: str) -> None: ...

    def log_response(self, operation: str, result: str | None) -> None: ...

    def log_fault(self, operation: str, error: Exception) -> None: ...

    def log_odm_summary(self, clinical_data: ClinicalData) -> None: ...

    def log_final_stats(self) -> None: ...


@runtime_checkable
class SoapTransportPort(Protocol):
    pass

    def post(
        self, url: str, envelope: bytes, *, operation: str, soap_action: str = ""
    ) -> TransportResponse: ...


@runtime_checkable
class WebServicePort(Protocol):
    pass

    def import_clinical_data(self, clinical_data: ClinicalData) -> SoapResponse: ...


@runtime_checkable
class OdmWriterPort(Protocol):
    pass

    def serialize(self, clinical_data: ClinicalData, *, pretty: bool = False) -> str: ...

    def write(
        self, clinical_data: ClinicalData, output_path: Path, *, pretty: bool = False
    ) -> None: ...
