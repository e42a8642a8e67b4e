from __future__ import annotations

from typing import TYPE_CHECKING, override

from ...application.ports.services import LoggerPort

if TYPE_CHECKING:
    from ...domain.entities.odm import ClinicalData


class NullLogger(LoggerPort):
    pass

    @override
    def info(self, message: str) -> None:
        return

    @override
    def success(self, message: str) -> None:
        return

    @override
    def warning(self, message: str) -> None:
        return

    @override
    def error(self, message: str) -> None:
        return

    @override
    def debug(self, message: str) -> None:
        return

    @override
    def verbose(self, message: str) -> None:
        return

    @override
    def log_request(self, operation: str, url: str) -> None:
        return

    @override
    def log_response(self, operation: str, result: str | None) -> None:
        return

    @override
    def log_fault(self, operation: str, error: Exception) -> None:
        return

    @override
    def log_odm_summary(self, clinical_data: ClinicalData) -> None:
        return

    @override
    def log_final_stats(self) -> None:
        return
