from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import TYPE_CHECKING, override

from rich.console import Console
from rich.markup import escape

from ...application.ports.services import LoggerPort

if TYPE_CHECKING:
    from ...domain.entities.odm import ClinicalData


class LogLevel(IntEnum):
    NORMAL = 0
    VERBOSE = 1
    DEBUG = 2


@dataclass(slots=True)
class LogContext:
    study_oid: str = ""
    operation: str = ""
    start_time: datetime = field(default_factory=datetime.now)

    def elapsed_ms(self) -> float:
        return (datetime.now() - self.start_time).total_seconds() * 1000


def _empty_stats() -> dict[str, int]:
    return {
        "requests_sent": 0,
        "responses_received": 0,
        "faults": 0,
        "items_built": 0,
        "warnings": 0,
        "errors": 0,
    }


class ConsoleLogger(LoggerPort):
    pass

    def __init__(self, console: Console | None = None, verbosity: int = 0) -> None:
        super().__init__()
        self.console = console or Console()
        self.verbosity = verbosity
        self._context: LogContext | None = None
        self._stats = _empty_stats()

    def set_context(self, **kwargs: str) -> None:
        if self._context is None:
            self._context = LogContext()
        for key, value in kwargs.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

    @override
    def info(self, message: str, *, level: int = LogLevel.NORMAL) -> None:
        if self.verbosity >= level:
            prefix = self._get_prefix()
            self.console.print(f"{prefix}{message}")

    @override
    def verbose(self, message: str) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            prefix = self._get_prefix()
            self.console.print(f"[dim]{prefix}{message}[/dim]")

    @override
    def debug(self, message: str) -> None:
        if self.verbosity >= LogLevel.DEBUG:
            prefix = self._get_prefix()
            self.console.print(f"[dim cyan]{prefix}{message}[/dim cyan]")

    @override
    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    @override
    def warning(self, message: str) -> None:
        self._stats["warnings"] += 1
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    @override
    def error(self, message: str) -> None:
        self._stats["errors"] += 1
        self.console.print(f"[red]✗[/red] {message}")

    @override
    def log_request(self, operation: str, url: str) -> None:
        self._stats["requests_sent"] += 1
        self.set_context(operation=operation)
        if self._context is not None:
            self._context.start_time = datetime.now()
        self.verbose(f"Calling {operation} at {url}")

    @override
    def log_response(self, operation: str, result: str | None) -> None:
        self._stats["responses_received"] += 1
        if result is None:
            self.debug(f"{operation} returned no result element")
        else:
            self.verbose(f"{operation} result: {result}")
        if self._context is not None and self.verbosity >= LogLevel.DEBUG:
            self.debug(f"{operation} took {self._context.elapsed_ms():.0f} ms")

    @override
    def log_fault(self, operation: str, error: Exception) -> None:
        self._stats["faults"] += 1
        self.error(f"{operation} failed: {error}")

    @override
    def log_odm_summary(self, clinical_data: ClinicalData) -> None:
        self.set_context(study_oid=clinical_data.study_oid)
        item_count = clinical_data.item_count()
        self._stats["items_built"] += item_count
        self.verbose(
            f"ODM for {clinical_data.study_oid}: "
            f"{len(clinical_data.subject_data)} subject(s), {item_count:,} item value(s)"
        )
        if self.verbosity >= LogLevel.DEBUG:
            for subject in clinical_data.subject_data:
                events = ", ".join(
                    f"{event.study_event_oid}[{event.study_event_repeat_key}]"
                    for event in subject.study_event_data
                )
                self.debug(f"  {subject.subject_key}: {events}")

    @override
    def log_final_stats(self) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            self.console.print()
            self.console.print("[dim]Session Statistics:[/dim]")
            self.console.print(
                f"[dim]  Requests sent: {self._stats['requests_sent']}[/dim]"
            )
            self.console.print(
                f"[dim]  Item values built: {self._stats['items_built']:,}[/dim]"
            )
            if self._stats["faults"] > 0:
                self.console.print(
                    f"[dim red]  Faults: {self._stats['faults']}[/dim red]"
                )
            if self._stats["warnings"] > 0:
                self.console.print(
                    f"[dim yellow]  Warnings: {self._stats['warnings']}[/dim yellow]"
                )
            if self._stats["errors"] > 0:
                self.console.print(
                    f"[dim red]  Errors: {self._stats['errors']}[/dim red]"
                )

    def get_stats(self) -> dict[str, int]:
        return self._stats.copy()

    def reset_stats(self) -> None:
        self._stats = _empty_stats()

    def _get_prefix(self) -> str:
        if self._context is None or self.verbosity < LogLevel.DEBUG:
            return ""
        parts = [
            part for part in (self._context.study_oid, self._context.operation) if part
        ]
        return escape(f"[{':'.join(parts)}] ") if parts else ""
