"""Shared state and error handling for CLI commands."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

import click
from rich.console import Console

from ..config import ConfigLoader
from ..infrastructure.container import DependencyContainer
from ..infrastructure.soap.exceptions import RemoteOperationFault, WebServiceError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from ..config import ConnectorConfig

console = Console()


@dataclass(frozen=True, slots=True)
class CliState:
    config: ConnectorConfig
    verbose: int = 0

    @classmethod
    def load(cls, config_file: Path | None, verbose: int) -> CliState:
        return cls(config=ConfigLoader.load(config_file=config_file), verbose=verbose)

    def create_container(self) -> DependencyContainer:
        return DependencyContainer(
            config=self.config, verbose=self.verbose, console=console
        )


pass_state = click.make_pass_decorator(CliState)


@contextmanager
def web_service_errors(state: CliState) -> Iterator[None]:
    """Report web service failures and exit through click."""
    try:
        yield
    except RemoteOperationFault as exc:
        if exc.fault_code:
            console.print(f"[red]Fault code:[/red] {exc.fault_code}")
        if state.verbose >= 2 and exc.last_response:
            console.print("[dim]Last response:[/dim]")
            console.print(exc.last_response, markup=False, highlight=False)
        raise click.ClickException(str(exc)) from exc
    except WebServiceError as exc:
        raise click.ClickException(str(exc)) from exc
