"""Study level queries: studies, metadata and event definitions."""

from pathlib import Path

import click

from ..helpers import CliState, console, pass_state, web_service_errors
from ..presenters.response import ResponsePresenter


@click.command()
@pass_state
def studies_command(state: CliState) -> None:
    """List the studies and sites the configured user can access."""
    with web_service_errors(state):
        web_service = state.create_container().create_web_service()
        response = web_service.study_list_all()
    ResponsePresenter(console, verbose=state.verbose).present_studies(response)


@click.command()
@click.argument("protocol_id")
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the ODM metadata document to this file",
)
@pass_state
def metadata_command(
    state: CliState, protocol_id: str, output_path: Path | None
) -> None:
    """Fetch the ODM metadata of a study or site.

    PROTOCOL_ID is the unique protocol ID of the study (or site).
    """
    with web_service_errors(state):
        web_service = state.create_container().create_web_service()
        response = web_service.study_get_metadata(protocol_id)
    odm = ResponsePresenter(console, verbose=state.verbose).present_metadata(
        response
    )
    if odm is None:
        if response.is_success:
            console.print("[yellow]⚠[/yellow] Response holds no ODM metadata")
        return
    if output_path is None:
        console.print(odm, markup=False, highlight=False)
    else:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(odm, encoding="utf-8")
        console.print(f"[green]✓[/green] Wrote metadata to {output_path}")


@click.command()
@click.argument("protocol_id")
@pass_state
def event_definitions_command(state: CliState, protocol_id: str) -> None:
    """List the study event definitions of a study."""
    with web_service_errors(state):
        web_service = state.create_container().create_web_service()
        response = web_service.study_event_definition_list_all(protocol_id)
    ResponsePresenter(console, verbose=state.verbose).present_event_definitions(
        response
    )
