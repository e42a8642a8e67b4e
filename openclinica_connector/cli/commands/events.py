import click

from ..helpers import CliState, console, pass_state, web_service_errors
from ..presenters.response import ResponsePresenter


@click.command()
@click.argument("protocol_id")
@click.argument("study_subject_id")
@click.argument("event_oid")
@click.option("--site", "site_id", default=None, help="Unique protocol ID of the site")
@click.option("--location", default="", help="Event location")
@click.option("--start-date", required=True, help="Start date (YYYY-MM-DD)")
@click.option("--start-time", default=None, help="Start time (HH:MM)")
@click.option("--end-date", default=None, help="End date (YYYY-MM-DD)")
@click.option("--end-time", default=None, help="End time (HH:MM)")
@pass_state
def schedule_event_command(
    state: CliState,
    protocol_id: str,
    study_subject_id: str,
    event_oid: str,
    site_id: str | None,
    location: str,
    start_date: str,
    start_time: str | None,
    end_date: str | None,
    end_time: str | None,
) -> None:
    """Schedule EVENT_OID for an existing study subject."""
    with web_service_errors(state):
        web_service = state.create_container().create_web_service()
        response = web_service.event_schedule(
            study_subject_id,
            event_oid,
            location,
            start_date,
            start_time,
            end_date,
            end_time,
            protocol_id,
            site_id,
        )
    ResponsePresenter(console, verbose=state.verbose).present_fields(
        response, ["studySubjectOID", "eventDefinitionOID", "studyEventOrdinal"]
    )
    if not response.is_success:
        raise click.ClickException(f"Could not schedule {event_oid}")
