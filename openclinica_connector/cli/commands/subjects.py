"""Study subject commands."""

import click

from ..helpers import CliState, console, pass_state, web_service_errors
from ..presenters.response import ResponsePresenter

site_option = click.option(
    "--site",
    "site_id",
    default=None,
    help="Unique protocol ID of the site (default: study level)",
)


@click.command()
@click.argument("protocol_id")
@site_option
@pass_state
def subjects_command(state: CliState, protocol_id: str, site_id: str | None) -> None:
    """List the subjects of a study or site.

    OpenClinica rejects this call when any subject in the instance lacks a
    person ID, birth date or sex.
    """
    with web_service_errors(state):
        web_service = state.create_container().create_web_service()
        response = web_service.subject_list_all_by_study(protocol_id, site_id)
    ResponsePresenter(console, verbose=state.verbose).present_subjects(response)


@click.command()
@click.argument("protocol_id")
@click.argument("study_subject_id")
@site_option
@pass_state
def is_subject_command(
    state: CliState, protocol_id: str, study_subject_id: str, site_id: str | None
) -> None:
    """Check whether STUDY_SUBJECT_ID exists in a study or site."""
    with web_service_errors(state):
        web_service = state.create_container().create_web_service()
        response = web_service.subject_is_study_subject(
            protocol_id, site_id, study_subject_id
        )
    ResponsePresenter(console, verbose=state.verbose).present_fields(
        response, ["studySubjectOID"]
    )


@click.command()
@click.argument("protocol_id")
@click.argument("study_subject_id")
@site_option
@click.option("--secondary-label", default="", help="Secondary subject label")
@click.option(
    "--enrollment-date", required=True, help="Enrollment date (YYYY-MM-DD)"
)
@click.option("--person-id", default="", help="Person ID")
@click.option(
    "--gender",
    type=click.Choice(["m", "f"], case_sensitive=False),
    required=True,
    help="Sex of the subject",
)
@click.option(
    "--date-of-birth",
    default=None,
    help="Date of birth (YYYY-MM-DD), or a four digit year of birth",
)
@pass_state
def create_subject_command(
    state: CliState,
    protocol_id: str,
    study_subject_id: str,
    site_id: str | None,
    secondary_label: str,
    enrollment_date: str,
    person_id: str,
    gender: str,
    date_of_birth: str | None,
) -> None:
    """Create STUDY_SUBJECT_ID in a study, or in a site with --site."""
    with web_service_errors(state):
        web_service = state.create_container().create_web_service()
        response = web_service.subject_create(
            protocol_id,
            site_id,
            study_subject_id,
            secondary_label,
            enrollment_date,
            person_id,
            gender.lower(),
            date_of_birth,
        )
    ResponsePresenter(console, verbose=state.verbose).present_fields(
        response, ["label"]
    )
    if not response.is_success:
        raise click.ClickException(f"Could not create subject {study_subject_id}")
