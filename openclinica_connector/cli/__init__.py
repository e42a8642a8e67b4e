from pathlib import Path

import click

from .commands.data import (
    build_odm_command,
    import_data_command,
    mapping_template_command,
)
from .commands.events import schedule_event_command
from .commands.study import (
    event_definitions_command,
    metadata_command,
    studies_command,
)
from .commands.subjects import (
    create_subject_command,
    is_subject_command,
    subjects_command,
)
from .helpers import CliState


@click.group()
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to an openclinica_connector.toml config file "
    "(default: ./openclinica_connector.toml)",
)
@click.option(
    "-v", "--verbose", count=True, help="Increase verbosity level (e.g., -v, -vv)"
)
@click.pass_context
def app(ctx: click.Context, config_file: Path | None, verbose: int) -> None:
    """Talk to the OpenClinica 3.x SOAP web services."""
    try:
        ctx.obj = CliState.load(config_file, verbose)
    except ValueError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}") from exc


app.add_command(studies_command, name="studies")
app.add_command(metadata_command, name="metadata")
app.add_command(event_definitions_command, name="event-definitions")
app.add_command(subjects_command, name="subjects")
app.add_command(is_subject_command, name="is-subject")
app.add_command(create_subject_command, name="create-subject")
app.add_command(schedule_event_command, name="schedule-event")
app.add_command(build_odm_command, name="build-odm")
app.add_command(import_data_command, name="import-data")
app.add_command(mapping_template_command, name="mapping-template")

__all__ = ["app"]
