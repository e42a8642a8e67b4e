"""ODM building and clinical data import commands.

mapping-template writes the column mapping file that --mapping reads. The
other commands are thin adapters over ImportClinicalDataUseCase:
1. Parse CLI arguments into an ImportDataRequest
2. Run the use case
3. Present the response
"""

from pathlib import Path

import click

from ...application.models import ImportDataRequest
from ...domain.entities.item_rows import ItemColumnMapping
from ...infrastructure.io.exceptions import DataSourceError
from ...infrastructure.repositories.mapping_config_repository import (
    load_item_column_mapping,
    save_item_column_mapping,
)
from ...infrastructure.soap.payloads import odm_document
from ..helpers import CliState, console, pass_state, web_service_errors
from ..presenters.import_summary import ImportSummaryPresenter
from ..presenters.response import ResponsePresenter

mapping_option = click.option(
    "--mapping",
    "mapping_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file naming the CSV columns (default: SubjectKey, StudyEventOID, ...)",
)
metadata_version_option = click.option(
    "--metadata-version",
    "metadata_version_oid",
    default=None,
    help="MetaDataVersionOID (default: from configuration, usually 1)",
)


def _build_request(
    state: CliState,
    input_path: Path,
    *,
    study_oid: str,
    metadata_version_oid: str | None,
    mapping_file: Path | None,
    output_path: Path | None,
    dry_run: bool,
    pretty: bool = False,
) -> ImportDataRequest:
    try:
        mapping = (
            load_item_column_mapping(mapping_file) if mapping_file is not None else None
        )
    except DataSourceError as exc:
        raise click.ClickException(str(exc)) from exc
    return ImportDataRequest(
        input_path=input_path,
        study_oid=study_oid,
        metadata_version_oid=metadata_version_oid
        or state.config.metadata_version_oid,
        mapping=mapping,
        output_path=output_path,
        dry_run=dry_run,
        pretty=pretty,
    )


@click.command()
@click.argument(
    "csv_file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option("--study-oid", required=True, help="OID of the study, e.g. S_DEMO")
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the ODM document to this file instead of the console",
)
@click.option("--pretty", is_flag=True, help="Indent the ODM document")
@metadata_version_option
@mapping_option
@pass_state
def build_odm_command(
    state: CliState,
    csv_file: Path,
    study_oid: str,
    output_path: Path | None,
    pretty: bool,
    metadata_version_oid: str | None,
    mapping_file: Path | None,
) -> None:
    """Build an ODM import document from a CSV of item values.

    Each CSV row holds one item value and the key path it belongs to:

    \b
        SubjectKey,StudyEventOID,StudyEventRepeatKey,FormOID,FormStatus,
        ItemGroupOID,ItemGroupRepeatKey,ItemOID,Value

    Repeat keys default to 1 and FormStatus is optional.
    """
    request = _build_request(
        state,
        csv_file,
        study_oid=study_oid,
        metadata_version_oid=metadata_version_oid,
        mapping_file=mapping_file,
        output_path=output_path,
        dry_run=True,
        pretty=pretty,
    )
    container = state.create_container()
    use_case = container.create_import_use_case(dry_run=True)
    response = use_case.execute(request)

    if not response.success:
        raise click.ClickException(response.error or "Failed to build ODM document")
    if output_path is None and response.odm_xml is not None:
        click.echo(response.odm_xml)
    else:
        ImportSummaryPresenter(console).present(response, dry_run=True)


@click.command()
@click.argument(
    "csv_file",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--odm",
    "odm_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Submit an existing ODM document instead of building one from CSV",
)
@click.option("--study-oid", default=None, help="OID of the study (CSV input)")
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write the generated ODM document to this file",
)
@click.option(
    "--dry-run", is_flag=True, help="Build and validate without submitting"
)
@metadata_version_option
@mapping_option
@pass_state
def import_data_command(
    state: CliState,
    csv_file: Path | None,
    odm_file: Path | None,
    study_oid: str | None,
    output_path: Path | None,
    dry_run: bool,
    metadata_version_oid: str | None,
    mapping_file: Path | None,
) -> None:
    """Import clinical data into OpenClinica.

    Subjects and events must already exist; the import only fills in item
    values. Give either CSV_FILE with --study-oid, or --odm FILE.
    """
    if (csv_file is None) == (odm_file is None):
        raise click.UsageError("Give exactly one of CSV_FILE or --odm")

    if odm_file is not None:
        _import_odm_file(state, odm_file, dry_run=dry_run)
        return

    if csv_file is None or not study_oid:
        raise click.UsageError("--study-oid is required with CSV_FILE")
    request = _build_request(
        state,
        csv_file,
        study_oid=study_oid,
        metadata_version_oid=metadata_version_oid,
        mapping_file=mapping_file,
        output_path=output_path,
        dry_run=dry_run,
    )
    with web_service_errors(state):
        use_case = state.create_container().create_import_use_case(dry_run=dry_run)
    response = use_case.execute(request)
    ImportSummaryPresenter(console).present(response, dry_run=dry_run)
    if not response.success:
        raise click.ClickException("Clinical data import completed with errors")


def _import_odm_file(state: CliState, odm_file: Path, *, dry_run: bool) -> None:
    document = odm_file.read_text(encoding="utf-8")
    with web_service_errors(state):
        # Parsing up front rejects malformed documents before any request.
        odm_document(document)
        if dry_run:
            console.print(f"[green]✓[/green] {odm_file} is well-formed; not submitted")
            return
        web_service = state.create_container().create_web_service()
        response = web_service.data_import(document)
    ResponsePresenter(console, verbose=state.verbose).present_result(response)
    if not response.is_success:
        raise click.ClickException(f"Import of {odm_file} failed")


@click.command()
@click.argument("output_path", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def mapping_template_command(output_path: Path, force: bool) -> None:
    """Write the default column mapping as a starting point for --mapping.

    Edit the column names to match the CSV headers; keys left at their
    default can be removed.
    """
    if output_path.exists() and not force:
        raise click.ClickException(
            f"{output_path} already exists; use --force to overwrite it"
        )
    try:
        save_item_column_mapping(ItemColumnMapping(), output_path)
    except DataSourceError as exc:
        raise click.ClickException(str(exc)) from exc
    console.print(f"[green]✓[/green] Column mapping written to {output_path}")
