"""Use case for turning an item value table into an OpenClinica import."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..domain.services.clinical_data_builder import build_clinical_data
from .models import ImportDataResponse

if TYPE_CHECKING:
    from ..domain.entities.odm import ClinicalData
    from .models import ImportDataRequest
    from .ports.repositories import ItemRowRepositoryPort
    from .ports.services import LoggerPort, OdmWriterPort, WebServicePort


@dataclass(slots=True)
class ImportClinicalDataDependencies:
    logger: LoggerPort
    item_row_repository: ItemRowRepositoryPort
    odm_writer: OdmWriterPort
    web_service: WebServicePort | None = None


class ImportClinicalDataUseCase:
    """Build an ODM import from item rows and optionally submit it.

    The workflow:
    1. Read item rows through the repository port
    2. Upsert them into a ClinicalData tree
    3. Serialize the tree, and write it to disk when an output path is given
    4. Submit it to the data import service unless this is a dry run

    Failures are captured in the response instead of raised, so a caller can
    report them alongside whatever was produced before the failure.

    Example:
        >>> use_case = ImportClinicalDataUseCase(dependencies)
        >>> response = use_case.execute(
        ...     ImportDataRequest(input_path=Path("items.csv"), study_oid="S_DEMO")
        ... )
        >>> response.success
        True
    """

    def __init__(self, dependencies: ImportClinicalDataDependencies) -> None:
        super().__init__()
        self.logger = dependencies.logger
        self._item_row_repository = dependencies.item_row_repository
        self._odm_writer = dependencies.odm_writer
        self._web_service = dependencies.web_service

    def execute(self, request: ImportDataRequest) -> ImportDataResponse:
        response = ImportDataResponse(study_oid=request.study_oid)
        try:
            rows = self._item_row_repository.read(request.input_path, request.mapping)
            response.row_count = len(rows)
            self.logger.verbose(
                f"Loaded {len(rows):,} item rows from {request.input_path}"
            )

            clinical_data = build_clinical_data(
                rows, request.study_oid, request.metadata_version_oid
            )
            response.clinical_data = clinical_data
            response.subject_count = len(clinical_data.subject_data)
            response.item_count = clinical_data.item_count()
            self.logger.log_odm_summary(clinical_data)

            response.odm_xml = self._odm_writer.serialize(
                clinical_data, pretty=request.pretty
            )

            if request.output_path is not None:
                self._write_output(clinical_data, request, response)

            if request.dry_run:
                self.logger.info("Dry run: ODM document not submitted")
            else:
                self._submit(clinical_data, response)

            self.logger.log_final_stats()
            response.success = not response.has_errors

        except Exception as exc:
            response.success = False
            response.error = str(exc)
            self.logger.error(f"Clinical data import failed: {exc}")

        return response

    def _write_output(
        self,
        clinical_data: ClinicalData,
        request: ImportDataRequest,
        response: ImportDataResponse,
    ) -> None:
        output_path = request.output_path
        if output_path is None:
            return
        self._odm_writer.write(clinical_data, output_path, pretty=request.pretty)
        response.output_path = output_path
        self.logger.success(f"Wrote ODM document to {output_path}")

    def _submit(
        self, clinical_data: ClinicalData, response: ImportDataResponse
    ) -> None:
        if self._web_service is None:
            raise RuntimeError("Web service not injected")
        soap_response = self._web_service.import_clinical_data(clinical_data)
        response.submitted = True
        response.result = soap_response.result
        response.errors.extend(soap_response.errors)
        if soap_response.is_success:
            self.logger.success(
                f"Imported {response.item_count:,} item values "
                f"for {response.subject_count} subject(s)"
            )
        else:
            for message in soap_response.errors or [f"result={response.result!r}"]:
                self.logger.error(message)
            if not response.errors:
                response.errors.append(f"Import returned result={response.result!r}")
