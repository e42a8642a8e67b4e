from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console

from ..application.import_use_case import (
    ImportClinicalDataDependencies,
    ImportClinicalDataUseCase,
)
from ..config import ConnectorConfig
from .io.csv_reader import CSVReader
from .io.item_row_reader import ItemRowReader
from .io.odm_xml.writer import OdmXmlWriter
from .logging.console_logger import ConsoleLogger
from .logging.null_logger import NullLogger
from .soap.exceptions import WebServiceError
from .soap.transport import HttpSoapTransport
from .soap.web_service import OpenClinicaWebService

if TYPE_CHECKING:
    from ..application.ports.repositories import ItemRowRepositoryPort
    from ..application.ports.services import (
        LoggerPort,
        OdmWriterPort,
        SoapTransportPort,
    )


class DependencyContainer:
    pass

    def __init__(
        self,
        config: ConnectorConfig | None = None,
        verbose: int = 0,
        console: Console | None = None,
        use_null_logger: bool = False,
    ) -> None:
        super().__init__()
        self.config = config or ConnectorConfig()
        self.verbose = verbose
        self.console = console or Console()
        self.use_null_logger = use_null_logger
        self._logger_instance: LoggerPort | None = None
        self._csv_reader_instance: CSVReader | None = None
        self._item_row_repository_instance: ItemRowRepositoryPort | None = None
        self._odm_writer_instance: OdmWriterPort | None = None
        self._transport_instance: SoapTransportPort | None = None
        self._web_service_instance: OpenClinicaWebService | None = None

    def create_logger(self) -> LoggerPort:
        if self._logger_instance is None:
            if self.use_null_logger:
                self._logger_instance = NullLogger()
            else:
                self._logger_instance = ConsoleLogger(
                    console=self.console, verbosity=self.verbose
                )
        return self._logger_instance

    def create_csv_reader(self) -> CSVReader:
        if self._csv_reader_instance is None:
            self._csv_reader_instance = CSVReader()
        return self._csv_reader_instance

    def create_item_row_repository(self) -> ItemRowRepositoryPort:
        if self._item_row_repository_instance is None:
            self._item_row_repository_instance = ItemRowReader(
                csv_reader=self.create_csv_reader()
            )
        return self._item_row_repository_instance

    def create_odm_writer(self) -> OdmWriterPort:
        if self._odm_writer_instance is None:
            self._odm_writer_instance = OdmXmlWriter()
        return self._odm_writer_instance

    def create_transport(self) -> SoapTransportPort:
        if self._transport_instance is None:
            self._transport_instance = HttpSoapTransport(
                timeout=self.config.timeout, verify_tls=self.config.verify_tls
            )
        return self._transport_instance

    def create_web_service(self) -> OpenClinicaWebService:
        """Return the web service client for the configured server.

        Raises:
            WebServiceError: If the server URL or credentials are not configured
        """
        if self._web_service_instance is None:
            if not self.config.has_credentials:
                raise WebServiceError(
                    "OpenClinica web service is not configured; set "
                    "OPENCLINICA_WS_URL, OPENCLINICA_USERNAME and "
                    "OPENCLINICA_PASSWORD or add a [server] table to the config file"
                )
            self._web_service_instance = OpenClinicaWebService.from_config(
                self.config,
                transport=self.create_transport(),
                logger=self.create_logger(),
            )
        return self._web_service_instance

    def create_import_use_case(
        self, *, dry_run: bool = False
    ) -> ImportClinicalDataUseCase:
        dependencies = ImportClinicalDataDependencies(
            logger=self.create_logger(),
            item_row_repository=self.create_item_row_repository(),
            odm_writer=self.create_odm_writer(),
            web_service=None if dry_run else self.create_web_service(),
        )
        return ImportClinicalDataUseCase(dependencies)

    def reset_singletons(self) -> None:
        self._logger_instance = None
        self._csv_reader_instance = None
        self._item_row_repository_instance = None
        self._odm_writer_instance = None
        self._transport_instance = None
        self._web_service_instance = None

    def override_logger(self, logger: LoggerPort) -> None:
        self._logger_instance = logger

    def override_transport(self, transport: SoapTransportPort) -> None:
        self._transport_instance = transport
        self._web_service_instance = None

    def override_item_row_repository(self, repository: ItemRowRepositoryPort) -> None:
        self._item_row_repository_instance = repository


def create_default_container(
    config: ConnectorConfig | None = None, verbose: int = 0
) -> DependencyContainer:
    return DependencyContainer(config=config, verbose=verbose)
