"""Unit tests for DependencyContainer wiring."""

from unittest.mock import Mock

import pytest

from openclinica_connector.application.import_use_case import (
    ImportClinicalDataUseCase,
)
from openclinica_connector.config import ConnectorConfig
from openclinica_connector.infrastructure.container import (
    DependencyContainer,
    create_default_container,
)
from openclinica_connector.infrastructure.io.item_row_reader import ItemRowReader
from openclinica_connector.infrastructure.io.odm_xml.writer import OdmXmlWriter
from openclinica_connector.infrastructure.logging.console_logger import ConsoleLogger
from openclinica_connector.infrastructure.logging.null_logger import NullLogger
from openclinica_connector.infrastructure.soap.exceptions import WebServiceError
from openclinica_connector.infrastructure.soap.transport import HttpSoapTransport

CONFIG = ConnectorConfig(
    base_url="https://oc.example.org/OpenClinica-ws",
    username="alice",
    password_hash="5baa61e4c9b93f3f0682250b6cf8331b7ee68fd8",
    timeout=12.5,
    verify_tls=False,
)


class TestDependencyContainer:
    def test_logger_is_singleton(self):
        container = DependencyContainer(verbose=2)

        logger = container.create_logger()

        assert isinstance(logger, ConsoleLogger)
        assert logger.verbosity == 2
        assert container.create_logger() is logger

    def test_null_logger_option(self):
        container = DependencyContainer(use_null_logger=True)

        assert isinstance(container.create_logger(), NullLogger)

    def test_creates_io_adapters(self):
        container = DependencyContainer()

        assert isinstance(container.create_item_row_repository(), ItemRowReader)
        assert isinstance(container.create_odm_writer(), OdmXmlWriter)

    def test_transport_uses_config(self):
        container = DependencyContainer(config=CONFIG)

        transport = container.create_transport()

        assert isinstance(transport, HttpSoapTransport)
        assert transport.timeout == 12.5
        assert transport.verify_tls is False

    def test_web_service_requires_credentials(self):
        container = DependencyContainer()

        with pytest.raises(WebServiceError, match="not configured"):
            container.create_web_service()

    def test_web_service_uses_overridden_transport(self, fake_transport):
        container = DependencyContainer(config=CONFIG, use_null_logger=True)
        container.override_transport(fake_transport)
        fake_transport.queue(
            '<listAllResponse xmlns="http://openclinica.org/ws/study/v1">'
            "<result>Success</result></listAllResponse>"
        )

        web_service = container.create_web_service()
        response = web_service.study_list_all()

        assert response.is_success
        assert web_service.username == "alice"
        assert container.create_web_service() is web_service
        assert fake_transport.last_request.url.endswith("/ws/study/v1")

    def test_override_transport_rebuilds_web_service(self, fake_transport):
        container = DependencyContainer(config=CONFIG, use_null_logger=True)
        first = container.create_web_service()

        container.override_transport(fake_transport)

        assert container.create_web_service() is not first

    def test_dry_run_use_case_needs_no_credentials(self):
        container = DependencyContainer(use_null_logger=True)

        use_case = container.create_import_use_case(dry_run=True)

        assert isinstance(use_case, ImportClinicalDataUseCase)
        assert use_case._web_service is None

    def test_submitting_use_case_requires_credentials(self):
        container = DependencyContainer(use_null_logger=True)

        with pytest.raises(WebServiceError):
            container.create_import_use_case()

    def test_override_logger_and_repository(self):
        container = DependencyContainer()
        logger = NullLogger()
        repository = Mock()

        container.override_logger(logger)
        container.override_item_row_repository(repository)

        assert container.create_logger() is logger
        assert container.create_item_row_repository() is repository

    def test_reset_singletons(self):
        container = DependencyContainer()
        logger = container.create_logger()

        container.reset_singletons()

        assert container.create_logger() is not logger


def test_create_default_container():
    container = create_default_container(config=CONFIG, verbose=1)

    assert container.config is CONFIG
    assert container.verbose == 1
