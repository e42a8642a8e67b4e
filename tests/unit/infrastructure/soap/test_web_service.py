"""Unit tests for OpenClinicaWebService against a fake transport."""

from unittest.mock import Mock

import pytest

from openclinica_connector.application.ports.services import WebServicePort
from openclinica_connector.config import ConnectorConfig
from openclinica_connector.constants import Namespaces, Services
from openclinica_connector.domain.entities.odm import ClinicalData
from openclinica_connector.infrastructure.soap.exceptions import (
    OdmDocumentError,
    RemoteOperationFault,
)
from openclinica_connector.infrastructure.soap.transport import HttpSoapTransport
from openclinica_connector.infrastructure.soap.web_service import (
    OpenClinicaWebService,
)

BASE_URL = "https://oc.example.org/OpenClinica-ws"
SOAP = Namespaces.SOAP_ENV
WSSE = Namespaces.WSSE
BEANS = Namespaces.OC_BEANS


def _q(namespace: str, name: str) -> str:
    return f"{{{namespace}}}{name}"


def _success(service_ns: str, operation: str, extra: str = "") -> str:
    return (
        f'<{operation}Response xmlns="{service_ns}">'
        f"<result>Success</result>{extra}</{operation}Response>"
    )


@pytest.fixture
def service(fake_transport) -> OpenClinicaWebService:
    return OpenClinicaWebService(
        BASE_URL, "alice", "5baa61e4c9b93f3f0682250b6cf8331b7ee68fd8", transport=fake_transport
    )


def _request_element(fake_transport, service_ns: str, operation: str):
    root = fake_transport.last_request.root
    request = root.find(f"{_q(SOAP, 'Body')}/{_q(service_ns, operation + 'Request')}")
    assert request is not None
    return request


class TestOpenClinicaWebService:
    def test_implements_port(self, service: OpenClinicaWebService):
        assert isinstance(service, WebServicePort)

    def test_from_config_builds_http_transport(self):
        config = ConnectorConfig(
            base_url=BASE_URL, username="alice", password_hash="h", timeout=5.0
        )

        client = OpenClinicaWebService.from_config(config)

        assert client.base_url == BASE_URL
        assert client.username == "alice"
        assert isinstance(client._transport, HttpSoapTransport)
        assert client._transport.timeout == 5.0

    def test_every_call_carries_security_header(self, service, fake_transport):
        fake_transport.queue(_success(Services.STUDY.namespace, "listAll"))

        service.study_list_all()

        token = fake_transport.last_request.root.find(
            f"{_q(SOAP, 'Header')}/{_q(WSSE, 'Security')}/{_q(WSSE, 'UsernameToken')}"
        )
        assert token is not None
        assert token.findtext(_q(WSSE, "Username")) == "alice"
        assert (
            token.findtext(_q(WSSE, "Password"))
            == "5baa61e4c9b93f3f0682250b6cf8331b7ee68fd8"
        )

    def test_study_list_all(self, service, fake_transport):
        fake_transport.queue(
            _success(
                Services.STUDY.namespace,
                "listAll",
                "<studies><study><identifier>DEMO</identifier></study></studies>",
            )
        )

        response = service.study_list_all()

        assert fake_transport.last_request.url == f"{BASE_URL}/ws/study/v1"
        assert fake_transport.last_request.operation == "study.listAll"
        assert response.is_success
        assert response.findtext("v1:studies/v1:study/v1:identifier") == "DEMO"
        assert len(_request_element(fake_transport, Services.STUDY.namespace, "listAll")) == 0

    def test_study_get_metadata(self, service, fake_transport):
        namespace = Services.STUDY.namespace
        fake_transport.queue(_success(namespace, "getMetadata", "<odm>&lt;ODM/&gt;</odm>"))

        response = service.study_get_metadata("DEMO")

        request = _request_element(fake_transport, namespace, "getMetadata")
        identifier = request.findtext(
            f"{_q(namespace, 'studyMetadata')}/{_q(BEANS, 'studyRef')}/{_q(BEANS, 'identifier')}"
        )
        assert identifier == "DEMO"
        assert response.findtext("v1:odm") == "<ODM/>"

    def test_subject_create(self, service, fake_transport):
        namespace = Services.STUDY_SUBJECT.namespace
        fake_transport.queue(_success(namespace, "create", "<label>SS_1</label>"))

        response = service.subject_create(
            "DEMO", "DEMO-S1", "SS_1", "", "2024-01-02", "P-1", "f", "1980"
        )

        assert fake_transport.last_request.url == f"{BASE_URL}/ws/studySubject/v1"
        subject = _request_element(fake_transport, namespace, "create").find(
            _q(namespace, "studySubject")
        )
        assert subject is not None
        assert subject.findtext(_q(BEANS, "label")) == "SS_1"
        assert subject.findtext(f"{_q(BEANS, 'subject')}/{_q(BEANS, 'yearOfBirth')}") == "1980"
        assert (
            subject.findtext(
                f"{_q(BEANS, 'studyRef')}/{_q(BEANS, 'siteRef')}/{_q(BEANS, 'identifier')}"
            )
            == "DEMO-S1"
        )
        assert response.findtext("v1:label") == "SS_1"

    def test_subject_list_all_by_study(self, service, fake_transport):
        namespace = Services.STUDY_SUBJECT.namespace
        fake_transport.queue(_success(namespace, "listAllByStudy"))

        service.subject_list_all_by_study("DEMO", " ")

        request = _request_element(fake_transport, namespace, "listAllByStudy")
        study_ref = request.find(_q(BEANS, "studyRef"))
        assert study_ref is not None
        assert study_ref.find(_q(BEANS, "siteRef")) is None

    def test_subject_is_study_subject(self, service, fake_transport):
        namespace = Services.STUDY_SUBJECT.namespace
        fake_transport.queue(
            _success(namespace, "isStudySubject", "<studySubjectOID>SS_1OID</studySubjectOID>")
        )

        response = service.subject_is_study_subject("DEMO", None, "SS_1")

        request = _request_element(fake_transport, namespace, "isStudySubject")
        assert request.findtext(f"{_q(namespace, 'studySubject')}/{_q(BEANS, 'label')}") == "SS_1"
        assert response.findtext("v1:studySubjectOID") == "SS_1OID"

    def test_event_schedule(self, service, fake_transport):
        namespace = Services.EVENT.namespace
        fake_transport.queue(_success(namespace, "schedule"))

        service.event_schedule(
            "SS_1", "SE_VISIT", "Ward 3", "2024-02-03", "09:00", None, None, "DEMO"
        )

        assert fake_transport.last_request.url == f"{BASE_URL}/ws/event/v1"
        event = _request_element(fake_transport, namespace, "schedule").find(
            _q(namespace, "event")
        )
        assert event is not None
        assert event.findtext(_q(BEANS, "eventDefinitionOID")) == "SE_VISIT"
        assert event.findtext(_q(BEANS, "startTime")) == "09:00"

    def test_study_event_definition_list_all(self, service, fake_transport):
        namespace = Services.STUDY_EVENT_DEFINITION.namespace
        fake_transport.queue(_success(namespace, "listAll"))

        service.study_event_definition_list_all("DEMO")

        assert fake_transport.last_request.url == f"{BASE_URL}/ws/studyEventDefinition/v1"
        request = _request_element(fake_transport, namespace, "listAll")
        assert request.find(_q(namespace, "studyEventDefinitionListAll")) is not None

    def test_data_import_embeds_document_as_xml(self, service, fake_transport):
        namespace = Services.DATA.namespace
        fake_transport.queue(_success(namespace, "import"))

        service.data_import('<?xml version="1.0"?><ODM><ClinicalData StudyOID="S"/></ODM>')

        request = _request_element(fake_transport, namespace, "import")
        clinical = request.find("ODM/ClinicalData")
        assert clinical is not None
        assert clinical.get("StudyOID") == "S"

    def test_data_import_rejects_malformed_document(self, service, fake_transport):
        with pytest.raises(OdmDocumentError):
            service.data_import("<ODM>")

        assert fake_transport.requests == []

    def test_import_clinical_data_serializes_tree(self, service, fake_transport):
        fake_transport.queue(_success(Services.DATA.namespace, "import"))
        clinical_data = ClinicalData("S_DEMO", "1")
        clinical_data.upsert_item("SS_1", "E1", 1, "F1", "G1", 1, "I1", "7")

        service.import_clinical_data(clinical_data)

        request = _request_element(fake_transport, Services.DATA.namespace, "import")
        item = request.find("ODM/ClinicalData/SubjectData/StudyEventData/FormData/ItemGroupData/ItemData")
        assert item is not None
        assert item.get("Value") == "7"

    def test_fault_is_raised_and_logged(self, fake_transport):
        logger = Mock()
        client = OpenClinicaWebService(
            BASE_URL, "alice", "hash", transport=fake_transport, logger=logger
        )
        fake_transport.queue(
            "<SOAP-ENV:Fault><faultcode>SOAP-ENV:Server</faultcode>"
            "<faultstring>boom</faultstring></SOAP-ENV:Fault>",
            status_code=500,
        )

        with pytest.raises(RemoteOperationFault) as exc_info:
            client.study_list_all()

        assert exc_info.value.diagnostic == "boom"
        assert exc_info.value.last_request is not None
        assert "UsernameToken" in exc_info.value.last_request
        logger.log_fault.assert_called_once()
        logger.log_response.assert_not_called()

    def test_request_and_response_are_logged(self, fake_transport):
        logger = Mock()
        client = OpenClinicaWebService(
            BASE_URL, "alice", "hash", transport=fake_transport, logger=logger
        )
        fake_transport.queue(_success(Services.STUDY.namespace, "listAll"))

        client.study_list_all()

        logger.log_request.assert_called_once_with(
            "study.listAll", f"{BASE_URL}/ws/study/v1"
        )
        logger.log_response.assert_called_once_with("study.listAll", "Success")
