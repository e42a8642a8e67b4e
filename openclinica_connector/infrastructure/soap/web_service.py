"""OpenClinica SOAP web service client.

Wraps the study, studySubject, event, studyEventDefinition and data services
of an OpenClinica 3.x ``OpenClinica-ws`` instance. Every call carries the
same WS-Security UsernameToken; faults are raised to the caller as
RemoteOperationFault.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, override

from ...application.ports.services import WebServicePort
from ...constants import Services
from ..io.odm_xml.writer import serialize_to_xml
from ..logging.null_logger import NullLogger
from . import payloads
from .envelope import build_envelope, envelope_to_bytes, parse_response
from .security import UsernameToken
from .transport import HttpSoapTransport

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ...application.ports.services import LoggerPort, SoapTransportPort
    from ...config import ConnectorConfig
    from ...constants import ServiceDefinition
    from ...domain.entities.odm import ClinicalData
    from .envelope import SoapResponse
    from .payloads import DateInput, TimeInput
    from .soap_var import SoapVar


class OpenClinicaWebService(WebServicePort):
    pass

    def __init__(
        self,
        base_url: str,
        username: str,
        password_hash: str,
        *,
        transport: SoapTransportPort | None = None,
        logger: LoggerPort | None = None,
    ) -> None:
        super().__init__()
        self.base_url = base_url
        self._security = UsernameToken(username, password_hash)
        self._transport = transport or HttpSoapTransport()
        self.logger = logger or NullLogger()

    @classmethod
    def from_config(
        cls,
        config: ConnectorConfig,
        *,
        transport: SoapTransportPort | None = None,
        logger: LoggerPort | None = None,
    ) -> OpenClinicaWebService:
        if transport is None:
            transport = HttpSoapTransport(
                timeout=config.timeout, verify_tls=config.verify_tls
            )
        return cls(
            config.base_url,
            config.username,
            config.password_hash,
            transport=transport,
            logger=logger,
        )

    @property
    def username(self) -> str:
        return self._security.username

    def call(
        self,
        service: ServiceDefinition,
        operation: str,
        payload: Sequence[SoapVar] = (),
    ) -> SoapResponse:
        """Send one operation request and return the parsed response.

        Raises:
            RemoteOperationFault: On transport failure, SOAP fault or
                non-2xx HTTP status
        """
        url = service.endpoint_url(self.base_url)
        envelope = build_envelope(
            service, operation, payload, security=self._security
        )
        request_bytes = envelope_to_bytes(envelope)
        label = f"{service.name}.{operation}"
        self.logger.log_request(label, url)
        try:
            transport_response = self._transport.post(
                url, request_bytes, operation=label
            )
            response = parse_response(
                service,
                label,
                transport_response.text,
                status_code=transport_response.status_code,
                last_request=request_bytes.decode("utf-8"),
            )
        except Exception as exc:
            self.logger.log_fault(label, exc)
            raise
        self.logger.log_response(label, response.result)
        return response

    def study_list_all(self) -> SoapResponse:
        """List every study the user has access to."""
        return self.call(Services.STUDY, "listAll")

    def study_get_metadata(self, protocol_id: str) -> SoapResponse:
        """Fetch the ODM metadata of a study or site."""
        service = Services.STUDY
        return self.call(
            service,
            "getMetadata",
            payloads.study_metadata(protocol_id, service.namespace),
        )

    def subject_create(
        self,
        protocol_id: str,
        site_id: str | None,
        study_subject_id: str,
        secondary_label: str,
        enrollment_date: DateInput,
        person_id: str,
        gender: str,
        date_of_birth: DateInput | None,
    ) -> SoapResponse:
        """Create a study subject in a study, or in a site when ``site_id`` is set.

        Args:
            protocol_id: Unique protocol ID of the study
            site_id: Unique protocol ID of the site, blank for study level
            study_subject_id: Study subject label
            secondary_label: Secondary label
            enrollment_date: Enrollment date (ISO-8601)
            person_id: Person ID
            gender: 'm' or 'f'
            date_of_birth: Birth date (ISO-8601), or a four-digit year
        """
        service = Services.STUDY_SUBJECT
        return self.call(
            service,
            "create",
            payloads.create_study_subject(
                protocol_id=protocol_id,
                site_id=site_id,
                study_subject_id=study_subject_id,
                secondary_label=secondary_label,
                enrollment_date=enrollment_date,
                person_id=person_id,
                gender=gender,
                date_of_birth=date_of_birth,
                service_namespace=service.namespace,
            ),
        )

    def subject_list_all_by_study(
        self, protocol_id: str, site_id: str | None = None
    ) -> SoapResponse:
        """List the subjects of a study or site.

        OpenClinica fails this call if any subject in the instance lacks a
        person ID, birth date or sex.
        """
        return self.call(
            Services.STUDY_SUBJECT,
            "listAllByStudy",
            payloads.list_all_by_study(protocol_id, site_id),
        )

    def subject_is_study_subject(
        self, protocol_id: str, site_id: str | None, study_subject_id: str
    ) -> SoapResponse:
        """Check whether a subject label exists in the study or site."""
        service = Services.STUDY_SUBJECT
        return self.call(
            service,
            "isStudySubject",
            payloads.is_study_subject(
                protocol_id=protocol_id,
                site_id=site_id,
                study_subject_id=study_subject_id,
                service_namespace=service.namespace,
            ),
        )

    def event_schedule(
        self,
        study_subject_id: str,
        event_oid: str,
        location: str,
        start_date: DateInput,
        start_time: TimeInput | None,
        end_date: DateInput | None,
        end_time: TimeInput | None,
        protocol_id: str,
        site_id: str | None = None,
    ) -> SoapResponse:
        """Schedule a study event for an existing subject."""
        service = Services.EVENT
        return self.call(
            service,
            "schedule",
            payloads.schedule_event(
                study_subject_id=study_subject_id,
                event_oid=event_oid,
                location=location,
                start_date=start_date,
                start_time=start_time,
                end_date=end_date,
                end_time=end_time,
                protocol_id=protocol_id,
                site_id=site_id,
                service_namespace=service.namespace,
            ),
        )

    def study_event_definition_list_all(self, protocol_id: str) -> SoapResponse:
        """List the event definitions of a study."""
        service = Services.STUDY_EVENT_DEFINITION
        return self.call(
            service,
            "listAll",
            payloads.study_event_definition_list_all(protocol_id, service.namespace),
        )

    def data_import(self, odm_xml: str) -> SoapResponse:
        """Import an ODM document; subjects and events must already exist.

        The document is embedded in the request as XML, not as escaped text.

        Raises:
            OdmDocumentError: If ``odm_xml`` is not well-formed
            RemoteOperationFault: If the call fails
        """
        return self.call(Services.DATA, "import", payloads.odm_document(odm_xml))

    @override
    def import_clinical_data(self, clinical_data: ClinicalData) -> SoapResponse:
        """Serialize ``clinical_data`` without a declaration and import it."""
        return self.data_import(serialize_to_xml(clinical_data, xml_declaration=False))
