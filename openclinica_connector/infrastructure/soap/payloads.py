"""Request payloads for the OpenClinica web service operations.

Each builder returns the SoapVars placed inside the ``{operation}Request``
element. Element names and namespaces follow the OpenClinica 3.x WSDLs:
request wrappers live in the service namespace, reference and subject beans
in the shared beans namespace.
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import TYPE_CHECKING

from ...constants import Namespaces
from .soap_var import SoapVar

if TYPE_CHECKING:
    from xml.etree import ElementTree as ET

BEANS = Namespaces.OC_BEANS
YEAR_OF_BIRTH_LENGTH = 4

type DateInput = str | date
type TimeInput = str | time


def has_content(value: str | None) -> bool:
    return value is not None and bool(value.strip())


def study_ref(protocol_id: str, site_id: str | None = None) -> SoapVar:
    """Build the ``studyRef`` bean used by most calls.

    A ``siteRef`` is nested alongside the study identifier only when
    ``site_id`` has non-whitespace content; otherwise the request is scoped to
    the study alone.
    """
    children = [SoapVar.string("identifier", protocol_id, BEANS)]
    if site_id is not None and has_content(site_id):
        children.append(
            SoapVar.struct(
                "siteRef", [SoapVar.string("identifier", site_id, BEANS)], BEANS
            )
        )
    return SoapVar.struct("studyRef", children, BEANS)


def study_metadata(protocol_id: str, service_namespace: str) -> list[SoapVar]:
    return [
        SoapVar.struct("studyMetadata", [study_ref(protocol_id)], service_namespace)
    ]


def subject(person_id: str, gender: str, date_of_birth: DateInput | None) -> SoapVar:
    children = [
        SoapVar.string("uniqueIdentifier", person_id, BEANS),
        SoapVar.string("gender", gender, BEANS),
    ]
    if isinstance(date_of_birth, str) and len(date_of_birth) == YEAR_OF_BIRTH_LENGTH:
        # A bare year is sent as yearOfBirth instead of a full date.
        children.append(SoapVar.string("yearOfBirth", date_of_birth, BEANS))
    else:
        children.append(SoapVar.iso_date("dateOfBirth", date_of_birth, BEANS))
    return SoapVar.struct("subject", children, BEANS)


def create_study_subject(
    *,
    protocol_id: str,
    site_id: str | None,
    study_subject_id: str,
    secondary_label: str,
    enrollment_date: DateInput,
    person_id: str,
    gender: str,
    date_of_birth: DateInput | None,
    service_namespace: str,
) -> list[SoapVar]:
    return [
        SoapVar.struct(
            "studySubject",
            [
                SoapVar.string("label", study_subject_id, BEANS),
                SoapVar.string("secondaryLabel", secondary_label, BEANS),
                SoapVar.iso_date("enrollmentDate", enrollment_date, BEANS),
                subject(person_id, gender, date_of_birth),
                study_ref(protocol_id, site_id),
            ],
            service_namespace,
        )
    ]


def list_all_by_study(protocol_id: str, site_id: str | None) -> list[SoapVar]:
    return [study_ref(protocol_id, site_id)]


def is_study_subject(
    *,
    protocol_id: str,
    site_id: str | None,
    study_subject_id: str,
    service_namespace: str,
) -> list[SoapVar]:
    return [
        SoapVar.struct(
            "studySubject",
            [
                SoapVar.string("label", study_subject_id, BEANS),
                study_ref(protocol_id, site_id),
            ],
            service_namespace,
        )
    ]


def study_subject_ref(study_subject_id: str) -> SoapVar:
    return SoapVar.struct(
        "studySubjectRef", [SoapVar.string("label", study_subject_id, BEANS)], BEANS
    )


def schedule_event(
    *,
    study_subject_id: str,
    event_oid: str,
    location: str,
    start_date: DateInput,
    start_time: TimeInput | None,
    end_date: DateInput | None,
    end_time: TimeInput | None,
    protocol_id: str,
    site_id: str | None,
    service_namespace: str,
) -> list[SoapVar]:
    return [
        SoapVar.struct(
            "event",
            [
                study_subject_ref(study_subject_id),
                study_ref(protocol_id, site_id),
                SoapVar.string("eventDefinitionOID", event_oid, BEANS),
                SoapVar.string("location", location, BEANS),
                SoapVar.iso_date("startDate", start_date, BEANS),
                SoapVar.string("startTime", format_time(start_time), BEANS),
                SoapVar.iso_date("endDate", end_date, BEANS),
                SoapVar.string("endTime", format_time(end_time), BEANS),
            ],
            service_namespace,
        )
    ]


def study_event_definition_list_all(
    protocol_id: str, service_namespace: str
) -> list[SoapVar]:
    return [
        SoapVar.struct(
            "studyEventDefinitionListAll",
            [study_ref(protocol_id)],
            service_namespace,
        )
    ]


def odm_document(document: str | ET.Element) -> list[SoapVar]:
    return [SoapVar.any_xml(document)]


def format_time(value: TimeInput | None) -> str | None:
    """Format an event time as 24-hour ``HH:MM``."""
    if value is None:
        return None
    if isinstance(value, (time, datetime)):
        return value.strftime("%H:%M")
    return value
