from dataclasses import dataclass
from typing import ClassVar


class Defaults:
    METADATA_VERSION_OID = "1"
    REPEAT_KEY = "1"
    TIMEOUT_SECONDS = 60.0
    VERIFY_TLS = True
    CONFIG_FILE = "openclinica_connector.toml"


class Namespaces:
    SOAP_ENV = "http://schemas.xmlsoap.org/soap/envelope/"
    OC_BEANS = "http://openclinica.org/ws/beans"
    ODM = "http://www.cdisc.org/ns/odm/v1.3"
    OPENCLINICA = "http://www.openclinica.org/ns/odm_ext_v130/v3.1"
    WSSE = (
        "http://docs.oasis-open.org/wss/2004/01/"
        "oasis-200401-wss-wssecurity-secext-1.0.xsd"
    )
    WSSE_PASSWORD_TEXT = (
        "http://docs.oasis-open.org/wss/2004/01/"
        "oasis-200401-wss-username-token-profile-1.0#PasswordText"
    )


@dataclass(frozen=True, slots=True)
class ServiceDefinition:
    name: str
    path: str
    namespace: str
    prefix: str

    def endpoint_url(self, base_url: str) -> str:
        return f"{base_url.rstrip('/')}/{self.path}"


class Services:
    STUDY = ServiceDefinition(
        name="study",
        path="ws/study/v1",
        namespace="http://openclinica.org/ws/study/v1",
        prefix="study",
    )
    STUDY_SUBJECT = ServiceDefinition(
        name="studySubject",
        path="ws/studySubject/v1",
        namespace="http://openclinica.org/ws/studySubject/v1",
        prefix="studySubject",
    )
    EVENT = ServiceDefinition(
        name="event",
        path="ws/event/v1",
        namespace="http://openclinica.org/ws/event/v1",
        prefix="event",
    )
    STUDY_EVENT_DEFINITION = ServiceDefinition(
        name="studyEventDefinition",
        path="ws/studyEventDefinition/v1",
        namespace="http://openclinica.org/ws/studyEventDefinition/v1",
        prefix="sed",
    )
    DATA = ServiceDefinition(
        name="data",
        path="ws/data/v1",
        namespace="http://openclinica.org/ws/data/v1",
        prefix="data",
    )
    ALL: ClassVar[tuple[ServiceDefinition, ...]] = (
        STUDY,
        STUDY_SUBJECT,
        EVENT,
        STUDY_EVENT_DEFINITION,
        DATA,
    )


class ResultCodes:
    SUCCESS = "success"
