"""OpenClinica Connector package.

Client tooling for the OpenClinica 3.x SOAP web services.

Features:
- In-memory ODM clinical data tree with keyed upserts
- ODM 1.3 import document generation with OpenClinica extensions
- WS-Security authenticated SOAP client for the study, subject, event,
  event definition and data services
- CSV item value import
"""

from importlib.metadata import PackageNotFoundError, version

try:  # pragma: no cover
    __version__ = version("openclinica-connector")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

# Core exports
from openclinica_connector.domain.entities.odm import (
    ClinicalData,
    FormData,
    ItemData,
    ItemGroupData,
    StudyEventData,
    SubjectData,
)
from openclinica_connector.infrastructure.io.odm_xml import serialize_to_xml
from openclinica_connector.infrastructure.soap.exceptions import RemoteOperationFault
from openclinica_connector.infrastructure.soap.web_service import (
    OpenClinicaWebService,
)

__all__ = [
    "__version__",
    # ODM tree
    "ClinicalData",
    "FormData",
    "ItemData",
    "ItemGroupData",
    "StudyEventData",
    "SubjectData",
    # Serialization
    "serialize_to_xml",
    # Web services
    "OpenClinicaWebService",
    "RemoteOperationFault",
]
