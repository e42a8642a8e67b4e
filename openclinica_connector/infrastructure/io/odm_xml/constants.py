"""Constants for OpenClinica ODM import documents."""

from xml.etree import ElementTree as ET

from ....constants import Namespaces

OPENCLINICA_NS = Namespaces.OPENCLINICA
OPENCLINICA_PREFIX = "OpenClinica"

ET.register_namespace(OPENCLINICA_PREFIX, OPENCLINICA_NS)

TRANSACTION_TYPE_INSERT = "Insert"

# Form status vocabulary accepted by callers -> value OpenClinica imports.
# Only the one translation below is known; unknown statuses pass through.
FORM_STATUS_TRANSLATIONS: dict[str, str] = {
    "dataentrystarted": "initial data entry",
}
