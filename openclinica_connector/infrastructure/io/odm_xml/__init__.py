"""OpenClinica ODM import document generation.

The module is organized into focused components:
- constants: Namespace, transaction type and form status translations
- builder: Document tree construction
- writer: XML serialization and file I/O
"""

from ..exceptions import OdmSerializationError
from .builder import build_odm_tree, check_xml_characters, translate_form_status
from .constants import FORM_STATUS_TRANSLATIONS
from .writer import OdmXmlWriter, serialize_to_xml, write_odm_xml

__all__ = [
    "FORM_STATUS_TRANSLATIONS",
    "OdmSerializationError",
    "OdmXmlWriter",
    "build_odm_tree",
    "check_xml_characters",
    "serialize_to_xml",
    "translate_form_status",
    "write_odm_xml",
]
