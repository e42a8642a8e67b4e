"""Infrastructure I/O layer.

This package contains adapters for reading item value tables and writing ODM
import documents.
"""

from .csv_reader import CSVReader, CSVReadOptions
from .exceptions import (
    ConnectorInfrastructureError,
    DataParseError,
    DataSourceError,
    DataSourceNotFoundError,
    DataValidationError,
    OdmSerializationError,
)
from .item_row_reader import ItemRowReader

__all__ = [
    "CSVReadOptions",
    "CSVReader",
    "ConnectorInfrastructureError",
    "DataParseError",
    "DataSourceError",
    "DataSourceNotFoundError",
    "DataValidationError",
    "ItemRowReader",
    "OdmSerializationError",
]
