"""Port interfaces for external dependencies.

This module defines the protocols that infrastructure adapters implement so
use cases can be exercised with fakes in tests.
"""

from .repositories import ItemRowRepositoryPort
from .services import (
    LoggerPort,
    OdmWriterPort,
    SoapTransportPort,
    WebServicePort,
)

__all__ = [
    "ItemRowRepositoryPort",
    "LoggerPort",
    "OdmWriterPort",
    "SoapTransportPort",
    "WebServicePort",
]
