"""Application layer: use cases and the ports they depend on."""

from .import_use_case import ImportClinicalDataDependencies, ImportClinicalDataUseCase
from .models import ImportDataRequest, ImportDataResponse

__all__ = [
    "ImportClinicalDataDependencies",
    "ImportClinicalDataUseCase",
    "ImportDataRequest",
    "ImportDataResponse",
]
