"""Domain services.

Business logic services that operate on domain entities.
"""

from .clinical_data_builder import build_clinical_data

__all__ = [
    "build_clinical_data",
]
