"""Presenters for CLI output formatting.

Presenters turn web service responses and use case results into tables and
messages on the console.
"""

from .import_summary import ImportSummaryPresenter
from .response import ResponsePresenter

__all__ = ["ImportSummaryPresenter", "ResponsePresenter"]
