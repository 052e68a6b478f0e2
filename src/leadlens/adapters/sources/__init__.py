"""Reporting source adapters implementing core ports."""

from leadlens.adapters.sources.in_memory import InMemoryReportingSource
from leadlens.adapters.sources.sqlite import SQLiteReportingSource

__all__ = [
    "InMemoryReportingSource",
    "SQLiteReportingSource",
]
