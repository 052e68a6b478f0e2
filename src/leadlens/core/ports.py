"""Port interfaces for reporting data sources.

The core depends only on this protocol, not on a concrete data source.
"""

from collections.abc import AsyncIterable
from typing import Protocol, runtime_checkable

from leadlens.core.models import LeadRecord, MessageEvent


@runtime_checkable
class ReportingSourcePort(Protocol):
    """Port for reading one tenant's raw reporting records.

    Adapters implementing this protocol scope every read to the given user.
    Examples: InMemoryReportingSource, SQLiteReportingSource.
    """

    def messages(self, user_id: str) -> AsyncIterable[MessageEvent]:
        """Read the user's message events.

        Args:
            user_id: Authenticated tenant identifier.

        Returns:
            Async iterable of MessageEvent objects, ordered by occurred_at
            ascending.
        """
        ...

    def leads(self, user_id: str) -> AsyncIterable[LeadRecord]:
        """Read the user's lead records.

        Args:
            user_id: Authenticated tenant identifier.

        Returns:
            Async iterable of LeadRecord objects in storage order.
        """
        ...
