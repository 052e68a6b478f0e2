"""In-memory reporting source."""

from collections.abc import AsyncIterable

from leadlens.core.models import LeadRecord, MessageEvent


class InMemoryReportingSource:
    """In-memory implementation of ReportingSourcePort.

    Keeps per-user lists of messages and leads. Suitable for testing and
    for embedding the reporting views next to another data store.
    """

    def __init__(self) -> None:
        self._messages: dict[str, list[MessageEvent]] = {}
        self._leads: dict[str, list[LeadRecord]] = {}

    def add_message(self, user_id: str, event: MessageEvent) -> None:
        """Record a message event for a user."""
        self._messages.setdefault(user_id, []).append(event)

    def add_lead(self, user_id: str, lead: LeadRecord) -> None:
        """Record a lead for a user."""
        self._leads.setdefault(user_id, []).append(lead)

    async def messages(self, user_id: str) -> AsyncIterable[MessageEvent]:
        """Read a user's messages, ordered by occurred_at ascending."""
        # sorted() is stable, so equal timestamps keep insertion order
        events = self._messages.get(user_id, [])
        for event in sorted(events, key=lambda e: e.occurred_at):
            yield event

    async def leads(self, user_id: str) -> AsyncIterable[LeadRecord]:
        """Read a user's leads in insertion order."""
        for lead in list(self._leads.get(user_id, [])):
            yield lead
