"""Tests for the in-memory reporting source."""

import pytest
from tests.helpers import utc

from leadlens.adapters.sources import InMemoryReportingSource


class TestInMemoryReportingSource:
    """Tests for InMemoryReportingSource."""

    @pytest.mark.storage
    async def test_unknown_user_reads_nothing(self) -> None:
        source = InMemoryReportingSource()
        assert [e async for e in source.messages("nobody")] == []
        assert [lead async for lead in source.leads("nobody")] == []

    @pytest.mark.storage
    async def test_messages_are_ordered_by_time(self, make_message) -> None:
        source = InMemoryReportingSource()
        late = make_message(occurred_at=utc(2024, 6, 2))
        early = make_message(occurred_at=utc(2024, 6, 1))
        source.add_message("u1", late)
        source.add_message("u1", early)

        assert [e async for e in source.messages("u1")] == [early, late]

    @pytest.mark.storage
    async def test_equal_timestamps_keep_insertion_order(self, make_message) -> None:
        source = InMemoryReportingSource()
        first = make_message(text="primo")
        second = make_message(text="secondo")
        source.add_message("u1", first)
        source.add_message("u1", second)

        assert [e async for e in source.messages("u1")] == [first, second]

    @pytest.mark.storage
    async def test_leads_keep_insertion_order(self, make_lead) -> None:
        source = InMemoryReportingSource()
        newer = make_lead(occurred_at=utc(2024, 6, 2))
        older = make_lead(occurred_at=utc(2024, 6, 1))
        source.add_lead("u1", newer)
        source.add_lead("u1", older)

        assert [lead async for lead in source.leads("u1")] == [newer, older]

    @pytest.mark.storage
    async def test_reads_are_scoped_per_user(self, make_lead, make_message) -> None:
        source = InMemoryReportingSource()
        mine = make_lead(name="Mia")
        source.add_lead("u1", mine)
        source.add_lead("u2", make_lead(name="Altrui"))
        source.add_message("u2", make_message())

        assert [lead async for lead in source.leads("u1")] == [mine]
        assert [e async for e in source.messages("u1")] == []
