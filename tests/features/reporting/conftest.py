"""BDD step definitions for lead filtering features."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest
from pytest_bdd import given, parsers, then, when

from leadlens.core.encoding.delimited import LEAD_COLUMNS, serialize
from leadlens.core.filters import LeadFilters, active_filter_count
from leadlens.core.models import LeadRecord
from leadlens.core.ranges import custom_range
from leadlens.core.reports import build_lead_report


@dataclass
class LeadScenarioContext:
    """Mutable state shared by the steps of one scenario."""

    leads: list[LeadRecord] = field(default_factory=list)
    filters: LeadFilters = field(default_factory=LeadFilters)
    export: str = ""


@pytest.fixture
def ctx() -> LeadScenarioContext:
    """Fresh scenario context for each test."""
    return LeadScenarioContext()


def shown_names(ctx: LeadScenarioContext) -> list[str]:
    return [lead.name for lead in build_lead_report(ctx.leads, ctx.filters).leads]


# --- Given ---


@given("these leads")
def given_leads(ctx: LeadScenarioContext, datatable: list[list[str]]) -> None:
    header, *rows = datatable
    for index, row in enumerate(rows):
        values = dict(zip(header, row, strict=True))
        ctx.leads.append(
            LeadRecord(
                id=f"lead-{index}",
                name=values["name"],
                email=values["email"],
                phone="",
                message=values["message"],
                source=values["source"],
                occurred_at=datetime.fromisoformat(values["created_at"]).replace(
                    tzinfo=UTC
                ),
            )
        )


# --- When ---


@when(parsers.parse('I search for "{text}"'))
def when_search(ctx: LeadScenarioContext, text: str) -> None:
    ctx.filters = ctx.filters.with_changes(search=text)


@when(parsers.parse('I pick the range from "{start}" to "{end}"'))
def when_range(ctx: LeadScenarioContext, start: str, end: str) -> None:
    ctx.filters = ctx.filters.with_changes(date_range=custom_range(start, end, UTC))


@when("I keep only leads with a message")
def when_with_message(ctx: LeadScenarioContext) -> None:
    ctx.filters = ctx.filters.with_changes(message_presence="with_message")


@when(parsers.parse('I pick the source "{source}"'))
def when_source(ctx: LeadScenarioContext, source: str) -> None:
    ctx.filters = ctx.filters.with_changes(source=source)


@when(parsers.parse('I sort by "{key}" "{order}"'))
def when_sort(ctx: LeadScenarioContext, key: str, order: str) -> None:
    ctx.filters = ctx.filters.with_changes(sort_key=key, sort_order=order)


@when("I export the leads")
def when_export(ctx: LeadScenarioContext) -> None:
    report = build_lead_report(ctx.leads, ctx.filters)
    ctx.export = serialize(report.leads, LEAD_COLUMNS)


# --- Then ---


@then(parsers.parse('the leads shown are "{names}"'))
def then_leads_shown(ctx: LeadScenarioContext, names: str) -> None:
    assert shown_names(ctx) == [name.strip() for name in names.split(",")]


@then(parsers.parse("{count:d} filters are active"))
def then_active_count(ctx: LeadScenarioContext, count: int) -> None:
    assert active_filter_count(ctx.filters) == count


@then(parsers.parse("the export has {count:d} lines"))
def then_export_lines(ctx: LeadScenarioContext, count: int) -> None:
    assert len(ctx.export.split("\n")) == count


@then(parsers.parse('the export header is "{header}"'))
def then_export_header(ctx: LeadScenarioContext, header: str) -> None:
    assert ctx.export.split("\n")[0] == header
