"""View models for the three calculator tabs.

Each builder reads a CalculatorSession and returns pydantic models the front
end renders directly: the organization form, the use-case grid and the
results cards and line-item table.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel

from itops_roi.engine.result import ResultRecord, UseCaseResult
from itops_roi.models.enums import Tab
from itops_roi.session.state import CalculatorSession

from .formatting import CURRENCY_SYMBOL, format_currency, format_payback, format_percent

TAB_LABELS: dict[Tab, str] = {
    Tab.ORGANIZATION: "Organization",
    Tab.USE_CASES: "Use Cases",
    Tab.RESULTS: "Results",
}

# Fixed badge shown on the net value card
NET_VALUE_TREND = 20


class TabView(BaseModel):
    tab: Tab
    label: str
    enabled: bool


class FieldView(BaseModel):
    name: str
    label: str
    value: Any
    input_type: str = "text"
    prefix: Optional[str] = None
    required: bool = False


class UseCaseRowView(BaseModel):
    name: str
    savings_percent: float
    selected: bool
    ftes: Any
    hours_per_day: Any
    inputs_enabled: bool


class SummaryCard(BaseModel):
    title: str
    value: str
    icon: str
    trend: Optional[int] = None
    trend_label: Optional[str] = None


class ResultRow(BaseModel):
    name: str
    current_cost: float
    current_cost_display: str
    savings: Optional[str] = None
    value_per_year: float
    value_per_year_display: str


class ResultsView(BaseModel):
    subscription_cost: FieldView
    calculating: bool = False
    advisory: Optional[str] = None
    summary: list[SummaryCard] = []
    rows: list[ResultRow] = []
    total: Optional[ResultRow] = None


class SessionView(BaseModel):
    session_id: str
    tabs: list[TabView]
    organization: list[FieldView]
    use_cases: list[UseCaseRowView]
    results: Optional[ResultsView] = None


def build_tabs(session: CalculatorSession) -> list[TabView]:
    """Organization and Use Cases are always open; Results needs a selection."""
    return [
        TabView(
            tab=tab,
            label=label,
            enabled=session.has_selection if tab is Tab.RESULTS else True,
        )
        for tab, label in TAB_LABELS.items()
    ]


def build_organization_form(session: CalculatorSession) -> list[FieldView]:
    org = session.organization
    return [
        FieldView(name="company_name", label="Company Name", value=org.company_name),
        FieldView(
            name="business_sector",
            label="Business Sector / Vertical",
            value=org.business_sector,
        ),
        FieldView(
            name="it_employee_cost",
            label="Average Annual Cost of an IT Employee",
            value=org.it_employee_cost,
            input_type="number",
            prefix=CURRENCY_SYMBOL,
        ),
    ]


def build_use_case_grid(session: CalculatorSession) -> list[UseCaseRowView]:
    rows = []
    for definition in session.engine.use_cases:
        selection = session.selections[definition.name]
        rows.append(
            UseCaseRowView(
                name=definition.name,
                savings_percent=definition.savings_percent,
                selected=selection.selected,
                ftes=selection.ftes,
                hours_per_day=selection.hours_per_day,
                inputs_enabled=selection.selected,
            )
        )
    return rows


def subscription_cost_missing(value: Any) -> bool:
    return value is None or str(value).strip() == ""


def build_results_view(session: CalculatorSession) -> ResultsView:
    """Results tab: subscription field, then cards and table once the cost is entered."""
    product = session.settings.product_name
    field = FieldView(
        name="subscription_cost",
        label=f"Annual {product} Subscription Cost",
        value=session.subscription_cost,
        input_type="number",
        prefix=CURRENCY_SYMBOL,
        required=True,
    )
    if subscription_cost_missing(session.subscription_cost):
        return ResultsView(
            subscription_cost=field,
            calculating=session.calculating,
            advisory=(
                f"Please enter the annual {product} subscription cost "
                "to see the complete ROI analysis"
            ),
        )

    result = session.result
    return ResultsView(
        subscription_cost=field,
        calculating=session.calculating,
        summary=build_summary_cards(result),
        rows=[_line_item(uc) for uc in result.use_cases if uc.current_cost > 0],
        total=ResultRow(
            name="Total",
            current_cost=result.totals.current_cost,
            current_cost_display=format_currency(result.totals.current_cost),
            value_per_year=result.totals.total_value,
            value_per_year_display=format_currency(result.totals.total_value),
        ),
    )


def build_summary_cards(result: ResultRecord) -> list[SummaryCard]:
    return [
        SummaryCard(
            title="3-Year Net Value",
            value=format_currency(result.projected_net_value),
            icon="monetization_on",
            trend=NET_VALUE_TREND,
            trend_label=_trend_label(NET_VALUE_TREND),
        ),
        SummaryCard(
            title="Payback Period",
            value=format_payback(result.payback_period),
            icon="access_time",
        ),
        SummaryCard(
            title="Monthly Delay Cost",
            value=format_currency(result.cost_of_monthly_delay),
            icon="monetization_on",
        ),
    ]


def build_session_view(session: CalculatorSession) -> SessionView:
    return SessionView(
        session_id=session.session_id,
        tabs=build_tabs(session),
        organization=build_organization_form(session),
        use_cases=build_use_case_grid(session),
        results=build_results_view(session) if session.has_selection else None,
    )


def _line_item(uc: UseCaseResult) -> ResultRow:
    return ResultRow(
        name=uc.name,
        current_cost=uc.current_cost,
        current_cost_display=format_currency(uc.current_cost),
        savings=format_percent(uc.savings_percent),
        value_per_year=uc.total_value,
        value_per_year_display=format_currency(uc.total_value),
    )


def _trend_label(trend: int) -> str:
    direction = "improvement" if trend > 0 else "decline"
    return f"{abs(trend)}% {direction}"
