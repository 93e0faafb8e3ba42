"""Core calculation engine.

Takes the organization cost, use-case selections and subscription cost ->
produces a ResultRecord. Pure: no I/O, no state, never raises.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

from itops_roi.catalog.definitions import UseCaseDefinition
from itops_roi.catalog.loader import default_use_cases
from itops_roi.engine.result import CostTotals, ResultRecord, UseCaseResult
from itops_roi.models.inputs import CalculatorInputs, UseCaseSelection, coerce_number

logger = logging.getLogger(__name__)

WORKING_DAYS_PER_YEAR = 260
STANDARD_WORKDAY_HOURS = 8
PROJECTION_YEARS = 3
PROJECTION_MONTHS = 36


class CalculationEngine:
    """Stateless engine that runs ROI calculations over a fixed use-case list."""

    def __init__(self, use_cases: Optional[Sequence[UseCaseDefinition]] = None):
        self._use_cases = tuple(use_cases) if use_cases is not None else default_use_cases()

    @property
    def use_cases(self) -> tuple[UseCaseDefinition, ...]:
        return self._use_cases

    def calculate(self, inputs: CalculatorInputs) -> ResultRecord:
        """Run the full calculation and 3-year projection."""
        it_employee_cost = coerce_number(inputs.it_employee_cost)

        use_case_results = tuple(
            self._calculate_use_case(
                definition,
                inputs.selections.get(definition.name),
                it_employee_cost,
            )
            for definition in self._use_cases
        )
        totals = self._sum_totals(use_case_results)

        annual_subscription_cost = coerce_number(inputs.subscription_cost)
        three_year_subscription_cost = annual_subscription_cost * PROJECTION_YEARS
        three_year_gross_value = totals.total_value * PROJECTION_YEARS
        projected_net_value = three_year_gross_value - three_year_subscription_cost
        payback_period = (
            three_year_gross_value / three_year_subscription_cost
            if annual_subscription_cost > 0
            else 0.0
        )
        cost_of_monthly_delay = projected_net_value / PROJECTION_MONTHS

        logger.debug(
            "Calculated ROI: annual value=%.2f, 3y net=%.2f, payback=%.3f",
            totals.total_value,
            projected_net_value,
            payback_period,
        )

        return ResultRecord(
            use_cases=use_case_results,
            totals=totals,
            annual_subscription_cost=annual_subscription_cost,
            three_year_subscription_cost=three_year_subscription_cost,
            three_year_gross_value=three_year_gross_value,
            projected_net_value=projected_net_value,
            payback_period=payback_period,
            cost_of_monthly_delay=cost_of_monthly_delay,
        )

    @staticmethod
    def _calculate_use_case(
        definition: UseCaseDefinition,
        selection: Optional[UseCaseSelection],
        it_employee_cost: float,
    ) -> UseCaseResult:
        """Annualized current cost, residual cost and savings for one use case."""
        if selection is None or not selection.selected:
            return UseCaseResult(
                name=definition.name,
                savings_percent=definition.savings_percent,
                current_cost=0.0,
                with_solution_cost=0.0,
                total_value=0.0,
            )

        hours_per_year = coerce_number(selection.hours_per_day) * WORKING_DAYS_PER_YEAR
        fte_percentage = hours_per_year / (STANDARD_WORKDAY_HOURS * WORKING_DAYS_PER_YEAR)
        effective_ftes = coerce_number(selection.ftes) * fte_percentage
        current_cost = it_employee_cost * effective_ftes

        with_solution_cost = current_cost * (1 - definition.savings_percent / 100)
        total_value = current_cost - with_solution_cost

        return UseCaseResult(
            name=definition.name,
            savings_percent=definition.savings_percent,
            current_cost=current_cost,
            with_solution_cost=with_solution_cost,
            total_value=total_value,
        )

    @staticmethod
    def _sum_totals(results: Sequence[UseCaseResult]) -> CostTotals:
        return CostTotals(
            current_cost=sum(r.current_cost for r in results),
            with_solution_cost=sum(r.with_solution_cost for r in results),
            total_value=sum(r.total_value for r in results),
        )


def calculate_roi(
    it_employee_cost: object,
    selections: Mapping[str, UseCaseSelection],
    subscription_cost: object,
) -> ResultRecord:
    """Convenience wrapper running the default engine on loose inputs."""
    return CalculationEngine().calculate(
        CalculatorInputs(
            it_employee_cost=it_employee_cost,
            selections=selections,
            subscription_cost=subscription_cost,
        )
    )
