"""Immutable result data structures."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class UseCaseResult:
    """Annual cost figures for a single use case."""

    name: str
    savings_percent: float
    current_cost: float
    with_solution_cost: float
    total_value: float


@dataclass(frozen=True)
class CostTotals:
    """Sums of the per-use-case figures across the whole catalog."""

    current_cost: float = 0.0
    with_solution_cost: float = 0.0
    total_value: float = 0.0


@dataclass(frozen=True)
class ResultRecord:
    """Top-level result of one ROI calculation over the 3-year horizon.

    payback_period is gross value divided by subscription cost, a ratio and
    not a count of months, even though it is displayed with a months label.
    """

    use_cases: tuple[UseCaseResult, ...]
    totals: CostTotals
    annual_subscription_cost: float
    three_year_subscription_cost: float
    three_year_gross_value: float
    projected_net_value: float
    payback_period: float
    cost_of_monthly_delay: float

    def get(self, name: str) -> UseCaseResult | None:
        """Look up a use case result by name, returning None if missing."""
        for uc in self.use_cases:
            if uc.name == name:
                return uc
        return None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["use_cases"] = list(data["use_cases"])
        return data
