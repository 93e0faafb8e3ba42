from .calculator import (
    PROJECTION_MONTHS,
    PROJECTION_YEARS,
    STANDARD_WORKDAY_HOURS,
    WORKING_DAYS_PER_YEAR,
    CalculationEngine,
    calculate_roi,
)
from .result import CostTotals, ResultRecord, UseCaseResult

__all__ = [
    "CalculationEngine",
    "CostTotals",
    "PROJECTION_MONTHS",
    "PROJECTION_YEARS",
    "ResultRecord",
    "STANDARD_WORKDAY_HOURS",
    "UseCaseResult",
    "WORKING_DAYS_PER_YEAR",
    "calculate_roi",
]
