"""Form input state and the numeric coercion applied before any arithmetic."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Union

NumericInput = Union[str, int, float, None]

# Leading numeric prefix, the same portion a browser's parseFloat would accept
_NUMERIC_PREFIX = re.compile(r"^\s*([+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")

DEFAULT_IT_EMPLOYEE_COST = 120000


def coerce_number(value: Any) -> float:
    """Coerce a raw form value to a finite float.

    Empty, missing, non-numeric, NaN and infinite values all become 0.0.
    Strings use their leading numeric prefix, so "12abc" reads as 12.
    Never raises.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value)
        if match is None:
            return 0.0
        number = float(match.group(1))
    else:
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


@dataclass
class OrganizationInfo:
    """Organization tab. Only it_employee_cost feeds the calculation."""

    company_name: str = ""
    business_sector: str = ""
    it_employee_cost: NumericInput = DEFAULT_IT_EMPLOYEE_COST


@dataclass
class UseCaseSelection:
    """One row of the use-case grid, held as the raw strings the user typed."""

    selected: bool = False
    ftes: NumericInput = ""
    hours_per_day: NumericInput = ""


@dataclass(frozen=True)
class CalculatorInputs:
    """Snapshot of everything the engine reads, passed by value."""

    it_employee_cost: NumericInput = DEFAULT_IT_EMPLOYEE_COST
    selections: Mapping[str, UseCaseSelection] = field(default_factory=dict)
    subscription_cost: NumericInput = ""
