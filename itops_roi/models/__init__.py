from .enums import OrganizationField, Tab, UseCaseField
from .inputs import (
    CalculatorInputs,
    OrganizationInfo,
    UseCaseSelection,
    coerce_number,
)

__all__ = [
    "CalculatorInputs",
    "OrganizationField",
    "OrganizationInfo",
    "Tab",
    "UseCaseField",
    "UseCaseSelection",
    "coerce_number",
]
