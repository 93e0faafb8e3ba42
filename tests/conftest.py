"""Shared test fixtures for the ROI calculator test suite."""

import os

# Keep debounced recalculation fast; must be set before settings are first loaded
os.environ.setdefault("ITOPS_ROI_RECALC_DEBOUNCE_SECONDS", "0.01")

import pytest

from itops_roi.catalog.loader import default_use_cases
from itops_roi.config.settings import Settings
from itops_roi.engine.calculator import CalculationEngine
from itops_roi.models.inputs import CalculatorInputs, UseCaseSelection

USE_CASE_NAMES = [uc.name for uc in default_use_cases()]


def make_inputs(by_name=None, it_employee_cost=120000, subscription_cost=""):
    """Helper to create CalculatorInputs; by_name maps use case -> (ftes, hours_per_day)."""
    selections = {name: UseCaseSelection() for name in USE_CASE_NAMES}
    for name, (ftes, hours) in (by_name or {}).items():
        selections[name] = UseCaseSelection(selected=True, ftes=ftes, hours_per_day=hours)
    return CalculatorInputs(
        it_employee_cost=it_employee_cost,
        selections=selections,
        subscription_cost=subscription_cost,
    )


@pytest.fixture
def engine():
    return CalculationEngine()


@pytest.fixture
def fast_settings() -> Settings:
    return Settings(recalc_debounce_seconds=0.01)


@pytest.fixture
def incident_management_inputs() -> CalculatorInputs:
    """Incident Management only: 2 FTEs at 4 hours/day, $50,000 subscription."""
    return make_inputs(
        by_name={"Incident Management": ("2", "4")},
        subscription_cost="50000",
    )


@pytest.fixture
def all_selected_inputs() -> CalculatorInputs:
    """Every use case selected with 1 FTE at 8 hours/day, $100,000 subscription."""
    return make_inputs(
        by_name={name: ("1", "8") for name in USE_CASE_NAMES},
        subscription_cost="100000",
    )
