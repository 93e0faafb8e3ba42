"""Tests for form session state and debounced recalculation."""

import asyncio

import pytest

from itops_roi.models.inputs import DEFAULT_IT_EMPLOYEE_COST
from itops_roi.session.debounce import Debouncer
from itops_roi.session.errors import UnknownFieldError, UnknownUseCaseError
from itops_roi.session.state import CalculatorSession
from tests.conftest import USE_CASE_NAMES


class TestDebouncer:
    @pytest.mark.asyncio
    async def test_rapid_schedules_run_once(self):
        calls = []

        async def callback():
            calls.append(1)

        debouncer = Debouncer(0.01, callback)
        for _ in range(5):
            debouncer.schedule()
        await debouncer.flush()
        assert calls == [1]

    @pytest.mark.asyncio
    async def test_cancel_drops_pending_run(self):
        calls = []

        async def callback():
            calls.append(1)

        debouncer = Debouncer(0.01, callback)
        debouncer.schedule()
        debouncer.cancel()
        await asyncio.sleep(0.03)
        assert calls == []
        assert not debouncer.pending

    @pytest.mark.asyncio
    async def test_failing_callback_is_logged_not_raised(self, caplog):
        async def callback():
            raise RuntimeError("boom")

        debouncer = Debouncer(0.0, callback)
        debouncer.schedule()
        await debouncer.flush()
        assert "Debounced callback failed" in caplog.text


class TestCalculatorSession:
    def test_initial_state(self, fast_settings):
        session = CalculatorSession("s-1", settings=fast_settings)
        assert list(session.selections) == USE_CASE_NAMES
        assert session.organization.it_employee_cost == DEFAULT_IT_EMPLOYEE_COST
        assert session.subscription_cost == ""
        assert not session.has_selection
        assert session.result.projected_net_value == 0.0

    @pytest.mark.asyncio
    async def test_latest_inputs_win(self, fast_settings):
        session = CalculatorSession("s-1", settings=fast_settings)
        await session.update_use_case("Incident Management", "selected", True)
        await session.update_use_case("Incident Management", "ftes", "1")
        await session.update_use_case("Incident Management", "ftes", "2")
        await session.update_use_case("Incident Management", "hours_per_day", "4")
        await session.set_subscription_cost("50000")
        assert session.calculating

        result = await session.settle()
        assert not session.calculating
        assert result.totals.total_value == pytest.approx(36_000)
        assert result.payback_period == pytest.approx(0.72)

    @pytest.mark.asyncio
    async def test_label_fields_do_not_recalculate(self, fast_settings):
        session = CalculatorSession("s-1", settings=fast_settings)
        scheduled = await session.update_organization("company_name", "Acme")
        assert scheduled is False
        assert not session.calculating
        assert session.organization.company_name == "Acme"

    @pytest.mark.asyncio
    async def test_employee_cost_recalculates(self, fast_settings):
        session = CalculatorSession("s-1", settings=fast_settings)
        await session.update_use_case("Cloud Migration", "selected", True)
        await session.update_use_case("Cloud Migration", "ftes", "1")
        await session.update_use_case("Cloud Migration", "hours_per_day", "8")
        scheduled = await session.update_organization("it_employee_cost", "100000")
        assert scheduled is True
        result = await session.settle()
        assert result.totals.current_cost == pytest.approx(100_000)

    @pytest.mark.asyncio
    async def test_result_replaced_not_mutated(self, fast_settings):
        session = CalculatorSession("s-1", settings=fast_settings)
        before = session.result
        await session.update_use_case("Disaster Recovery", "selected", True)
        await session.update_use_case("Disaster Recovery", "ftes", "1")
        await session.update_use_case("Disaster Recovery", "hours_per_day", "8")
        after = await session.settle()
        assert after is not before
        assert before.totals.current_cost == 0.0

    @pytest.mark.asyncio
    async def test_unknown_use_case_raises(self, fast_settings):
        session = CalculatorSession("s-1", settings=fast_settings)
        with pytest.raises(UnknownUseCaseError):
            await session.update_use_case("Quantum Networking", "selected", True)

    @pytest.mark.asyncio
    async def test_unknown_field_raises(self, fast_settings):
        session = CalculatorSession("s-1", settings=fast_settings)
        with pytest.raises(UnknownFieldError):
            await session.update_use_case("Incident Management", "minutes", "5")
        with pytest.raises(UnknownFieldError):
            await session.update_organization("headcount", "5")

    def test_inputs_snapshot_is_detached(self, fast_settings):
        session = CalculatorSession("s-1", settings=fast_settings)
        snapshot = session.inputs()
        session.selections["Incident Management"].selected = True
        assert snapshot.selections["Incident Management"].selected is False

    @pytest.mark.asyncio
    async def test_selection_gates_results(self, fast_settings):
        session = CalculatorSession("s-1", settings=fast_settings)
        await session.update_use_case("IT Asset Management", "selected", True)
        assert session.has_selection
        await session.update_use_case("IT Asset Management", "selected", False)
        assert not session.has_selection
        await session.settle()
