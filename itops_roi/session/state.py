"""Mutable form state for one calculator session."""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from dataclasses import replace
from enum import Enum
from typing import Any, Optional, TypeVar

from itops_roi.config.settings import Settings, get_settings
from itops_roi.engine.calculator import CalculationEngine
from itops_roi.engine.result import ResultRecord
from itops_roi.models.enums import OrganizationField, UseCaseField
from itops_roi.models.inputs import (
    CalculatorInputs,
    NumericInput,
    OrganizationInfo,
    UseCaseSelection,
)
from itops_roi.streaming.events import SessionEventType
from itops_roi.streaming.manager import StreamManager

from .debounce import Debouncer
from .errors import UnknownFieldError, UnknownUseCaseError

logger = logging.getLogger(__name__)

# Organization fields that feed the calculation; the rest are labels only
_RECALC_ORGANIZATION_FIELDS = {OrganizationField.IT_EMPLOYEE_COST}

_E = TypeVar("_E", bound=Enum)


class CalculatorSession:
    """The presentation shell's state: owns every input and the latest result.

    Input changes schedule a debounced recalculation. The result is replaced
    in a single assignment, so readers never see a partial update.
    """

    def __init__(
        self,
        session_id: str,
        engine: Optional[CalculationEngine] = None,
        settings: Optional[Settings] = None,
        stream_manager: Optional[StreamManager] = None,
    ):
        self.session_id = session_id
        self._engine = engine or CalculationEngine()
        self._settings = settings or get_settings()
        self._streams = stream_manager

        self.organization = OrganizationInfo(
            it_employee_cost=self._settings.default_it_employee_cost
        )
        self.selections: OrderedDict[str, UseCaseSelection] = OrderedDict(
            (uc.name, UseCaseSelection()) for uc in self._engine.use_cases
        )
        self.subscription_cost: NumericInput = ""

        self._result: ResultRecord = self._engine.calculate(self.inputs())
        self.last_active = time.monotonic()
        self._debouncer = Debouncer(
            self._settings.recalc_debounce_seconds, self.recalculate
        )

    @property
    def result(self) -> ResultRecord:
        return self._result

    @property
    def engine(self) -> CalculationEngine:
        return self._engine

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def calculating(self) -> bool:
        """True while a recalculation is scheduled but has not published yet."""
        return self._debouncer.pending

    @property
    def has_selection(self) -> bool:
        return any(sel.selected for sel in self.selections.values())

    def inputs(self) -> CalculatorInputs:
        """Snapshot of the current inputs, detached from later edits."""
        return CalculatorInputs(
            it_employee_cost=self.organization.it_employee_cost,
            selections={name: replace(sel) for name, sel in self.selections.items()},
            subscription_cost=self.subscription_cost,
        )

    async def update_organization(self, field_name: str, value: Any) -> bool:
        """Set one organization field. Returns True if a recalculation was scheduled."""
        self.touch()
        field = _parse_field(OrganizationField, field_name)
        setattr(self.organization, field.value, value)
        await self._publish(
            SessionEventType.INPUT_CHANGED,
            {"section": "organization", "field": field.value, "value": value},
        )
        if field in _RECALC_ORGANIZATION_FIELDS:
            await self._schedule()
            return True
        return False

    async def update_use_case(self, name: str, field_name: str, value: Any) -> bool:
        self.touch()
        if name not in self.selections:
            raise UnknownUseCaseError(name)
        field = _parse_field(UseCaseField, field_name)
        if field is UseCaseField.SELECTED:
            value = bool(value)
        setattr(self.selections[name], field.value, value)
        await self._publish(
            SessionEventType.INPUT_CHANGED,
            {"section": "use_cases", "use_case": name, "field": field.value, "value": value},
        )
        await self._schedule()
        return True

    async def set_subscription_cost(self, value: NumericInput) -> bool:
        self.touch()
        self.subscription_cost = value
        await self._publish(
            SessionEventType.INPUT_CHANGED,
            {"section": "results", "field": "subscription_cost", "value": value},
        )
        await self._schedule()
        return True

    async def recalculate(self) -> ResultRecord:
        """Run the engine on the current inputs and publish the new result."""
        result = self._engine.calculate(self.inputs())
        self._result = result
        logger.debug("Session %s recalculated", self.session_id)
        await self._publish(
            SessionEventType.RECALCULATION_COMPLETED,
            {"results": result.to_dict()},
        )
        return result

    async def settle(self) -> ResultRecord:
        """Wait for any pending recalculation, then return the latest result."""
        await self._debouncer.flush()
        return self._result

    def touch(self) -> None:
        self.last_active = time.monotonic()

    def idle_for(self, now: Optional[float] = None) -> float:
        """Seconds since the last input change or read."""
        return (time.monotonic() if now is None else now) - self.last_active

    def cancel_pending(self) -> None:
        self._debouncer.cancel()

    async def _schedule(self) -> None:
        self._debouncer.schedule()
        await self._publish(SessionEventType.RECALCULATION_SCHEDULED, {})

    async def _publish(self, event_type: SessionEventType, data: dict[str, Any]) -> None:
        if self._streams is not None:
            await self._streams.publish(self.session_id, event_type, data)


def _parse_field(enum_cls: type[_E], field_name: str) -> _E:
    try:
        return enum_cls(field_name)
    except ValueError:
        raise UnknownFieldError(field_name, [f.value for f in enum_cls]) from None
