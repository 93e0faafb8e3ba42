from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UseCaseDefinition:
    """A predefined IT operations scenario and the share of its cost the solution removes."""

    name: str
    savings_percent: float
