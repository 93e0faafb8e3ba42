"""Pydantic models for use-case catalog validation."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from itops_roi.catalog.definitions import UseCaseDefinition

CATALOG_SIZE = 8


class UseCaseConfig(BaseModel):
    """A single use case entry in the catalog file."""

    name: str = Field(min_length=1, description="Display name, also the selection key")
    savings_percent: float = Field(
        ge=0, le=100, description="Share of current cost removed by the solution"
    )

    def to_definition(self) -> UseCaseDefinition:
        return UseCaseDefinition(name=self.name, savings_percent=self.savings_percent)


class UseCaseCatalog(BaseModel):
    """Top-level use-case catalog configuration."""

    id: str
    name: str
    version: str
    use_cases: list[UseCaseConfig] = Field(
        min_length=CATALOG_SIZE,
        max_length=CATALOG_SIZE,
        description="Fixed list of use cases, in display order",
    )

    @field_validator("use_cases")
    @classmethod
    def names_unique(cls, v: list[UseCaseConfig]) -> list[UseCaseConfig]:
        seen: set[str] = set()
        for uc in v:
            if uc.name in seen:
                raise ValueError(f"Duplicate use case name: '{uc.name}'")
            seen.add(uc.name)
        return v

    def definitions(self) -> tuple[UseCaseDefinition, ...]:
        return tuple(uc.to_definition() for uc in self.use_cases)

    def names(self) -> list[str]:
        return [uc.name for uc in self.use_cases]
