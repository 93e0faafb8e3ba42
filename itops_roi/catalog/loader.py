"""Load and validate the use-case catalog from JSON files."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path

from itops_roi.catalog.definitions import UseCaseDefinition
from itops_roi.catalog.schema import UseCaseCatalog

# Default directory for catalog files
_CONFIG_DIR = Path(__file__).parent / "configs"


def load_catalog(file_path: Path | None = None) -> UseCaseCatalog:
    """Load and validate a use-case catalog from a JSON file.

    If no path is provided, loads the bundled IT operations catalog.
    """
    if file_path is None:
        file_path = _CONFIG_DIR / "it_operations_v1.json"

    if not file_path.exists():
        raise FileNotFoundError(f"Use case catalog not found: {file_path}")

    with open(file_path, "r") as f:
        raw = json.load(f)

    return UseCaseCatalog.model_validate(raw)


@lru_cache
def get_default_catalog() -> UseCaseCatalog:
    """Load the bundled IT operations catalog (cached)."""
    return load_catalog()


def default_use_cases() -> tuple[UseCaseDefinition, ...]:
    return get_default_catalog().definitions()
