"""Fixed catalog of IT operations use cases."""

from .definitions import UseCaseDefinition
from .loader import default_use_cases, get_default_catalog, load_catalog
from .schema import UseCaseCatalog, UseCaseConfig

__all__ = [
    "UseCaseCatalog",
    "UseCaseConfig",
    "UseCaseDefinition",
    "default_use_cases",
    "get_default_catalog",
    "load_catalog",
]
