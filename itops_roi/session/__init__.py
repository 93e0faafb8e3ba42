"""Form session state: inputs, debounced recalculation and the latest result."""

from .debounce import Debouncer
from .errors import (
    CalculatorError,
    SessionNotFoundError,
    UnknownFieldError,
    UnknownUseCaseError,
)
from .state import CalculatorSession
from .store import SessionStore

__all__ = [
    "CalculatorError",
    "CalculatorSession",
    "Debouncer",
    "SessionNotFoundError",
    "SessionStore",
    "UnknownFieldError",
    "UnknownUseCaseError",
]
