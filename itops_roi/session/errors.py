from __future__ import annotations


class CalculatorError(Exception):
    """Base class for errors raised by the form session layer."""


class SessionNotFoundError(CalculatorError):
    def __init__(self, session_id: str):
        super().__init__(f"Session '{session_id}' not found")
        self.session_id = session_id


class UnknownUseCaseError(CalculatorError):
    def __init__(self, name: str):
        super().__init__(f"Unknown use case: '{name}'")
        self.name = name


class UnknownFieldError(CalculatorError):
    def __init__(self, field_name: str, allowed: list[str]):
        super().__init__(
            f"Unknown field '{field_name}'. Expected one of: {sorted(allowed)}"
        )
        self.field_name = field_name
