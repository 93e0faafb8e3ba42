from .formatting import format_currency, format_number, format_payback, format_percent
from .views import (
    ResultsView,
    SessionView,
    build_results_view,
    build_session_view,
    build_tabs,
)

__all__ = [
    "ResultsView",
    "SessionView",
    "build_results_view",
    "build_session_view",
    "build_tabs",
    "format_currency",
    "format_number",
    "format_payback",
    "format_percent",
]
