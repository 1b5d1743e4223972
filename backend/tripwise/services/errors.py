"""Errors raised by the planning services."""


class PlanningError(Exception):
    """Base error for planning failures."""


class SearchTimeoutError(PlanningError):
    """Raised when a search batch does not finish before its deadline."""
