class SugarscapeError(Exception):
    """Base class for all errors raised by the sugarscape engine."""


class InvalidConfiguration(SugarscapeError, ValueError):
    """Run parameters that cannot produce a valid world. Raised at construction, never while stepping."""


class CapacityExhausted(SugarscapeError, RuntimeError):
    """No empty cell is left to place a new agent."""
