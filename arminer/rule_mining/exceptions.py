"""Errors raised by the Apriori engine."""


class InvalidOptionsError(ValueError):
    """Mining options are unusable (e.g. non-positive minimum support)."""


class InvariantViolation(RuntimeError):
    """Internal precondition broken, such as asking for more items than exist."""
