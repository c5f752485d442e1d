class FetchStateError(Exception):
    """Base exception for all fetchstate errors."""


class UnwrapError(FetchStateError):
    """Raised when the value of a Failure outcome is requested."""


class InvalidOutcome(FetchStateError):
    """Raised when a pending fetch resolves to something other than an Outcome."""
