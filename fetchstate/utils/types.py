from typing import Any, Callable

# Returns True when a continuation page fetch must not run
ContinuationGuard = Callable[[Any], bool]

# Constants
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100  # Upper bound applied to request-supplied sizes
