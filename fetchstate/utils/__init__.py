from fetchstate.utils.exceptions import (
    FetchStateError,
    UnwrapError,
    InvalidOutcome,
)
from fetchstate.utils.settings import SettingsResolver
from fetchstate.utils.types import (
    ContinuationGuard,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
)

__all__ = [
    "FetchStateError",
    "UnwrapError",
    "InvalidOutcome",
    "SettingsResolver",
    "ContinuationGuard",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
]
