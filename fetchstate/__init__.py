from fetchstate.core import (
    Success,
    Failure,
    Outcome,
    capture,
    Query,
    Status,
    PagingStatus,
    SingleState,
    PaginationState,
    run_single_fetch,
    run_paged_fetch,
    blocks_continuation,
    blocks_exhausted,
    StateHolder,
    FetchHolder,
    PagedHolder,
)
from fetchstate.lifecycle import (
    enable_tracing,
    disable_tracing,
    FetchEvent,
    add_listener,
)
from fetchstate.utils import (
    FetchStateError,
    UnwrapError,
    InvalidOutcome,
)

__all__ = [
    # Outcomes
    "Success",
    "Failure",
    "Outcome",
    "capture",
    # State
    "Query",
    "Status",
    "PagingStatus",
    "SingleState",
    "PaginationState",
    # Machines
    "run_single_fetch",
    "run_paged_fetch",
    "blocks_continuation",
    "blocks_exhausted",
    # Holders
    "StateHolder",
    "FetchHolder",
    "PagedHolder",
    # Lifecycle
    "enable_tracing",
    "disable_tracing",
    "FetchEvent",
    "add_listener",
    # Utils
    "FetchStateError",
    "UnwrapError",
    "InvalidOutcome",
]
