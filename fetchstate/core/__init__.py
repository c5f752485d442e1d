from fetchstate.core.outcome import Success, Failure, Outcome, capture
from fetchstate.core.query import Query
from fetchstate.core.state import Status, PagingStatus, SingleState, PaginationState
from fetchstate.core.fetcher import (
    run_single_fetch,
    run_paged_fetch,
    blocks_continuation,
    blocks_exhausted,
)
from fetchstate.core.holder import StateHolder, FetchHolder, PagedHolder

__all__ = [
    "Success",
    "Failure",
    "Outcome",
    "capture",
    "Query",
    "Status",
    "PagingStatus",
    "SingleState",
    "PaginationState",
    "run_single_fetch",
    "run_paged_fetch",
    "blocks_continuation",
    "blocks_exhausted",
    "StateHolder",
    "FetchHolder",
    "PagedHolder",
]
