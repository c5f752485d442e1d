from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from fetchstate.core.query import Query
from fetchstate.core.state import PaginationState, SingleState
from fetchstate.utils.exceptions import FetchStateError, UnwrapError
from fetchstate.utils.types import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

T = TypeVar("T")


class PaginationParams:
    """FastAPI dependency for pagination parameters.

    Out-of-range values are clamped rather than rejected, so any request
    maps onto a valid Query.
    """

    def __init__(self, page: int = 1, size: int = DEFAULT_PAGE_SIZE):
        self.page = max(1, page)
        self.size = min(max(1, size), MAX_PAGE_SIZE)

    def to_query(self, params: Any = None) -> Query:
        return Query(page=self.page, size=self.size, params=params)


class PaginatedResponse(BaseModel, Generic[T]):
    """Response model exposing a pagination snapshot to API clients."""

    items: list[T]
    status: str
    page: int
    size: int
    reached_max: bool
    error_message: Optional[str] = None

    @classmethod
    def from_state(cls, state: PaginationState) -> PaginatedResponse:
        """Build a response from a snapshot.

        ``page`` is the cursor's page, i.e. the next page to request.
        """
        return cls(
            items=list(state.items),
            status=state.status.value,
            page=state.query.page,
            size=state.query.size,
            reached_max=state.reached_max,
            error_message=state.error_message,
        )


class StateResponse(BaseModel, Generic[T]):
    """Response model exposing a single-fetch snapshot to API clients."""

    data: Optional[T] = None
    status: str
    error_message: Optional[str] = None

    @classmethod
    def from_state(cls, state: SingleState) -> StateResponse:
        return cls(
            data=state.data,
            status=state.status.value,
            error_message=state.error_message,
        )


def register_exception_handlers(app: Any) -> None:
    """Register fetchstate exception handlers on a FastAPI app."""

    @app.exception_handler(UnwrapError)
    async def unwrap_error_handler(request: Any, exc: UnwrapError):
        return JSONResponse(status_code=502, content={"detail": str(exc)})

    @app.exception_handler(FetchStateError)
    async def fetchstate_error_handler(request: Any, exc: FetchStateError):
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    @app.exception_handler(ValidationError)
    async def invalid_query_handler(request: Any, exc: ValidationError):
        return JSONResponse(status_code=422, content={"detail": exc.errors(include_url=False)})
