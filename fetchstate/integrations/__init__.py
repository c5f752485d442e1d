from fetchstate.integrations.fastapi import (
    PaginationParams,
    PaginatedResponse,
    StateResponse,
    register_exception_handlers,
)

__all__ = [
    "PaginationParams",
    "PaginatedResponse",
    "StateResponse",
    "register_exception_handlers",
]
