from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from fetchstate.utils.types import DEFAULT_PAGE_SIZE

Q = TypeVar("Q")

_UNSET: Any = object()


class Query(BaseModel, Generic[Q]):
    """Immutable page cursor for paginated fetches.

    ``params`` carries caller-defined filter or search parameters and plays
    no part in the paging arithmetic.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    page: int = Field(default=1, ge=1)
    size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)
    params: Optional[Q] = None

    @classmethod
    def initial(cls, size: int = DEFAULT_PAGE_SIZE, params: Q | None = None) -> Query[Q]:
        """Cursor for the first page."""
        return cls(page=1, size=size, params=params)

    def copy_with(
        self,
        *,
        page: int | None = None,
        size: int | None = None,
        params: Any = _UNSET,
    ) -> Query[Q]:
        """Return a new validated cursor with the given fields overridden."""
        return type(self)(
            page=self.page if page is None else page,
            size=self.size if size is None else size,
            params=self.params if params is _UNSET else params,
        )

    def next_page(self) -> Query[Q]:
        return self.copy_with(page=self.page + 1)

    def first_page(self) -> Query[Q]:
        return self.copy_with(page=1)

    @property
    def is_first_page(self) -> bool:
        return self.page == 1

    @property
    def offset(self) -> int:
        """Number of records before this page, for offset-based backends."""
        return (self.page - 1) * self.size
