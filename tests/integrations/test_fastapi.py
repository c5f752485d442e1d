from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from fetchstate import (
    Failure,
    PaginationState,
    PagingStatus,
    Query,
    SingleState,
    Status,
)
from fetchstate.integrations.fastapi import (
    PaginatedResponse,
    PaginationParams,
    StateResponse,
    register_exception_handlers,
)
from fetchstate.utils.types import DEFAULT_PAGE_SIZE


def test_pagination_params_defaults():
    p = PaginationParams()
    assert p.page == 1
    assert p.size == DEFAULT_PAGE_SIZE == 10


def test_pagination_params_clamps_max():
    p = PaginationParams(page=1, size=999)
    assert p.size == 100


def test_pagination_params_clamps_min():
    p = PaginationParams(page=-3, size=0)
    assert p.page == 1
    assert p.size == 1


def test_pagination_params_to_query():
    query = PaginationParams(page=3, size=15).to_query(params={"q": "x"})
    assert query == Query(page=3, size=15, params={"q": "x"})


def test_paginated_response_from_state():
    state = PaginationState(
        items=[{"name": "Alice"}, {"name": "Bob"}],
        status=PagingStatus.INITIAL,
        query=Query(page=2, size=2),
        reached_max=True,
    )
    resp = PaginatedResponse[dict].from_state(state)
    assert resp.items == [{"name": "Alice"}, {"name": "Bob"}]
    assert resp.status == "initial"
    assert resp.page == 2
    assert resp.size == 2
    assert resp.reached_max is True
    assert resp.error_message is None


def test_state_response_from_state():
    state = SingleState(data="hi", status=Status.ERROR, error_message="stale")
    resp = StateResponse[str].from_state(state)
    assert resp.data == "hi"
    assert resp.status == "error"
    assert resp.error_message == "stale"


def _build_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/items")
    async def list_items(params: PaginationParams = Depends()):
        query = params.to_query()
        state = PaginationState(items=["a", "b"], query=query.next_page())
        return PaginatedResponse[str].from_state(state).model_dump()

    @app.get("/broken")
    async def broken():
        return Failure("upstream down").unwrap()

    @app.get("/bad-cursor")
    async def bad_cursor():
        return Query(page=0, size=1)

    return app


def test_endpoint_uses_pagination_params():
    client = TestClient(_build_app())
    resp = client.get("/items", params={"page": 1, "size": 2})
    assert resp.status_code == 200
    body = resp.json()
    assert body["items"] == ["a", "b"]
    assert body["page"] == 2
    assert body["size"] == 2


def test_unwrap_error_maps_to_502():
    client = TestClient(_build_app())
    resp = client.get("/broken")
    assert resp.status_code == 502
    assert "upstream down" in resp.json()["detail"]


def test_invalid_query_maps_to_422():
    client = TestClient(_build_app())
    resp = client.get("/bad-cursor")
    assert resp.status_code == 422


def test_endpoint_default_page_size():
    client = TestClient(_build_app())
    resp = client.get("/items")
    assert resp.status_code == 200
    assert resp.json()["size"] == DEFAULT_PAGE_SIZE
