"""
fetchstate Quick Start Example

A small tour of the fetch state machines against an in-memory backend.

Features covered:
- Single fetches and their status transitions
- Failures and raised exceptions turning into error states
- Paginated fetches with accumulation and the continuation guard
- Holders configured through an inner Settings class

Run with: python example_quickstart.py
"""

import asyncio

from fetchstate import (
    Failure,
    FetchHolder,
    PagedHolder,
    Query,
    SingleState,
    Success,
    capture,
    enable_tracing,
    add_listener,
    run_single_fetch,
)


# ============================================================================
# 1. A FAKE BACKEND
# ============================================================================

BOOKS = [f"Book #{i}" for i in range(1, 8)]


async def get_book(book_id: int):
    await asyncio.sleep(0.01)
    if book_id > len(BOOKS):
        return Failure("not found")
    return Success(BOOKS[book_id - 1])


async def list_books(query: Query):
    await asyncio.sleep(0.01)
    return Success(BOOKS[query.offset : query.offset + query.size])


async def flaky_call():
    raise ConnectionError("connection reset by peer")


# ============================================================================
# 2. HOLDERS
# ============================================================================


class BookHolder(FetchHolder[str]):
    class Settings:
        name = "book"


class ShelfHolder(PagedHolder[str]):
    class Settings:
        name = "shelf"
        page_size = 3


# ============================================================================
# 3. ASYNC MAIN FUNCTION
# ============================================================================


async def main():
    """Run the quickstart example."""
    enable_tracing()
    add_listener(lambda event: print(f"   [trace] {event.operation} {event.name}: {event.outcome_status}"))

    # ====== SINGLE FETCH ======
    print("1️⃣  SINGLE FETCH - Plain callback style")
    await run_single_fetch(
        get_book(1),
        SingleState(),
        lambda state: print(f"   emit: {state.status.value:<8} data={state.data!r}"),
    )

    # ====== FAILURE ======
    print("\n2️⃣  FAILURE - A book that does not exist")
    holder = BookHolder()
    await holder.load(get_book(99), lambda status: print(f"   status -> {status.value}"))
    print(f"   Error kept after returning to rest: {holder.state.error_message}")

    # ====== EXCEPTION ======
    print("\n3️⃣  EXCEPTION - Transport errors become error states too")
    await holder.load(capture(flaky_call()))
    print(f"   Error: {holder.state.error_message}")

    # ====== PAGINATION ======
    print("\n4️⃣  PAGINATION - Loading the shelf page by page")
    shelf = ShelfHolder(list_books)
    shelf.listen(lambda state: print(f"   {state.status.value:<8} page={state.query.page} items={len(state.items)}"))
    await shelf.refresh()
    while shelf.state.reached_max and not shelf.state.has_error:
        await shelf.load_more()
    print(f"   Loaded: {shelf.state.items}")

    # ====== GUARD ======
    print("\n5️⃣  GUARD - Nothing happens once a short page came back")
    await shelf.load_more()
    print(f"   Still {len(shelf.state.items)} items")

    print("\n✅ All operations completed successfully!")


# ============================================================================
# 4. RUN THE EXAMPLE
# ============================================================================

if __name__ == "__main__":
    print("\n" + "=" * 60)
    print("FETCHSTATE QUICKSTART EXAMPLE")
    print("=" * 60 + "\n")

    asyncio.run(main())
