import asyncio

import pytest

from fetchstate import (
    Failure,
    SingleState,
    Status,
    Success,
    run_single_fetch,
)


async def resolved(value):
    return value


async def raising(exc):
    raise exc


class TestSingleFetchSuccess:
    async def test_emits_loading_success_initial(self, recorder):
        await run_single_fetch(resolved(Success("Hello world")), SingleState(), recorder.emit)

        assert recorder.states == [
            SingleState(status=Status.LOADING),
            SingleState(status=Status.SUCCESS, data="Hello world"),
            SingleState(status=Status.INITIAL, data="Hello world"),
        ]

    async def test_status_notifications_follow_emits(self, recorder):
        await run_single_fetch(
            resolved(Success(42)), SingleState(), recorder.emit, recorder.on_status
        )
        assert recorder.statuses == [Status.LOADING, Status.SUCCESS, Status.INITIAL]
        assert [s.status for s in recorder.states] == recorder.statuses

    async def test_replaces_previous_data(self, recorder):
        await run_single_fetch(resolved(Success("new")), SingleState(data="old"), recorder.emit)
        assert recorder.states[0].data == "old"
        assert recorder.last.data == "new"

    async def test_success_keeps_previous_error_message(self, recorder):
        start = SingleState(data="old", error_message="timeout")
        await run_single_fetch(resolved(Success("new")), start, recorder.emit)
        assert recorder.last == SingleState(data="new", status=Status.INITIAL, error_message="timeout")

    async def test_success_without_value(self, recorder):
        await run_single_fetch(resolved(Success()), SingleState(), recorder.emit)
        assert recorder.states[1] == SingleState(status=Status.SUCCESS)
        assert recorder.last.no_data

    async def test_input_state_is_not_modified(self, recorder):
        start = SingleState(data="old")
        await run_single_fetch(resolved(Success("new")), start, recorder.emit)
        assert start == SingleState(data="old")

    async def test_accepts_future(self, recorder):
        future = asyncio.get_running_loop().create_future()
        future.set_result(Success("from future"))
        await run_single_fetch(future, SingleState(), recorder.emit)
        assert recorder.last.data == "from future"


class TestSingleFetchFailure:
    async def test_emits_loading_error_initial(self, recorder):
        await run_single_fetch(
            resolved(Failure("Something went wrong")), SingleState(), recorder.emit
        )

        assert recorder.states == [
            SingleState(status=Status.LOADING),
            SingleState(status=Status.ERROR, error_message="Something went wrong"),
            SingleState(status=Status.INITIAL, error_message="Something went wrong"),
        ]

    async def test_not_found_scenario(self, recorder):
        await run_single_fetch(
            resolved(Failure("not found")), SingleState(), recorder.emit, recorder.on_status
        )
        assert Status.ERROR in recorder.statuses
        assert recorder.states[1].status is Status.ERROR
        assert recorder.last.status is Status.INITIAL
        assert recorder.last.error_message == "not found"

    async def test_failure_keeps_data(self, recorder):
        await run_single_fetch(resolved(Failure("boom")), SingleState(data=7), recorder.emit)
        assert recorder.states[1] == SingleState(data=7, status=Status.ERROR, error_message="boom")
        assert recorder.last.data == 7

    async def test_exception_becomes_error_state(self, recorder):
        await run_single_fetch(
            raising(RuntimeError("connection reset")),
            SingleState(),
            recorder.emit,
            recorder.on_status,
        )

        assert [s.status for s in recorder.states] == [Status.LOADING, Status.ERROR, Status.INITIAL]
        assert recorder.states[1].error_message == "connection reset"
        assert recorder.last.error_message == "connection reset"
        assert recorder.statuses == [Status.LOADING, Status.ERROR, Status.INITIAL]

    async def test_exception_without_message_uses_class_name(self, recorder):
        await run_single_fetch(raising(TimeoutError()), SingleState(), recorder.emit)
        assert recorder.last.error_message == "TimeoutError"

    async def test_non_outcome_result_is_an_error(self, recorder):
        await run_single_fetch(resolved({"id": 1}), SingleState(), recorder.emit)
        assert recorder.states[1].status is Status.ERROR
        assert "dict" in recorder.states[1].error_message
        assert recorder.last.status is Status.INITIAL

    async def test_error_is_not_raised_to_caller(self, recorder):
        # Completes without raising
        await run_single_fetch(raising(ValueError("bad")), SingleState(), recorder.emit)
        assert len(recorder.states) == 3


class TestSingleFetchCancellation:
    async def test_cancellation_propagates_after_return_to_initial(self, recorder):
        async def cancelled():
            raise asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await run_single_fetch(cancelled(), SingleState(), recorder.emit)

        assert [s.status for s in recorder.states] == [Status.LOADING, Status.INITIAL]
