import pytest

from fetchstate import disable_tracing


class Recorder:
    """Collects emitted snapshots and status notifications in call order."""

    def __init__(self) -> None:
        self.states: list = []
        self.statuses: list = []

    def emit(self, state) -> None:
        self.states.append(state)

    def on_status(self, status) -> None:
        self.statuses.append(status)

    @property
    def last(self):
        return self.states[-1]


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture(autouse=True)
def reset_tracing():
    """Reset observability state between tests."""
    yield
    disable_tracing()
