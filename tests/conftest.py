import datetime as dt

import pytest

from focusplay.app import create_app


def local_ms(*args) -> int:
    """Epoch ms for a local wall-clock time, e.g. local_ms(2026, 10, 14, 9, 0)."""
    return int(dt.datetime(*args).timestamp() * 1000)


class FakeClock:
    def __init__(self, start_ms: int):
        self.now = start_ms

    def __call__(self) -> int:
        return self.now

    def advance(self, minutes: float = 0, days: float = 0) -> None:
        self.now += int(minutes * 60_000 + days * 86_400_000)


@pytest.fixture
def clock():
    # Wednesday morning
    return FakeClock(local_ms(2026, 10, 14, 9, 0))


@pytest.fixture
def app(clock):
    a = create_app(":memory:", clock=clock)
    yield a
    a.close()
