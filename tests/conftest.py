import itertools

import pytest

from auction_ledger import AuctionHouse, MemoryStore

NOW = 1_700_000_000  # 2023-11-14T22:13:20Z
FUTURE = "2024-01-01T00:00:00Z"
FUTURE_TS = 1_704_067_200
PAST = "2023-01-01T00:00:00Z"


class FakeClock:
    def __init__(self, now: float = NOW) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def house(store, clock) -> AuctionHouse:
    counter = itertools.count(1)
    return AuctionHouse(store, clock=clock, new_id=lambda: f"item-{next(counter):04d}")
