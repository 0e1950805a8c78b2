"""Shared fixtures: a three-word vocabulary and an in-memory game database."""

from datetime import datetime, timedelta, timezone

import numpy as np
import pytest

from game.engine import GameEngine
from game.storage import GameStore
from words import VectorStore, write_word2vec_binary

TERMS = ["cat", "dog", "fish"]
VECTORS = np.array(
    [
        [1.0, 0.0],
        [0.6, 0.8],
        [0.0, 1.0],
    ],
    dtype=np.float32,
)


class FixedChoice:
    """Stands in for random.Random so the secret word is predictable."""

    def __init__(self, index: int = 0):
        self.index = index

    def randrange(self, stop: int) -> int:
        return self.index % stop


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def words():
    # "dog" is the secret word unless a test says otherwise.
    return VectorStore(TERMS, VECTORS, rng=FixedChoice(1))


@pytest.fixture
def model_file(tmp_path):
    path = tmp_path / "word2vec.bin"
    write_word2vec_binary(path, TERMS, VECTORS)
    return path


@pytest.fixture
def store():
    store = GameStore()
    yield store
    store.close()


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def engine(store, words, clock):
    return GameEngine(store, words, clock=clock)
