"""Game module: session engine, storage and concurrency-safe facade."""

from game.domain import (
    Guess,
    GuessOutcome,
    OutcomeKind,
    Player,
    Session,
    SessionSummary,
)
from game.errors import (
    GameError,
    InvariantViolationError,
    NoActiveSessionError,
    StorageError,
)
from game.storage import GameStore
from game.engine import GameEngine
from game.facade import Game

__all__ = [
    "Guess",
    "GuessOutcome",
    "OutcomeKind",
    "Player",
    "Session",
    "SessionSummary",
    "GameError",
    "InvariantViolationError",
    "NoActiveSessionError",
    "StorageError",
    "GameStore",
    "GameEngine",
    "Game",
]
