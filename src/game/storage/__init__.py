"""Storage module for players, sessions and guesses."""

from game.storage.session_store import (
    GameStore,
    from_timestamp,
    to_timestamp,
)

__all__ = [
    "GameStore",
    "from_timestamp",
    "to_timestamp",
]
