"""Domain models for the word game."""

from game.domain.entities import (
    Guess,
    GuessOutcome,
    OutcomeKind,
    Player,
    Session,
    SessionSummary,
)

__all__ = [
    "Guess",
    "GuessOutcome",
    "OutcomeKind",
    "Player",
    "Session",
    "SessionSummary",
]
