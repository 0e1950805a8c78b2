"""Domain entities for the word guessing game.

This module defines the records kept for a round of play:
- Player: a nickname seen on the channel and its cumulative score
- Session: one round, with its secret word and optional winner
- Guess: one scored attempt against a session's secret word
- GuessOutcome: what processing a guess produced
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Player(BaseModel):
    id: int
    nickname: str
    score: int = 0


class Session(BaseModel):
    id: int
    started_at: datetime
    planned_end_at: datetime
    ended_at: Optional[datetime] = None
    secret_word: str
    winner_id: Optional[int] = None
    active: bool = True

    @property
    def has_winner(self) -> bool:
        return self.winner_id is not None

    def is_overdue(self, now: datetime) -> bool:
        """Whether an active round has outlived its planned end.

        The planned end is informational; nothing ends a round because of it.
        """
        return self.active and now >= self.planned_end_at


class SessionSummary(Session):
    winner_nickname: Optional[str] = None
    guess_count: int = 0


class Guess(BaseModel):
    id: int
    session_id: int
    player_id: int
    guess: str
    similarity: float = Field(ge=-1.0, le=1.0)


class OutcomeKind(str, Enum):
    WIN = "win"
    MISS = "miss"
    UNKNOWN_WORD = "unknown_word"


class GuessOutcome(BaseModel):
    kind: OutcomeKind
    similarity: Optional[float] = None

    @classmethod
    def win(cls) -> "GuessOutcome":
        return cls(kind=OutcomeKind.WIN, similarity=1.0)

    @classmethod
    def miss(cls, similarity: float) -> "GuessOutcome":
        return cls(kind=OutcomeKind.MISS, similarity=similarity)

    @classmethod
    def unknown_word(cls) -> "GuessOutcome":
        return cls(kind=OutcomeKind.UNKNOWN_WORD)

    @property
    def is_win(self) -> bool:
        return self.kind == OutcomeKind.WIN
