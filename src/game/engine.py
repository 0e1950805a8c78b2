"""Game engine owning the single live session.

The engine is not thread-safe. Concurrent callers go through
``game.facade.Game``, which serializes every operation. Writes re-read the
stored current-session pointer first, so rounds started or won by another
process on the same database are followed.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from game.domain.entities import GuessOutcome, Session
from game.errors import InvariantViolationError, NoActiveSessionError
from game.storage.session_store import GameStore
from words import VectorStore

logger = logging.getLogger(__name__)

# Highest score a guess other than the secret word can get.
MAX_MISS_SIMILARITY = math.nextafter(1.0, 0.0)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_guess(text: str) -> str:
    return text.strip().lower()


def clamp_similarity(value: float) -> float:
    return min(max(value, -1.0), MAX_MISS_SIMILARITY)


class GameEngine:
    def __init__(
        self,
        store: GameStore,
        words: VectorStore,
        clock: Optional[Callable[[], datetime]] = None,
        win_points: int = 1,
    ):
        if win_points < 0:
            raise ValueError("win_points must not be negative")

        self._store = store
        self._words = words
        self._clock = clock or utcnow
        self._win_points = win_points
        self._session: Optional[Session] = None

    @classmethod
    def load(
        cls,
        store: GameStore,
        words: VectorStore,
        clock: Optional[Callable[[], datetime]] = None,
        win_points: int = 1,
    ) -> "GameEngine":
        """Build an engine and resume the round recorded as current, if any."""
        engine = cls(store, words, clock=clock, win_points=win_points)

        session = engine._read_current_session()
        if session is None:
            logger.info("No game in progress")
            return engine

        engine._session = session
        logger.info(
            "Loaded game session id=%d, planned end %s",
            session.id,
            session.planned_end_at.isoformat(),
        )
        return engine

    @property
    def store(self) -> GameStore:
        return self._store

    @property
    def words(self) -> VectorStore:
        return self._words

    @property
    def current_session(self) -> Optional[Session]:
        return self._session

    @property
    def is_active(self) -> bool:
        return self._session is not None

    @property
    def secret_word(self) -> Optional[str]:
        return self._session.secret_word if self._session else None

    def _read_current_session(self) -> Optional[Session]:
        session_id = self._store.current_session_id()
        if session_id is None:
            return None

        session = self._store.get_session(session_id)
        if session is None or not session.active:
            logger.error("Current session pointer refers to session %s which is not active", session_id)
            raise InvariantViolationError(
                f"current session {session_id} is missing or already ended"
            )

        if session.secret_word not in self._words:
            logger.error(
                "Secret word of session %d is not in the loaded vocabulary; guesses will fail",
                session.id,
            )
        return session

    def _sync_session(self) -> Optional[Session]:
        """Follow the database's current round; another process may have moved it."""
        session = self._read_current_session()
        known_id = self._session.id if self._session else None
        current_id = session.id if session else None
        if known_id != current_id:
            logger.warning(
                "Current session changed outside this engine: %s -> %s", known_id, current_id
            )
        self._session = session
        return session

    def start_session(self, duration: timedelta) -> Session:
        """End the running round without a winner, if any, and start a new one."""
        if duration <= timedelta(0):
            raise ValueError(f"duration must be positive, got {duration}")

        word = self._words.random_term()
        started_at = self._clock()
        planned_end_at = started_at + duration

        with self._store.transaction():
            previous = self._sync_session()
            if previous is not None:
                self._close(previous, started_at, winner_id=None)
            session = self._store.create_session(started_at, planned_end_at, word)
            self._store.set_current_session(session.id)

        if previous is not None:
            logger.info("Session %d ended with no winner", previous.id)

        self._session = session
        logger.info(
            "New game started at %s, will end at %s (session_id=%d)",
            session.started_at.isoformat(),
            session.planned_end_at.isoformat(),
            session.id,
        )
        logger.debug("Secret word for session %d is %r", session.id, word)
        return session

    def process_guess(self, nickname: str, guess_text: str) -> GuessOutcome:
        if not nickname:
            raise ValueError("nickname must not be empty")

        guess = normalize_guess(guess_text)

        with self._store.transaction():
            session = self._sync_session()
            if session is None:
                raise NoActiveSessionError()

            player, created = self._store.get_or_create_player(nickname)
            if created:
                logger.info("New player %r (id=%d)", nickname, player.id)

            if guess not in self._words:
                logger.debug("Unknown word %r from %s", guess, nickname)
                return GuessOutcome.unknown_word()

            similarity = self._score(session, guess)
            self._store.insert_guess(session.id, player.id, guess, similarity)

            won = guess == session.secret_word
            if won:
                self._close(session, self._clock(), winner_id=player.id)

        if won:
            self._session = None
            logger.info("Session %d won by %s", session.id, nickname)
            return GuessOutcome.win()

        logger.debug("Miss by %s on session %d: %r scored %.4f", nickname, session.id, guess, similarity)
        return GuessOutcome.miss(similarity)

    def end_session(self, winner_id: Optional[int] = None) -> Session:
        with self._store.transaction():
            session = self._sync_session()
            if session is None:
                raise NoActiveSessionError()
            ended = self._close(session, self._clock(), winner_id=winner_id)

        self._session = None
        logger.info("Session %d ended (winner_id=%s)", session.id, winner_id)
        return ended

    def _score(self, session: Session, guess: str) -> float:
        if guess == session.secret_word:
            return 1.0

        similarity = self._words.similarity(guess, session.secret_word)
        if similarity is None:
            logger.error(
                "Secret word of session %d is missing from the vocabulary", session.id
            )
            raise InvariantViolationError(
                "could not find target word in vocabulary: this is a bug"
            )
        return clamp_similarity(similarity)

    def _close(
        self,
        session: Session,
        ended_at: datetime,
        winner_id: Optional[int],
    ) -> Session:
        ended = self._store.end_session(session.id, ended_at, winner_id)
        self._store.set_current_session(None)
        if winner_id is not None and self._win_points:
            self._store.add_score(winner_id, self._win_points)
        return ended
