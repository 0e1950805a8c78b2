"""Concurrency-safe handle on the game engine for async callers.

Every call runs on a bounded worker pool so the event loop never blocks on
vector scans or database writes. Calls touching session state or the
database hold one lock, inside the worker thread, for the whole operation.
Thesaurus queries only read the immutable vector store and skip the lock.
"""

from __future__ import annotations

import asyncio
import functools
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta
from typing import Any, Callable, List, Optional, TypeVar

from game.domain.entities import GuessOutcome, Player, Session, SessionSummary
from game.engine import GameEngine
from words import Neighbor

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Game:
    def __init__(self, engine: GameEngine, max_workers: int = 4):
        self._engine = engine
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="game-worker",
        )
        self._closed = False

    @property
    def engine(self) -> GameEngine:
        return self._engine

    async def _run(self, func: Callable[..., T], *args: Any) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, functools.partial(func, *args))

    def _locked(self, func: Callable[..., T], *args: Any) -> T:
        with self._lock:
            return func(*args)

    async def _run_locked(self, func: Callable[..., T], *args: Any) -> T:
        return await self._run(self._locked, func, *args)

    async def start_session(self, duration: timedelta) -> Session:
        return await self._run_locked(self._engine.start_session, duration)

    async def process_guess(self, nickname: str, guess: str) -> GuessOutcome:
        return await self._run_locked(self._engine.process_guess, nickname, guess)

    async def end_session(self, winner_id: Optional[int] = None) -> Session:
        return await self._run_locked(self._engine.end_session, winner_id)

    async def current_session(self) -> Optional[Session]:
        return await self._run_locked(lambda: self._engine.current_session)

    async def thesaurus(self, term: str, count: int) -> Optional[List[Neighbor]]:
        return await self._run(self._engine.words.thesaurus, term, count)

    async def players(self) -> List[Player]:
        return await self._run_locked(self._engine.store.list_players)

    async def recent_sessions(self, limit: int = 20) -> List[SessionSummary]:
        return await self._run_locked(self._engine.store.recent_sessions, limit)

    async def guess_count(self, session_id: Optional[int] = None) -> int:
        return await self._run_locked(self._engine.store.count_guesses, session_id)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._executor.shutdown(wait=True)
        self._engine.store.close()
        logger.info("Game closed")
