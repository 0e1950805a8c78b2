"""CLI Application for the word game.

This module wires the configured vocabulary, database, engine and chat
handler together and exposes the operations used by the CLI commands.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from chat.handler import ChatHandler, ChatResponse
from config import AppConfig, ConfigLoader
from game.domain.entities import GuessOutcome, Player, Session, SessionSummary
from game.engine import GameEngine
from game.facade import Game
from game.storage.session_store import MEMORY_DB, GameStore
from words import Neighbor, VectorStore

logger = logging.getLogger(__name__)


class GameCLIApp:
    def __init__(
        self,
        config_dir: Optional[Path] = None,
        base_dir: Optional[Path] = None,
        config: Optional[AppConfig] = None,
    ):
        if config is None:
            config = ConfigLoader(config_dir).load_app_config()

        if base_dir is None:
            base_dir = Path(__file__).parent.parent.parent.parent

        self._config = config
        self._base_dir = Path(base_dir)

        self._words = VectorStore.load(
            self._resolve(config.words.model_file),
            normalize=config.words.normalize,
        )

        db_path = config.storage.db_path
        self._store = GameStore(db_path if db_path == MEMORY_DB else self._resolve(db_path))
        try:
            self._engine = GameEngine.load(
                self._store,
                self._words,
                win_points=config.game.win_points,
            )
        except Exception:
            self._store.close()
            raise

        self._game = Game(self._engine, max_workers=config.game.worker_threads)
        self._chat = ChatHandler(
            self._game,
            config.chat,
            session_duration=self.session_duration,
        )
        logger.info("GameCLIApp initialized with base_dir=%s", self._base_dir)

    def _resolve(self, path: str) -> Path:
        candidate = Path(path)
        if candidate.is_absolute():
            return candidate
        return self._base_dir / candidate

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def engine(self) -> GameEngine:
        return self._engine

    @property
    def game(self) -> Game:
        return self._game

    @property
    def chat(self) -> ChatHandler:
        return self._chat

    @property
    def session_duration(self) -> timedelta:
        return timedelta(seconds=self._config.game.session_duration_seconds)

    async def start_session(self) -> Session:
        return await self._game.start_session(self.session_duration)

    async def process_guess(self, nickname: str, word: str) -> GuessOutcome:
        return await self._game.process_guess(nickname, word)

    async def thesaurus(self, word: str, count: int) -> Optional[List[Neighbor]]:
        return await self._game.thesaurus(word, count)

    async def list_players(self) -> List[Player]:
        return await self._game.players()

    async def list_sessions(self, limit: Optional[int] = None) -> List[SessionSummary]:
        if limit is None:
            limit = self._config.dashboard.recent_sessions_limit
        return await self._game.recent_sessions(limit)

    async def handle_chat_line(self, nickname: str, line: str) -> Optional[ChatResponse]:
        return await self._chat.handle_message(nickname, line)

    async def get_status(self) -> Dict[str, Any]:
        session = await self._game.current_session()
        status: Dict[str, Any] = {
            "active": session is not None,
            "session_id": None,
            "started_at": None,
            "planned_end_at": None,
            "overdue": False,
            "guess_count": 0,
            "vocabulary_size": self._words.size,
            "dimension": self._words.dimension,
        }
        if session is not None:
            status.update(
                session_id=session.id,
                started_at=session.started_at.isoformat(),
                planned_end_at=session.planned_end_at.isoformat(),
                overdue=session.is_overdue(datetime.now(timezone.utc)),
                guess_count=await self._game.guess_count(session.id),
            )
        return status

    async def close(self) -> None:
        await self._game.close()
        logger.info("GameCLIApp closed")
