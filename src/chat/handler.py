"""Chat-side handling of channel messages.

The handler receives one raw line at a time with the sender's nickname and
decides whether the bot should react. Messages starting with ``!`` are
commands. Saying the bot's nickname wakes it up; while awake, a bare single
word is taken as a guess and keeps the bot awake.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Callable, Dict, List, Optional

from chat.commands import (
    CommandSyntaxError,
    GuessCommand,
    HelpCommand,
    StartCommand,
    ThesaurusCommand,
    UnrecognizedCommand,
    is_command,
    parse_command,
)
from config import ChatConfig
from game.domain.entities import OutcomeKind
from game.engine import normalize_guess
from game.errors import GameError, NoActiveSessionError
from game.facade import Game
from words import Neighbor

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "find the secret word! "
    "!guess <word> to try a word, "
    "!thesaurus <word> [count] for the closest words, "
    "!start to begin a new round"
)


@dataclass
class ChatResponse:
    message: str
    game_over: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)


def format_neighbors(word: str, neighbors: Optional[List[Neighbor]]) -> str:
    if neighbors is None:
        return f"{word}: term not found"
    if not neighbors:
        return f"{word}: no neighbors"
    return ", ".join(f"{n.term} {n.similarity:.4f}" for n in neighbors)


class ChatHandler:
    def __init__(
        self,
        game: Game,
        config: Optional[ChatConfig] = None,
        session_duration: timedelta = timedelta(days=1),
        clock: Callable[[], float] = time.monotonic,
    ):
        self._game = game
        self._config = config or ChatConfig()
        self._session_duration = session_duration
        self._clock = clock
        self._last_wakeup: Optional[float] = None

    @property
    def nickname(self) -> str:
        return self._config.nickname

    def is_awake(self) -> bool:
        if self._last_wakeup is None:
            return False
        return self._clock() - self._last_wakeup < self._config.awake_seconds

    def _wake_up(self) -> None:
        self._last_wakeup = self._clock()

    async def handle_message(self, nickname: str, text: str) -> Optional[ChatResponse]:
        """Return the reply for one message, or None if it is not for the bot."""
        message = text.strip()
        if not message:
            return None

        if message == self._config.nickname:
            logger.debug("Woken up by %s", nickname)
            self._wake_up()
            return ChatResponse(message=self._config.wake_reply)

        if is_command(message):
            return await self._handle_command(nickname, message)

        if len(message.split()) == 1 and self.is_awake():
            self._wake_up()
            return await self._handle_guess(nickname, message)

        return None

    async def _handle_command(self, nickname: str, message: str) -> Optional[ChatResponse]:
        try:
            command = parse_command(message)
        except UnrecognizedCommand:
            return None
        except CommandSyntaxError as exc:
            return ChatResponse(
                message=f"syntax error: expected `{exc.expected}`",
                metadata={"error": True},
            )

        if isinstance(command, GuessCommand):
            return await self._handle_guess(nickname, command.word)
        elif isinstance(command, ThesaurusCommand):
            return await self._handle_thesaurus(command)
        elif isinstance(command, StartCommand):
            return await self._handle_start(nickname)
        elif isinstance(command, HelpCommand):
            return ChatResponse(message=HELP_TEXT)
        return None

    async def _handle_guess(self, nickname: str, word: str) -> ChatResponse:
        try:
            outcome = await self._game.process_guess(nickname, word)
        except NoActiveSessionError:
            return ChatResponse(message="no game in progress", metadata={"error": True})
        except Exception as exc:
            return self._failure(exc, "processing a guess")

        if outcome.kind == OutcomeKind.WIN:
            return ChatResponse(
                message=f"{nickname} guessed the word!",
                game_over=True,
                metadata={"outcome": outcome.kind.value},
            )
        if outcome.kind == OutcomeKind.MISS:
            return ChatResponse(
                message=f"miss ({outcome.similarity:.4f})",
                metadata={"outcome": outcome.kind.value, "similarity": outcome.similarity},
            )
        return ChatResponse(message="unknown word", metadata={"outcome": outcome.kind.value})

    async def _handle_thesaurus(self, command: ThesaurusCommand) -> ChatResponse:
        count = command.count
        if count is None:
            count = self._config.default_thesaurus_count
        count = min(count, self._config.max_thesaurus_count)
        word = normalize_guess(command.word)

        try:
            neighbors = await self._game.thesaurus(word, count)
        except Exception as exc:
            return self._failure(exc, "running a thesaurus query")

        return ChatResponse(message=format_neighbors(word, neighbors))

    async def _handle_start(self, nickname: str) -> ChatResponse:
        try:
            session = await self._game.start_session(self._session_duration)
        except Exception as exc:
            return self._failure(exc, "starting a game")

        logger.info("%s started session %d", nickname, session.id)
        return ChatResponse(message="game started", metadata={"session_id": session.id})

    def _failure(self, exc: Exception, action: str) -> ChatResponse:
        if isinstance(exc, GameError):
            logger.error("Failed while %s: %s", action, exc)
        else:
            logger.exception("Unexpected error while %s", action)
        return ChatResponse(
            message=f"something went wrong (`{exc}`)",
            metadata={"error": True},
        )
