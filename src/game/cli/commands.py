"""CLI command handlers for the word game.

This module provides individual command implementations that can be used
by the CLI entry point or tested independently.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from game.cli.app import GameCLIApp
from game.engine import normalize_guess
from game.errors import NoActiveSessionError

QUIT_COMMANDS = ("/quit", "/exit")


@dataclass
class CommandResult:
    success: bool
    message: str
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


async def start_session(app: GameCLIApp) -> CommandResult:
    try:
        session = await app.start_session()
        return CommandResult(
            success=True,
            message=f"Session started: {session.id}",
            data={
                "session_id": session.id,
                "started_at": session.started_at.isoformat(),
                "planned_end_at": session.planned_end_at.isoformat(),
            },
        )
    except Exception as e:
        return CommandResult(
            success=False,
            message="Failed to start session.",
            error=str(e),
        )


async def guess(app: GameCLIApp, nickname: str, word: str) -> CommandResult:
    try:
        outcome = await app.process_guess(nickname, word)
    except NoActiveSessionError as e:
        return CommandResult(
            success=False,
            message="No game in progress.",
            error=str(e),
        )
    except Exception as e:
        return CommandResult(
            success=False,
            message="Failed to process guess.",
            error=str(e),
        )

    messages = {
        "win": f"{nickname} found the word!",
        "miss": f"Miss ({outcome.similarity:.4f})" if outcome.similarity is not None else "Miss",
        "unknown_word": "Unknown word.",
    }
    return CommandResult(
        success=True,
        message=messages[outcome.kind.value],
        data={"outcome": outcome.kind.value, "similarity": outcome.similarity},
    )


async def thesaurus(app: GameCLIApp, word: str, count: int) -> CommandResult:
    word = normalize_guess(word)
    try:
        neighbors = await app.thesaurus(word, count)
    except ValueError as e:
        return CommandResult(
            success=False,
            message=f"Invalid count: {count}",
            error=str(e),
        )
    except Exception as e:
        return CommandResult(
            success=False,
            message="Failed to run thesaurus query.",
            error=str(e),
        )

    if neighbors is None:
        return CommandResult(
            success=False,
            message=f"Term not found: {word}",
            error="term not found",
        )

    return CommandResult(
        success=True,
        message=f"Found {len(neighbors)} neighbor(s) for {word}.",
        data={
            "term": word,
            "neighbors": [{"term": n.term, "similarity": n.similarity} for n in neighbors],
        },
    )


async def list_players(app: GameCLIApp) -> CommandResult:
    try:
        players = await app.list_players()
        return CommandResult(
            success=True,
            message=f"Found {len(players)} player(s).",
            data={
                "players": [
                    {"id": p.id, "nickname": p.nickname, "score": p.score}
                    for p in players
                ]
            },
        )
    except Exception as e:
        return CommandResult(
            success=False,
            message="Failed to list players.",
            error=str(e),
        )


async def list_sessions(app: GameCLIApp, limit: Optional[int] = None) -> CommandResult:
    try:
        sessions = await app.list_sessions(limit)

        session_list = []
        for s in sessions:
            session_list.append({
                "session_id": s.id,
                "active": s.active,
                "started_at": s.started_at.isoformat(),
                "planned_end_at": s.planned_end_at.isoformat(),
                "ended_at": s.ended_at.isoformat() if s.ended_at else None,
                "winner": s.winner_nickname,
                "guess_count": s.guess_count,
                "secret_word": None if s.active else s.secret_word,
            })

        return CommandResult(
            success=True,
            message=f"Found {len(sessions)} session(s).",
            data={"sessions": session_list},
        )
    except Exception as e:
        return CommandResult(
            success=False,
            message="Failed to list sessions.",
            error=str(e),
        )


async def get_status(app: GameCLIApp) -> CommandResult:
    try:
        status = await app.get_status()
        return CommandResult(
            success=True,
            message="Game status retrieved.",
            data=status,
        )
    except Exception as e:
        return CommandResult(
            success=False,
            message="Failed to get game status.",
            error=str(e),
        )


def show_config(app: GameCLIApp) -> CommandResult:
    return CommandResult(
        success=True,
        message="Current configuration.",
        data=app.config.model_dump(mode="json"),
    )


async def play_chat(
    app: GameCLIApp,
    nickname: str,
    input_handler: Callable[[], str],
    output_handler: Callable[[str], None],
) -> CommandResult:
    """Feed console lines to the chat handler as if said by ``nickname``."""
    handled = 0
    while True:
        try:
            line = input_handler()
        except (EOFError, KeyboardInterrupt):
            break

        if line.strip() in QUIT_COMMANDS:
            break

        response = await app.handle_chat_line(nickname, line)
        handled += 1
        if response is not None:
            output_handler(f"<{app.chat.nickname}> {response.message}")

    return CommandResult(
        success=True,
        message="Chat session ended.",
        data={"messages": handled},
    )
