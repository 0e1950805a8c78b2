"""CLI interface package for the word game."""

from game.cli.app import GameCLIApp
from game.cli.commands import (
    CommandResult,
    get_status,
    guess,
    list_players,
    list_sessions,
    play_chat,
    show_config,
    start_session,
    thesaurus,
)

__all__ = [
    "GameCLIApp",
    "CommandResult",
    "get_status",
    "guess",
    "list_players",
    "list_sessions",
    "play_chat",
    "show_config",
    "start_session",
    "thesaurus",
]
