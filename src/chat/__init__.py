"""Chat interface: command parsing and message handling."""

from chat.commands import (
    CommandParseError,
    CommandSyntaxError,
    GameCommand,
    GuessCommand,
    HelpCommand,
    StartCommand,
    ThesaurusCommand,
    UnrecognizedCommand,
    is_command,
    parse_command,
)
from chat.handler import ChatHandler, ChatResponse, format_neighbors

__all__ = [
    "CommandParseError",
    "CommandSyntaxError",
    "GameCommand",
    "GuessCommand",
    "HelpCommand",
    "StartCommand",
    "ThesaurusCommand",
    "UnrecognizedCommand",
    "is_command",
    "parse_command",
    "ChatHandler",
    "ChatResponse",
    "format_neighbors",
]
