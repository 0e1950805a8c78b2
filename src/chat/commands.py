"""Parsing of chat commands addressed to the bot.

Recognized commands::

    !start
    !guess <word>
    !thesaurus <word> [count]
    !halp              (alias: !help)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

COMMAND_PREFIX = "!"


class CommandParseError(Exception):
    pass


class UnrecognizedCommand(CommandParseError):
    def __init__(self, text: str):
        super().__init__(f"unrecognized command: {text!r}")
        self.text = text


class CommandSyntaxError(CommandParseError):
    def __init__(self, expected: str):
        super().__init__(f"invalid syntax; expected `{expected}`")
        self.expected = expected


@dataclass(frozen=True)
class StartCommand:
    pass


@dataclass(frozen=True)
class GuessCommand:
    word: str


@dataclass(frozen=True)
class ThesaurusCommand:
    word: str
    count: Optional[int] = None


@dataclass(frozen=True)
class HelpCommand:
    pass


GameCommand = Union[StartCommand, GuessCommand, ThesaurusCommand, HelpCommand]

GUESS_SYNTAX = "!guess <word>"
THESAURUS_SYNTAX = "!thesaurus <word> [count]"


def is_command(text: str) -> bool:
    return text.strip().startswith(COMMAND_PREFIX)


def parse_command(text: str) -> GameCommand:
    parts = text.strip().split()
    if not parts or not parts[0].startswith(COMMAND_PREFIX):
        raise UnrecognizedCommand(text)

    name = parts[0][len(COMMAND_PREFIX):].lower()
    args = parts[1:]

    if name == "start" and not args:
        return StartCommand()

    if name in ("halp", "help") and not args:
        return HelpCommand()

    if name == "guess":
        if len(args) != 1:
            raise CommandSyntaxError(GUESS_SYNTAX)
        return GuessCommand(word=args[0])

    if name == "thesaurus":
        if len(args) not in (1, 2):
            raise CommandSyntaxError(THESAURUS_SYNTAX)
        count = None
        if len(args) == 2:
            try:
                count = int(args[1])
            except ValueError:
                raise CommandSyntaxError(THESAURUS_SYNTAX) from None
            if count < 0:
                raise CommandSyntaxError(THESAURUS_SYNTAX)
        return ThesaurusCommand(word=args[0], count=count)

    raise UnrecognizedCommand(text)
