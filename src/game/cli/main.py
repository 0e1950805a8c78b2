"""Main entry point for the word game CLI.

Usage:
    semword play --nick <name>
    semword start
    semword guess <nick> <word>
    semword thesaurus <word> [-n COUNT]
    semword players
    semword sessions [--limit N]
    semword status
    semword config
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

src_path = str(Path(__file__).parent.parent.parent)
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from config import ConfigLoader, LoggingConfig
from game.cli.app import GameCLIApp
from game.cli.commands import (
    get_status,
    guess,
    list_players,
    list_sessions,
    play_chat,
    show_config,
    start_session,
    thesaurus,
)
from game.cli.formatters import JsonFormatter, TextFormatter, get_formatter
from words import VocabularyLoadError

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, config: LoggingConfig | None = None) -> None:
    config = config or LoggingConfig()
    level = logging.DEBUG if verbose else getattr(logging, config.level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format=config.format,
    )


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="semword",
        description="Semantic word guessing game - find the secret word by meaning",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output results in JSON format",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--config-dir",
        type=Path,
        help="Directory containing game.yaml",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    play_parser = subparsers.add_parser(
        "play",
        help="Chat with the bot from the console",
    )
    play_parser.add_argument(
        "--nick", "-n",
        default="player",
        help="Nickname to play as (default: player)",
    )

    subparsers.add_parser(
        "start",
        help="Start a new round, ending the current one",
    )

    guess_parser = subparsers.add_parser(
        "guess",
        help="Submit a guess for a player",
    )
    guess_parser.add_argument("nick", help="Player nickname")
    guess_parser.add_argument("word", help="Guessed word")

    thesaurus_parser = subparsers.add_parser(
        "thesaurus",
        help="Show the closest words to a word",
    )
    thesaurus_parser.add_argument("word", help="Word to look up")
    thesaurus_parser.add_argument(
        "--count", "-n",
        type=int,
        default=10,
        help="Number of neighbors (default: 10)",
    )

    subparsers.add_parser(
        "players",
        help="List players and scores",
    )

    sessions_parser = subparsers.add_parser(
        "sessions",
        help="List recent game sessions",
    )
    sessions_parser.add_argument(
        "--limit",
        type=int,
        help="Number of sessions to show",
    )

    subparsers.add_parser(
        "status",
        help="Show the current round",
    )

    subparsers.add_parser(
        "config",
        help="Show current configuration",
    )

    return parser


class InteractiveCLI:
    def __init__(self, app: GameCLIApp, formatter: TextFormatter | JsonFormatter):
        self._app = app
        self._formatter = formatter
        self._nickname = "player"

    def get_input(self) -> str:
        return input(f"\n<{self._nickname}> ")

    def show_output(self, message: str) -> None:
        print(message)

    async def run_play(self, nickname: str) -> int:
        self._nickname = nickname
        self.show_output(
            f"Talking as {nickname}. Say '{self._app.chat.nickname}' to wake the bot, "
            "!halp for commands, /quit to leave."
        )
        result = await play_chat(self._app, nickname, self.get_input, self.show_output)
        return 0 if result.success else 1

    async def run_start(self) -> int:
        result = await start_session(self._app)
        print(self._formatter.format_result(result))
        return 0 if result.success else 1

    async def run_guess(self, nickname: str, word: str) -> int:
        result = await guess(self._app, nickname, word)
        print(self._formatter.format_result(result))
        return 0 if result.success else 1

    async def run_thesaurus(self, word: str, count: int) -> int:
        result = await thesaurus(self._app, word, count)
        if result.success and result.data:
            print(self._formatter.format_neighbors(result.data["term"], result.data["neighbors"]))
        else:
            print(self._formatter.format_error(result.message, result.error))
        return 0 if result.success else 1

    async def run_players(self) -> int:
        result = await list_players(self._app)
        if result.success and result.data:
            print(self._formatter.format_players(result.data.get("players", [])))
        else:
            print(self._formatter.format_error(result.message, result.error))
        return 0 if result.success else 1

    async def run_sessions(self, limit: int | None = None) -> int:
        result = await list_sessions(self._app, limit)
        if result.success and result.data:
            print(self._formatter.format_sessions(result.data.get("sessions", [])))
        else:
            print(self._formatter.format_error(result.message, result.error))
        return 0 if result.success else 1

    async def run_status(self) -> int:
        result = await get_status(self._app)
        if result.success and result.data:
            print(self._formatter.format_status(result.data))
        else:
            print(self._formatter.format_error(result.message, result.error))
        return 0 if result.success else 1

    def run_config(self) -> int:
        result = show_config(self._app)
        print(self._formatter.format_config(result.data or {}))
        return 0


async def async_main(args: argparse.Namespace, app: GameCLIApp) -> int:
    formatter = get_formatter(args.json)
    cli = InteractiveCLI(app, formatter)

    try:
        if args.command == "play":
            return await cli.run_play(args.nick)

        elif args.command == "start":
            return await cli.run_start()

        elif args.command == "guess":
            return await cli.run_guess(args.nick, args.word)

        elif args.command == "thesaurus":
            return await cli.run_thesaurus(args.word, args.count)

        elif args.command == "players":
            return await cli.run_players()

        elif args.command == "sessions":
            return await cli.run_sessions(args.limit)

        elif args.command == "status":
            return await cli.run_status()

        elif args.command == "config":
            return cli.run_config()

        else:
            return 1

    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130
    finally:
        await app.close()


def main() -> int:
    parser = create_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 0

    config = ConfigLoader(args.config_dir).load_app_config()
    setup_logging(args.verbose, config.logging)

    try:
        app = GameCLIApp(config=config)
    except VocabularyLoadError as e:
        logger.error("Could not load word database: %s", e)
        print(get_formatter(args.json).format_error("Could not load word database.", str(e)))
        return 1

    return asyncio.run(async_main(args, app))


if __name__ == "__main__":
    sys.exit(main())
