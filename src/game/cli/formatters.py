"""CLI output formatters for the word game.

This module provides consistent formatting for CLI output,
supporting both plain text and JSON output modes.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Protocol

from game.cli.commands import CommandResult


class OutputFormatter(Protocol):
    def format_result(self, result: CommandResult) -> str:
        ...

    def format_players(self, players: List[Dict[str, Any]]) -> str:
        ...

    def format_sessions(self, sessions: List[Dict[str, Any]]) -> str:
        ...

    def format_neighbors(self, term: str, neighbors: List[Dict[str, Any]]) -> str:
        ...

    def format_status(self, status: Dict[str, Any]) -> str:
        ...

    def format_config(self, config: Dict[str, Any]) -> str:
        ...

    def format_error(self, message: str, error: Optional[str] = None) -> str:
        ...


class TextFormatter:
    def format_result(self, result: CommandResult) -> str:
        if not result.success:
            return self.format_error(result.message, result.error)
        return result.message

    def format_players(self, players: List[Dict[str, Any]]) -> str:
        if not players:
            return "No players yet."

        lines = [f"\n{'='*50}", "Players", f"{'='*50}\n"]
        for i, p in enumerate(players, 1):
            lines.append(f"{i}. {p['nickname']} ({p['score']})")
        return "\n".join(lines)

    def format_sessions(self, sessions: List[Dict[str, Any]]) -> str:
        if not sessions:
            return "No sessions found."

        lines = [f"\n{'='*50}", "Game Sessions", f"{'='*50}\n"]

        for s in sessions:
            state = "in progress" if s["active"] else "ended"
            lines.append(f"Session: {s['session_id']} ({state})")
            lines.append(f"  Started: {s['started_at']}")
            lines.append(f"  Planned end: {s['planned_end_at']}")
            if s.get("ended_at"):
                lines.append(f"  Ended: {s['ended_at']}")
            if s.get("secret_word"):
                lines.append(f"  Word: {s['secret_word']}")
            lines.append(f"  Winner: {s.get('winner') or 'none'}")
            lines.append(f"  Guesses: {s['guess_count']}")
            lines.append("")

        return "\n".join(lines)

    def format_neighbors(self, term: str, neighbors: List[Dict[str, Any]]) -> str:
        if not neighbors:
            return f"No neighbors for {term}."

        lines = [f"Closest words to {term}:"]
        for i, n in enumerate(neighbors, 1):
            lines.append(f"{i:>3}. {n['term']:<20} {n['similarity']:.4f}")
        return "\n".join(lines)

    def format_status(self, status: Dict[str, Any]) -> str:
        lines = [
            f"\n{'='*50}",
            "Game Status",
            f"{'='*50}\n",
            f"Vocabulary: {status['vocabulary_size']} words, dimension {status['dimension']}",
        ]

        if not status["active"]:
            lines.append("No game in progress.")
            return "\n".join(lines)

        lines.extend([
            f"Session ID: {status['session_id']}",
            f"Started: {status['started_at']}",
            f"Planned end: {status['planned_end_at']}",
            f"Guesses: {status['guess_count']}",
        ])
        if status.get("overdue"):
            lines.append("Planned end has passed.")

        return "\n".join(lines)

    def format_config(self, config: Dict[str, Any]) -> str:
        lines = []
        for section, values in config.items():
            lines.append(f"\n=== {section} ===")
            for key, value in values.items():
                lines.append(f"{key}: {value}")
        return "\n".join(lines)

    def format_error(self, message: str, error: Optional[str] = None) -> str:
        lines = [f"\nError: {message}"]
        if error:
            lines.append(f"Details: {error}")
        return "\n".join(lines)


class JsonFormatter:
    def format_result(self, result: CommandResult) -> str:
        return json.dumps({
            "success": result.success,
            "message": result.message,
            "data": result.data,
            "error": result.error,
        }, indent=2, default=str)

    def format_players(self, players: List[Dict[str, Any]]) -> str:
        return json.dumps({"players": players}, indent=2, default=str)

    def format_sessions(self, sessions: List[Dict[str, Any]]) -> str:
        return json.dumps({"sessions": sessions}, indent=2, default=str)

    def format_neighbors(self, term: str, neighbors: List[Dict[str, Any]]) -> str:
        return json.dumps({"term": term, "neighbors": neighbors}, indent=2, default=str)

    def format_status(self, status: Dict[str, Any]) -> str:
        return json.dumps({"status": status}, indent=2, default=str)

    def format_config(self, config: Dict[str, Any]) -> str:
        return json.dumps({"config": config}, indent=2, default=str)

    def format_error(self, message: str, error: Optional[str] = None) -> str:
        return json.dumps({
            "success": False,
            "message": message,
            "error": error,
        }, indent=2)


def get_formatter(json_mode: bool = False) -> OutputFormatter:
    return JsonFormatter() if json_mode else TextFormatter()
