"""Row building for the dashboard tables.

Kept free of streamlit so the page content can be checked without a
running UI.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from game.domain.entities import Player, SessionSummary
from webui.config import EMOJI_MAP, TIME_FORMAT


def _format_time(value: Optional[datetime]) -> str:
    return value.strftime(TIME_FORMAT) if value else "-"


def build_player_rows(players: Sequence[Player]) -> List[Dict[str, Any]]:
    rows = []
    for rank, player in enumerate(players, 1):
        rows.append({
            "Rank": rank,
            "Player": player.nickname,
            "Score": player.score,
        })
    return rows


def build_session_rows(
    sessions: Sequence[SessionSummary],
    now: datetime,
) -> List[Dict[str, Any]]:
    """One row per session; the word of a running round stays hidden."""
    rows = []
    for session in sessions:
        if session.active:
            status = f"{EMOJI_MAP['active']} in progress"
            if session.is_overdue(now):
                status += " (past planned end)"
        else:
            status = f"{EMOJI_MAP['ended']} ended"

        rows.append({
            "Session": session.id,
            "Status": status,
            "Started": _format_time(session.started_at),
            "Planned end": _format_time(session.planned_end_at),
            "Ended": _format_time(session.ended_at),
            "Word": "?" if session.active else session.secret_word,
            "Winner": session.winner_nickname or "-",
            "Guesses": session.guess_count,
        })
    return rows
