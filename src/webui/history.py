"""History page: leaderboard and recent rounds."""

from datetime import datetime, timezone

import streamlit as st

from game.storage import GameStore
from game.errors import StorageError
from webui.components import render_empty_state, render_error
from webui.config import EMOJI_MAP
from webui.dashboard import build_player_rows, build_session_rows


def render_history_page(store: GameStore, sessions_limit: int = 20) -> None:
    try:
        players = store.list_players()
        sessions = store.recent_sessions(sessions_limit)
    except StorageError as e:
        render_error(f"Could not read game history: {e}")
        return

    players_col, sessions_col = st.columns([1, 3])

    with players_col:
        st.markdown(f"## {EMOJI_MAP['trophy']} Players")
        if players:
            st.dataframe(build_player_rows(players), hide_index=True, use_container_width=True)
        else:
            render_empty_state("No players yet.", icon="player")

    with sessions_col:
        st.markdown(f"## {EMOJI_MAP['history']} Recent rounds")
        if sessions:
            rows = build_session_rows(sessions, datetime.now(timezone.utc))
            st.dataframe(rows, hide_index=True, use_container_width=True)
        else:
            render_empty_state("No rounds played yet.", icon="history")
