"""Streamlit dashboard showing players and recent rounds.

Run with ``streamlit run src/webui/app.py``.
"""

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import streamlit as st

from config import ConfigLoader
from game.errors import StorageError
from game.storage import GameStore
from game.storage.session_store import MEMORY_DB
from webui.components import render_empty_state, render_error, render_header
from webui.config import PAGE_CONFIG
from webui.history import render_history_page

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).parent.parent.parent


def main() -> None:
    st.set_page_config(**PAGE_CONFIG)
    config = ConfigLoader().load_app_config()
    logging.basicConfig(level=config.logging.level, format=config.logging.format)

    render_header()

    db_path = config.storage.db_path
    if db_path != MEMORY_DB and not Path(db_path).is_absolute():
        db_path = str(BASE_DIR / db_path)

    if db_path == MEMORY_DB or not Path(db_path).exists():
        render_empty_state(f"No game database at {db_path} yet.", icon="empty")
        return

    try:
        store = GameStore(db_path, read_only=True)
    except StorageError as e:
        logger.error("Could not open game database %s: %s", db_path, e)
        render_error(f"Could not open game database: {e}")
        return

    try:
        render_history_page(store, config.dashboard.recent_sessions_limit)
    finally:
        store.close()


if __name__ == "__main__":
    main()
