"""WebUI package: read-only dashboard of players and rounds."""

from webui.config import APP_ICON, APP_NAME, APP_VERSION, EMOJI_MAP, PAGE_CONFIG
from webui.dashboard import build_player_rows, build_session_rows

__all__ = [
    "APP_ICON",
    "APP_NAME",
    "APP_VERSION",
    "EMOJI_MAP",
    "PAGE_CONFIG",
    "build_player_rows",
    "build_session_rows",
]
