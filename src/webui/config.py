"""WebUI configuration constants."""

APP_NAME = "Semantic Word Game"
APP_VERSION = "1.0.0"
APP_ICON = "🔤"

PAGE_CONFIG = {
    "page_title": APP_NAME,
    "page_icon": APP_ICON,
    "layout": "wide",
    "initial_sidebar_state": "collapsed",
}

EMOJI_MAP = {
    "player": "🎮",
    "trophy": "🏆",
    "star": "⭐",
    "error": "❌",
    "info": "ℹ️",
    "history": "📜",
    "active": "🟢",
    "ended": "⚪",
    "empty": "📭",
}

TIME_FORMAT = "%Y-%m-%d %H:%M"
