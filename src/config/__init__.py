"""Configuration module for the word game."""

from .loader import ConfigLoader
from .models import (
    AppConfig,
    ChatConfig,
    DashboardConfig,
    GameSettingsConfig,
    LoggingConfig,
    StorageConfig,
    WordsConfig,
)

__all__ = [
    "ConfigLoader",
    "AppConfig",
    "ChatConfig",
    "DashboardConfig",
    "GameSettingsConfig",
    "LoggingConfig",
    "StorageConfig",
    "WordsConfig",
]
