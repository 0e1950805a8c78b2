"""Configuration data models using Pydantic."""

from __future__ import annotations

import os
import re
from typing import Any

from pydantic import BaseModel, Field, field_validator


def resolve_env_vars(value: str) -> str:
    pattern = r'\$\{(\w+)(?::([^}]*))?\}'

    def replacer(match):
        var_name = match.group(1)
        default_value = match.group(2) or ""
        return os.environ.get(var_name, default_value)

    return re.sub(pattern, replacer, value)


class WordsConfig(BaseModel):
    model_file: str = "word2vec.bin"
    normalize: bool = True

    @field_validator("model_file", mode="before")
    @classmethod
    def resolve_env(cls, v: Any) -> str:
        if isinstance(v, str):
            return resolve_env_vars(v)
        return v


class StorageConfig(BaseModel):
    db_path: str = "game.db"

    @field_validator("db_path", mode="before")
    @classmethod
    def resolve_env(cls, v: Any) -> str:
        if isinstance(v, str):
            return resolve_env_vars(v)
        return v


class GameSettingsConfig(BaseModel):
    session_duration_seconds: int = 3600 * 24
    win_points: int = 1
    worker_threads: int = 4

    @field_validator("session_duration_seconds", "worker_threads")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be a positive integer")
        return v

    @field_validator("win_points")
    @classmethod
    def must_not_be_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("must not be negative")
        return v


class ChatConfig(BaseModel):
    nickname: str = "cabotin"
    awake_seconds: float = 15.0
    wake_reply: str = "yes?"
    default_thesaurus_count: int = 1
    max_thesaurus_count: int = 25

    @field_validator("awake_seconds", "default_thesaurus_count", "max_thesaurus_count")
    @classmethod
    def must_be_positive(cls, v: Any) -> Any:
        if v <= 0:
            raise ValueError("must be positive")
        return v


class DashboardConfig(BaseModel):
    recent_sessions_limit: int = 20


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseModel):
    words: WordsConfig = Field(default_factory=WordsConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    game: GameSettingsConfig = Field(default_factory=GameSettingsConfig)
    chat: ChatConfig = Field(default_factory=ChatConfig)
    dashboard: DashboardConfig = Field(default_factory=DashboardConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
