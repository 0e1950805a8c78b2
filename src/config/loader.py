"""Configuration loader for YAML configuration files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import yaml

from .models import AppConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "game.yaml"


class ConfigLoader:
    def __init__(self, config_dir: Optional[str | Path] = None):
        if config_dir is None:
            self._config_dir = Path(__file__).parent.parent.parent / "config"
        else:
            self._config_dir = Path(config_dir)

        self._app_config: Optional[AppConfig] = None

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    def _load_yaml(self, filename: str) -> dict:
        filepath = self._config_dir / filename
        if not filepath.exists():
            logger.warning("Config file not found: %s, using defaults", filepath)
            return {}

        with open(filepath, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        return data or {}

    def load_app_config(self, force_reload: bool = False) -> AppConfig:
        if self._app_config is not None and not force_reload:
            return self._app_config

        data = self._load_yaml(CONFIG_FILENAME)
        self._app_config = AppConfig(**data)
        logger.info("Loaded app config from %s", self._config_dir / CONFIG_FILENAME)
        return self._app_config

    @property
    def app(self) -> AppConfig:
        return self.load_app_config()
