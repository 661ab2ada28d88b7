"""Configuration for hn-terminal-reader.

Settings loaded from (in order of precedence):
1. Environment variables (HNR_API_BASE_URL, HNR_CONCURRENCY, etc.)
2. Config file (~/.hnr/config.toml)
3. Defaults
"""
from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

HNR_DIR = Path.home() / ".hnr"

DEFAULT_CONFIG_PATH = HNR_DIR / "config.toml"
DEFAULT_API_BASE_URL = "https://hacker-news.firebaseio.com/v0"


@dataclass
class Settings:
    """Application settings — upstream endpoint, fetch window and paging."""

    # Upstream API
    api_base_url: str = DEFAULT_API_BASE_URL
    concurrency: int = 5
    request_timeout: float = 10.0

    # Paging
    page_size: int = 30

    # Logging
    log_level: str = "WARNING"

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from config file + environment variable overrides."""
        settings = cls()

        # Load from TOML config file
        path = config_path or DEFAULT_CONFIG_PATH
        if path.exists():
            with open(path, "rb") as f:
                data = tomllib.load(f)

            api = data.get("api", {})
            settings.api_base_url = api.get("base_url", settings.api_base_url)
            settings.concurrency = int(api.get("concurrency", settings.concurrency))
            settings.request_timeout = float(api.get("timeout", settings.request_timeout))

            ui = data.get("ui", {})
            settings.page_size = int(ui.get("page_size", settings.page_size))

            log = data.get("logging", {})
            settings.log_level = log.get("level", settings.log_level)

        # Environment variable overrides (highest precedence)
        if v := os.environ.get("HNR_API_BASE_URL"):
            settings.api_base_url = v
        if v := os.environ.get("HNR_CONCURRENCY"):
            settings.concurrency = int(v)
        if v := os.environ.get("HNR_TIMEOUT"):
            settings.request_timeout = float(v)
        if v := os.environ.get("HNR_PAGE_SIZE"):
            settings.page_size = int(v)
        if v := os.environ.get("HNR_LOG_LEVEL"):
            settings.log_level = v

        if settings.concurrency < 1:
            logger.warning("concurrency=%d is below 1, using 1", settings.concurrency)
            settings.concurrency = 1

        level = str(settings.log_level).upper()
        if level not in logging.getLevelNamesMapping():
            logger.warning("Unknown log level %r, using WARNING", settings.log_level)
            level = "WARNING"
        settings.log_level = level

        settings.api_base_url = settings.api_base_url.rstrip("/")
        return settings
