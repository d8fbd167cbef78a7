"""Configuration service for the problem index.

Updates:
    v0.1.0 - 2026-09-05 - Typed accessors for source, search, refresh and server settings.
    v0.1.1 - 2026-09-19 - LOG_LEVEL and PORT environment overrides.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..core.config_loader import ConfigLoader
from ..core.recency_policy import ALL_TIME, NINETY_DAYS, SIX_MONTHS, THIRTY_DAYS

DEFAULT_WINDOW_FILES: dict[str, str] = {
    "1. Thirty Days.csv": THIRTY_DAYS,
    "2. Three Months.csv": NINETY_DAYS,
    "3. Six Months.csv": SIX_MONTHS,
    "4. More Than Six Months.csv": ALL_TIME,
    "5. All.csv": ALL_TIME,
    "Thirty Days.csv": THIRTY_DAYS,
    "Three Months.csv": NINETY_DAYS,
    "Six Months.csv": SIX_MONTHS,
    "More Than Six Months.csv": ALL_TIME,
    "All.csv": ALL_TIME,
}


@dataclass(slots=True, frozen=True)
class SourceConfig:
    """Location and download limits for the company problem archive."""

    owner: str = "liquidslr"
    repository: str = "leetcode-company-wise-problems"
    branch: str = "main"
    timeout_seconds: float = 120.0
    max_bytes: int = 100 * 1024 * 1024
    retry_attempts: int = 3
    window_files: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_WINDOW_FILES))

    @property
    def archive_url(self) -> str:
        return (
            f"https://github.com/{self.owner}/{self.repository}"
            f"/archive/refs/heads/{self.branch}.zip"
        )


@dataclass(slots=True, frozen=True)
class SearchConfig:
    default_limit: int = 10
    max_limit: int = 50


@dataclass(slots=True, frozen=True)
class RefreshConfig:
    """Daily refresh schedule (local time)."""

    enabled: bool = True
    hour: int = 2
    minute: int = 0


@dataclass(slots=True, frozen=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 3000


class ConfigService:
    """Loads ``settings.yaml`` and exposes typed sections with defaults."""

    def __init__(self, config_path: Path | None = None) -> None:
        """Load settings from the configuration directory.

        Args:
            config_path (Path | None): Optional override for the configuration directory.
        """

        self._loader = ConfigLoader(base_path=config_path)
        self._settings = self._expand_env_values(self._loader.load("settings"))

    @property
    def app_metadata(self) -> dict[str, Any]:
        return self._section("app")

    @property
    def logging_config(self) -> dict[str, Any]:
        """Return logging settings; ``$LOG_LEVEL`` wins over the file."""

        config = self._section("logging")
        env_level = os.environ.get("LOG_LEVEL")
        if env_level:
            config["level"] = env_level
        return config

    @property
    def source_config(self) -> SourceConfig:
        data = self._section("source")
        defaults = SourceConfig()
        window_files = data.get("window_files")
        return SourceConfig(
            owner=str(data.get("owner", defaults.owner)),
            repository=str(data.get("repository", defaults.repository)),
            branch=str(data.get("branch", defaults.branch)),
            timeout_seconds=float(data.get("timeout_seconds", defaults.timeout_seconds)),
            max_bytes=int(data.get("max_bytes", defaults.max_bytes)),
            retry_attempts=max(1, int(data.get("retry_attempts", defaults.retry_attempts))),
            window_files=(
                {str(name): str(window) for name, window in window_files.items()}
                if isinstance(window_files, dict) and window_files
                else dict(DEFAULT_WINDOW_FILES)
            ),
        )

    @property
    def search_config(self) -> SearchConfig:
        data = self._section("search")
        defaults = SearchConfig()
        max_limit = max(1, int(data.get("max_limit", defaults.max_limit)))
        default_limit = int(data.get("default_limit", defaults.default_limit))
        return SearchConfig(
            default_limit=min(max(1, default_limit), max_limit),
            max_limit=max_limit,
        )

    @property
    def refresh_config(self) -> RefreshConfig:
        data = self._section("refresh")
        defaults = RefreshConfig()
        hour = int(data.get("hour", defaults.hour))
        minute = int(data.get("minute", defaults.minute))
        if not 0 <= hour <= 23 or not 0 <= minute <= 59:
            raise ValueError(f"Invalid refresh time {hour:02d}:{minute:02d}.")
        return RefreshConfig(
            enabled=bool(data.get("enabled", defaults.enabled)),
            hour=hour,
            minute=minute,
        )

    @property
    def server_config(self) -> ServerConfig:
        data = self._section("server")
        defaults = ServerConfig()
        port = os.environ.get("PORT") or data.get("port", defaults.port)
        return ServerConfig(host=str(data.get("host", defaults.host)), port=int(port))

    @staticmethod
    def clear_cache() -> None:
        """Clear cached YAML documents so file edits are picked up."""

        ConfigLoader.load.cache_clear()

    def _section(self, name: str) -> dict[str, Any]:
        section = self._settings.get(name, {})
        return dict(section) if isinstance(section, dict) else {}

    @staticmethod
    def _expand_env_values(value: Any) -> Any:
        if isinstance(value, dict):
            return {key: ConfigService._expand_env_values(entry) for key, entry in value.items()}
        if isinstance(value, list):
            return [ConfigService._expand_env_values(item) for item in value]
        if isinstance(value, str):
            return os.path.expandvars(value)
        return value
