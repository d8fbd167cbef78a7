from __future__ import annotations

from pathlib import Path

import pytest

from problem_index.core.config_loader import ConfigLoader
from problem_index.services.config_service import DEFAULT_WINDOW_FILES, ConfigService


def _write_settings(tmp_path: Path, text: str) -> Path:
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "settings.yaml").write_text(text, encoding="utf-8")
    return config_dir


def test_defaults_apply_for_missing_sections(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    service = ConfigService(config_path=_write_settings(tmp_path, "app: {name: test}\n"))

    assert service.app_metadata["name"] == "test"
    assert service.source_config.window_files == DEFAULT_WINDOW_FILES
    assert service.source_config.archive_url.endswith("/archive/refs/heads/main.zip")
    assert service.search_config.default_limit == 10
    assert service.search_config.max_limit == 50
    assert service.refresh_config.hour == 2
    assert service.server_config.port == 3000
    assert service.logging_config == {}


def test_sections_are_read_and_env_expanded(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SOURCE_BRANCH", "develop")
    monkeypatch.delenv("PORT", raising=False)
    config_dir = _write_settings(
        tmp_path,
        "source:\n"
        "  owner: someone\n"
        "  branch: ${SOURCE_BRANCH}\n"
        "  retry_attempts: 0\n"
        "  window_files: {'All.csv': all-time}\n"
        "search: {default_limit: 80, max_limit: 20}\n"
        "refresh: {enabled: false, hour: 5, minute: 30}\n"
        "server: {host: 127.0.0.1, port: 8080}\n",
    )

    service = ConfigService(config_path=config_dir)

    source = service.source_config
    assert source.owner == "someone"
    assert source.branch == "develop"
    assert source.retry_attempts == 1
    assert source.window_files == {"All.csv": "all-time"}
    assert service.search_config.default_limit == 20
    assert service.refresh_config.enabled is False
    assert service.refresh_config.minute == 30
    assert service.server_config.host == "127.0.0.1"
    assert service.server_config.port == 8080


def test_environment_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    service = ConfigService(
        config_path=_write_settings(tmp_path, "logging: {level: INFO}\nserver: {port: 3000}\n")
    )

    assert service.server_config.port == 9000
    assert service.logging_config["level"] == "DEBUG"


def test_invalid_refresh_time(tmp_path: Path) -> None:
    service = ConfigService(config_path=_write_settings(tmp_path, "refresh: {hour: 25}\n"))

    with pytest.raises(ValueError):
        _ = service.refresh_config


def test_loader_errors(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    with pytest.raises(FileNotFoundError):
        ConfigLoader(base_path=tmp_path / "missing")

    config_dir = _write_settings(tmp_path, "- not\n- a mapping\n")
    loader = ConfigLoader(base_path=config_dir)
    with pytest.raises(ValueError):
        loader.load("settings")
    with pytest.raises(FileNotFoundError):
        loader.load("other")

    monkeypatch.setenv("PI_CONFIG_PATH", str(config_dir))
    assert ConfigLoader().base_path == config_dir.resolve()


def test_repository_settings_file_loads(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PI_CONFIG_PATH", raising=False)
    service = ConfigService()

    assert service.source_config.window_files["3. Six Months.csv"] == "180-days"
    assert service.search_config.max_limit == 50
