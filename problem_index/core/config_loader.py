"""YAML configuration loading.

Updates:
    v0.1.0 - 2026-09-05 - Config directory resolves from PI_CONFIG_PATH or the project root.
"""

from __future__ import annotations

import functools
import os
from pathlib import Path
from typing import Any, Dict

import yaml

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_CONFIG_DIR = PROJECT_ROOT / "config"


class ConfigLoader:
    """Loads named YAML documents from a configuration directory."""

    def __init__(self, base_path: Path | None = None) -> None:
        """Resolve the configuration directory.

        Args:
            base_path (Path | None): Explicit directory; otherwise ``$PI_CONFIG_PATH``
                or the ``config`` directory at the project root.

        Raises:
            FileNotFoundError: If the directory does not exist.
        """

        env_path = os.environ.get("PI_CONFIG_PATH")
        resolved = base_path or (Path(env_path) if env_path else DEFAULT_CONFIG_DIR)
        self._base_path = Path(resolved).resolve()
        if not self._base_path.exists():
            raise FileNotFoundError(f"Config directory not found: {self._base_path}")

    @property
    def base_path(self) -> Path:
        return self._base_path

    def _resolve(self, name: str) -> Path:
        candidate = self._base_path / name
        if candidate.suffix not in {".yaml", ".yml"}:
            candidate = candidate.with_suffix(".yaml")
        if not candidate.exists():
            raise FileNotFoundError(f"Config file not found: {candidate}")
        return candidate

    @functools.lru_cache(maxsize=None)
    def load(self, name: str) -> Dict[str, Any]:
        """Load and cache a YAML document by logical name.

        Args:
            name (str): File name with or without the ``.yaml`` suffix.

        Returns:
            dict[str, Any]: Parsed mapping; empty documents yield ``{}``.

        Raises:
            ValueError: If the document is not a mapping.
        """

        path = self._resolve(name)
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping.")
        return data


def load_config(name: str, base_path: Path | None = None) -> Dict[str, Any]:
    """Load a configuration document without keeping a loader around."""

    return ConfigLoader(base_path=base_path).load(name)
