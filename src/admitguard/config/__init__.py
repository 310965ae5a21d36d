"""Configuration management utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


class ConfigManager:
    """YAML-backed configuration loader rooted at a directory."""

    def __init__(self, base_path: str | Path):
        self._base_path = Path(base_path)

    def load(self, name: str) -> dict[str, Any]:
        """Load a YAML configuration by name without file extension.

        An empty file yields an empty mapping.
        """
        return load_yaml(self._base_path / f"{name}.yaml")


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Read a YAML document that must be a mapping."""
    with Path(path).open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Config file {path} must be a YAML mapping")
    return loaded


__all__ = ["ConfigManager", "load_yaml"]
