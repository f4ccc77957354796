"""
Configuration management for QMSREC.

Loads config.yaml and provides type-safe access to settings.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional

# Config file lives inside the qmsrec package
_PACKAGE_DIR = Path(__file__).parent.parent.resolve()
CONFIG_PATH = _PACKAGE_DIR / "config.yaml"

# Cache for loaded config
_config_cache: Optional[Dict[str, Any]] = None


def get_config(reload: bool = False) -> Dict[str, Any]:
    """
    Load configuration from config.yaml.

    Args:
        reload: Force reload even if cached

    Returns:
        Configuration dictionary
    """
    global _config_cache

    if _config_cache is not None and not reload:
        return _config_cache

    if not CONFIG_PATH.exists():
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as f:
        _config_cache = yaml.safe_load(f) or {}

    return _config_cache


def get_config_value(*keys: str, default: Any = None) -> Any:
    """
    Get a nested config value safely.

    Args:
        *keys: Path of keys to traverse (e.g., 'storage', 'backend')
        default: Value to return if key not found

    Example:
        page_size = get_config_value('records', 'page_size', default=10)
    """
    config = get_config()

    for key in keys:
        if isinstance(config, dict) and key in config:
            config = config[key]
        else:
            return default

    return config


class RecordPaths:
    """
    Centralized path access for record storage.

    All paths are loaded from config.yaml with sensible fallbacks.

    Usage:
        from qmsrec.core.config import RECORD_PATHS
        db = RECORD_PATHS.database
        exports = RECORD_PATHS.exports
    """

    def __init__(self):
        self._config = None

    def _ensure_config(self):
        if self._config is None:
            self._config = get_config()

    def _resolve(self, raw: str) -> Path:
        """Resolve a path: if relative, resolve against _PACKAGE_DIR."""
        p = Path(raw)
        if not p.is_absolute():
            p = _PACKAGE_DIR / p
        return p

    @property
    def database(self) -> Path:
        self._ensure_config()
        raw = self._config.get("storage", {}).get("database", "data/records.db")
        return self._resolve(raw)

    @property
    def json_file(self) -> Path:
        self._ensure_config()
        raw = self._config.get("storage", {}).get("json_file", "data/records.json")
        return self._resolve(raw)

    @property
    def exports(self) -> Path:
        self._ensure_config()
        raw = self._config.get("export", {}).get("directory", "data/exports")
        return self._resolve(raw)

    @property
    def root(self) -> Path:
        return _PACKAGE_DIR


# Singleton instance
RECORD_PATHS = RecordPaths()
