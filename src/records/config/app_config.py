"""Application configuration loader.

Loads configuration from data/config/records_v1.yaml (or the path in the
RECORDS_CONFIG environment variable), falling back to built-in defaults.
Values present in the file override the defaults key by key.

Usage:
    from records.config.app_config import load_app_config

    config = load_app_config()
    config.dashboard.top_students
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
CONFIG_FILE = Path("data/config/records_v1.yaml")
CONFIG_ENV_VAR = "RECORDS_CONFIG"


@dataclass
class ApiConfig:
    """Settings for the HTTP API."""

    title: str = "Academic Records API"
    version: str = "0.1.0"
    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass
class StoreConfig:
    """Settings for the in-memory store."""

    seed_demo_data: bool = True


@dataclass
class DashboardConfig:
    """Settings for dashboard statistics."""

    top_students: int = 3


@dataclass
class AppConfig:
    """Application-wide configuration."""

    api: ApiConfig = field(default_factory=ApiConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    dashboard: DashboardConfig = field(default_factory=DashboardConfig)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (same layout as the YAML file)."""
        return {
            "api": {
                "title": self.api.title,
                "version": self.api.version,
                "host": self.api.host,
                "port": self.api.port,
                "cors_origins": list(self.api.cors_origins),
            },
            "store": {"seed_demo_data": self.store.seed_demo_data},
            "dashboard": {"top_students": self.dashboard.top_students},
        }


# Module-level cache
_cached_config: AppConfig | None = None


def get_config_path() -> Path:
    """Resolve the config file path, honouring RECORDS_CONFIG."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return CONFIG_FILE


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    defaults = AppConfig()

    api_data = data.get("api") or {}
    api = ApiConfig(
        title=api_data.get("title", defaults.api.title),
        version=str(api_data.get("version", defaults.api.version)),
        host=api_data.get("host", defaults.api.host),
        port=int(api_data.get("port", defaults.api.port)),
        cors_origins=list(api_data.get("cors_origins", defaults.api.cors_origins)),
    )

    store_data = data.get("store") or {}
    store = StoreConfig(
        seed_demo_data=bool(store_data.get("seed_demo_data", defaults.store.seed_demo_data)),
    )

    dashboard_data = data.get("dashboard") or {}
    dashboard = DashboardConfig(
        top_students=int(dashboard_data.get("top_students", defaults.dashboard.top_students)),
    )

    return AppConfig(api=api, store=store, dashboard=dashboard)


def load_app_config(force_reload: bool = False) -> AppConfig:
    """Load application config, falling back to defaults.

    Args:
        force_reload: If True, ignore cached config and reload from file.

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    path = get_config_path()

    if path.exists():
        logger.debug("loading_app_config", source=str(path))
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    else:
        logger.info("using_default_config", missing=str(path))
        data = {}

    _cached_config = _parse_config(data)
    return _cached_config


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None
