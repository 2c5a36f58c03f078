"""Configuration package for the records service."""

from records.config.app_config import (
    ApiConfig,
    AppConfig,
    DashboardConfig,
    StoreConfig,
    clear_config_cache,
    load_app_config,
)

__all__ = [
    "ApiConfig",
    "AppConfig",
    "DashboardConfig",
    "StoreConfig",
    "clear_config_cache",
    "load_app_config",
]
