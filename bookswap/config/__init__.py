"""Configuration module for the BookSwap services."""

from .app_config import (
    APP_CONFIG,
    BackendConfig,
    FallbackConfig,
    MarketplaceSettings,
    StorageConfig,
    get_settings,
    read_app_config,
)

__all__ = [
    'APP_CONFIG',
    'BackendConfig',
    'FallbackConfig',
    'MarketplaceSettings',
    'StorageConfig',
    'get_settings',
    'read_app_config',
]
