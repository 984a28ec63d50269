"""Configuration module for the mentor search client."""

from .client_config import (
    CLIENT_CONFIG,
    ApiConfig,
    ClientSettings,
    PreferencesConfig,
    SearchConfig,
    get_client_settings,
)

__all__ = [
    'CLIENT_CONFIG',
    'ApiConfig',
    'ClientSettings',
    'PreferencesConfig',
    'SearchConfig',
    'get_client_settings',
]
