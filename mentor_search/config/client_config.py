"""Client configuration settings for the mentor search client."""

from dataclasses import dataclass
from typing import Optional
import os


@dataclass
class ApiConfig:
    """Backend connection configuration."""
    base_url: str = "http://localhost:3001/api"
    timeout_seconds: float = 30.0
    auth_token: Optional[str] = None


@dataclass
class SearchConfig:
    """Mentor search paging configuration."""
    page_size: int = 20


@dataclass
class PreferencesConfig:
    """Filter preference persistence configuration."""
    store_name: str = "mentorship_store"
    base_dir: str = "./client_preferences"


@dataclass
class ClientSettings:
    """Main client configuration settings."""
    api: ApiConfig = None
    search: SearchConfig = None
    preferences: PreferencesConfig = None

    def __post_init__(self):
        """Initialize nested configs if not provided."""
        if self.api is None:
            self.api = ApiConfig()
        if self.search is None:
            self.search = SearchConfig()
        if self.preferences is None:
            self.preferences = PreferencesConfig()


# Default client configuration
CLIENT_CONFIG = {
    "api": {
        "base_url": os.getenv("MENTOR_API_BASE_URL", "http://localhost:3001/api"),
        "timeout_seconds": float(os.getenv("MENTOR_API_TIMEOUT", "30")),
        "auth_token": os.getenv("MENTOR_API_TOKEN") or None,
    },
    "search": {
        "page_size": int(os.getenv("MENTOR_PAGE_SIZE", "20")),
    },
    "preferences": {
        "store_name": os.getenv("PREFERENCES_STORE_NAME", "mentorship_store"),
        "base_dir": os.getenv("PREFERENCES_DIR", "./client_preferences"),
    },
}


def get_client_settings() -> ClientSettings:
    """Get client settings from configuration."""
    return ClientSettings(
        api=ApiConfig(**CLIENT_CONFIG["api"]),
        search=SearchConfig(**CLIENT_CONFIG["search"]),
        preferences=PreferencesConfig(**CLIENT_CONFIG["preferences"]),
    )
