"""
Centralized configuration for the Big Two client.

Configuration is loaded from (in order of precedence):
1. Environment variables
2. .env file (if exists)
3. Default values

Usage:
    from config import config
    print(config.SERVER_URL)
    print(config.DEFAULT_SORT)
"""

import os
from dataclasses import dataclass
from pathlib import Path

# Load .env file if it exists
try:
    from dotenv import load_dotenv
    env_path = Path(__file__).parent.parent / ".env"
    if env_path.exists():
        load_dotenv(env_path)
except ImportError:
    pass  # python-dotenv not installed, use env vars only


def get_env(key: str, default: str = "") -> str:
    """Get environment variable with default."""
    return os.environ.get(key, default)


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get boolean environment variable."""
    val = os.environ.get(key, "").lower()
    if val in ("true", "1", "yes", "on"):
        return True
    if val in ("false", "0", "no", "off"):
        return False
    return default


def get_env_int(key: str, default: int = 0) -> int:
    """Get integer environment variable."""
    try:
        return int(os.environ.get(key, str(default)))
    except ValueError:
        return default


@dataclass
class ClientConfig:
    """Client configuration."""
    SERVER_URL: str = "ws://localhost:8080/ws"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # Durable preferences (empty path keeps them in memory only)
    PREFERENCES_PATH: str = ""
    PLAYER_ALIAS: str = ""

    # Session defaults
    DEFAULT_SORT: str = "rank"
    DEFAULT_TARGET_SCORE: int = 100
    GAME_TITLE: str = "Big Two"

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Load configuration from environment variables."""
        sort = get_env("DEFAULT_SORT", "rank").lower()
        if sort not in ("rank", "suit"):
            sort = "rank"

        return cls(
            SERVER_URL=get_env("SERVER_URL", "ws://localhost:8080/ws"),
            LOG_LEVEL=get_env("LOG_LEVEL", "INFO"),
            ENVIRONMENT=get_env("ENVIRONMENT", "development"),
            DEBUG=get_env_bool("DEBUG", False),
            PREFERENCES_PATH=get_env("PREFERENCES_PATH", ""),
            PLAYER_ALIAS=get_env("PLAYER_ALIAS", ""),
            DEFAULT_SORT=sort,
            DEFAULT_TARGET_SCORE=get_env_int("DEFAULT_TARGET_SCORE", 100),
            GAME_TITLE=get_env("GAME_TITLE", "Big Two"),
        )


# Global config instance - loaded once at module import
config = ClientConfig.from_env()


def reload_config() -> ClientConfig:
    """Reload configuration from environment (useful for testing)."""
    global config
    config = ClientConfig.from_env()
    return config
