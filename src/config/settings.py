"""
Configuration management for Hermes.

Configuration sources:
- config.yaml: Application settings (non-secrets)
- Environment variables: Infrastructure overrides (hosts, ports, user agent)

ENV vars override YAML values for infrastructure settings.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Literal

import yaml
from pydantic import BaseModel, Field


DEFAULT_USER_AGENT = "ExampleBot 2.0 (+http://example.com/bot)"


class AppSettings(BaseModel):
    """Application-level settings."""
    name: str = "Hermes"
    version: str = "1.0.0"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"


class APISettings(BaseModel):
    """API server settings."""
    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1
    cors_origins: List[str] = ["*"]


class SearchSettings(BaseModel):
    """Web search engine settings."""
    cache_expire_after_mins: int = Field(default=60, ge=1)
    cache_max_size: int = Field(default=1000, ge=1)
    max_tries: int = Field(default=6, ge=1)
    user_agent: str = Field(default=DEFAULT_USER_AGENT, min_length=1)
    request_timeout: float = Field(default=10.0, gt=0)


class Settings(BaseModel):
    """Main settings container."""
    app: AppSettings = AppSettings()
    api: APISettings = APISettings()
    search: SearchSettings = SearchSettings()


def _load_yaml_config(yaml_path: Path) -> dict:
    """Load YAML config file if it exists."""
    if yaml_path.exists():
        with open(yaml_path, "r") as f:
            return yaml.safe_load(f) or {}
    return {}


def _apply_env_overrides(settings: Settings) -> Settings:
    """
    Apply environment variable overrides.

    ENV vars override YAML for:
    - Infrastructure: host, port (for Docker flexibility)
    - Search tuning: user agent, cache sizing, try budget
    """
    if os.environ.get("API_HOST"):
        settings.api.host = os.environ["API_HOST"]
    if os.environ.get("API_PORT"):
        settings.api.port = int(os.environ["API_PORT"])

    search_overrides = {}
    if os.environ.get("SEARCH_USER_AGENT"):
        search_overrides["user_agent"] = os.environ["SEARCH_USER_AGENT"]
    if os.environ.get("SEARCH_CACHE_EXPIRE_AFTER_MINS"):
        search_overrides["cache_expire_after_mins"] = int(os.environ["SEARCH_CACHE_EXPIRE_AFTER_MINS"])
    if os.environ.get("SEARCH_CACHE_MAX_SIZE"):
        search_overrides["cache_max_size"] = int(os.environ["SEARCH_CACHE_MAX_SIZE"])
    if os.environ.get("SEARCH_MAX_TRIES"):
        search_overrides["max_tries"] = int(os.environ["SEARCH_MAX_TRIES"])

    if search_overrides:
        # Re-validate so overrides obey the same bounds as YAML values
        settings.search = SearchSettings(**{**settings.search.model_dump(), **search_overrides})

    return settings


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings.

    Loads from:
    1. config.yaml (application settings)
    2. Environment variables (infrastructure overrides)
    """
    # Load .env file if present (for local development)
    from dotenv import load_dotenv
    env_path = Path(__file__).parent.parent.parent / ".env"
    load_dotenv(env_path)

    config_path = Path(__file__).parent.parent.parent / "config.yaml"
    yaml_config = _load_yaml_config(config_path)

    settings = Settings(
        app=AppSettings(**yaml_config.get("app", {})),
        api=APISettings(**yaml_config.get("api", {})),
        search=SearchSettings(**yaml_config.get("search", {})),
    )

    settings = _apply_env_overrides(settings)

    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache. Useful for testing."""
    get_settings.cache_clear()
