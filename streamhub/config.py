"""
Configuration management for StreamHub.

Handles loading, validation, and access to application configuration.
"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field

# Global configuration instance
_config: Optional["StreamHubConfig"] = None


class AddonConfig(BaseModel):
    """Addon identity as shown to clients."""
    id: str = "streamhub"
    name: str = "StreamHub"


class ResolverConfig(BaseModel):
    """Stream resolution policy."""
    # Sources queried one by one, in this order, before any other source
    priority_source_ids: list[str] = Field(
        default_factory=lambda: ["embed69", "pelisplus4k", "cinehdplus", "xupalace"]
    )
    source_timeout: Optional[float] = 30.0  # seconds, None = unbounded
    extractor_timeout: Optional[float] = 30.0  # seconds, None = unbounded
    empty_result_ttl: int = 900000  # ms, 15 minutes


class ExtractorsConfig(BaseModel):
    """Extractor registry configuration."""
    disabled: list[str] = Field(default_factory=list)
    request_timeout: float = 10.0
    cache_max_entries: int = 1000


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = "INFO"
    file: Optional[str] = None
    max_size: str = "10MB"
    backup_count: int = 5
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class StreamHubConfig(BaseModel):
    """Main StreamHub configuration."""
    addon: AddonConfig = Field(default_factory=AddonConfig)
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    extractors: ExtractorsConfig = Field(default_factory=ExtractorsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: Optional[str] = None) -> StreamHubConfig:
    """
    Load configuration from file.

    Args:
        config_path: Path to config file. Defaults to config.yaml in project root.

    Returns:
        Loaded and validated configuration.
    """
    global _config

    if config_path is None:
        possible_paths = [
            Path("config.yaml"),
            Path(__file__).parent.parent / "config.yaml",
        ]
        for path in possible_paths:
            if path.exists():
                config_path = str(path)
                break

    config_data: dict[str, Any] = {}

    if config_path and Path(config_path).exists():
        with open(config_path) as f:
            config_data = yaml.safe_load(f) or {}

    # Apply environment variable overrides
    env_overrides = _get_env_overrides()
    _deep_merge(config_data, env_overrides)

    _config = StreamHubConfig(**config_data)
    return _config


def get_config() -> StreamHubConfig:
    """
    Get the current configuration.

    Returns:
        Current configuration (loads default if not yet loaded).
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config() -> StreamHubConfig:
    """Drop the cached configuration and load it again from disk."""
    global _config
    _config = None
    return load_config()


def _get_env_overrides() -> dict[str, Any]:
    """Get configuration overrides from environment variables."""
    overrides: dict[str, Any] = {}

    env_map = {
        "STREAMHUB_APP_NAME": ("addon", "name"),
        "STREAMHUB_ADDON_ID": ("addon", "id"),
        "STREAMHUB_SOURCE_TIMEOUT": ("resolver", "source_timeout"),
        "STREAMHUB_EXTRACTOR_TIMEOUT": ("resolver", "extractor_timeout"),
        "STREAMHUB_LOG_LEVEL": ("logging", "level"),
    }

    for env_var, path in env_map.items():
        value = os.environ.get(env_var)
        if value is not None:
            _set_nested(overrides, path, _parse_env_value(value))

    priority = os.environ.get("STREAMHUB_PRIORITY_SOURCES")
    if priority is not None:
        _set_nested(
            overrides,
            ("resolver", "priority_source_ids"),
            [part.strip() for part in priority.split(",") if part.strip()],
        )

    return overrides


def _parse_env_value(value: str) -> Any:
    """Parse environment variable value to appropriate type."""
    if value.lower() in ("none", "null"):
        return None
    if value.lower() in ("true", "yes"):
        return True
    if value.lower() in ("false", "no"):
        return False

    try:
        return int(value)
    except ValueError:
        pass

    try:
        return float(value)
    except ValueError:
        pass

    return value


def _set_nested(d: dict[str, Any], path: tuple[str, ...], value: Any) -> None:
    """Set a nested dictionary value from a path tuple."""
    for key in path[:-1]:
        d = d.setdefault(key, {})
    d[path[-1]] = value


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> None:
    """Deep merge override into base dictionary."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value


class _ConfigProxy:
    """
    Proxy object that provides lazy access to configuration.

    Allows modules to import `config` directly and access it like:
        from streamhub.config import config
        config.addon.name
    """

    def __getattr__(self, name: str) -> Any:
        return getattr(get_config(), name)

    def __repr__(self) -> str:
        return f"<ConfigProxy for {get_config()}>"


config = _ConfigProxy()
