"""Feature toggles read from the per-request addon configuration."""

from typing import Mapping

_TRUTHY = {"on", "true", "1", "yes"}


def _is_enabled(config: Mapping[str, str], key: str) -> bool:
    value = config.get(key)
    if value is None:
        return False
    return str(value).strip().lower() in _TRUTHY


def show_errors(config: Mapping[str, str]) -> bool:
    """Whether failed sources and broken results are shown to the user."""
    return _is_enabled(config, "showErrors")


def show_external_urls(config: Mapping[str, str]) -> bool:
    """Whether links the client has to open externally are listed."""
    return _is_enabled(config, "includeExternalUrls")
