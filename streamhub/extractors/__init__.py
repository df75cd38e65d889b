"""
Extractors for candidate URLs found by sources.

Resolves embed pages and file links to playable stream results.
"""

from typing import Optional

import httpx

from streamhub.cache.memory import MemoryCache
from streamhub.config import ExtractorsConfig, get_config
from streamhub.extractors.base import Extractor
from streamhub.extractors.direct import DirectMediaExtractor
from streamhub.extractors.external import ExternalUrlExtractor
from streamhub.extractors.registry import ExtractorRegistry
from streamhub.extractors.youtube import YouTubeExtractor


def default_extractors(http_client: httpx.AsyncClient, request_timeout: float = 10.0) -> list[Extractor]:
    """Built-in extractors, most specific first; the external fallback is last."""
    return [
        DirectMediaExtractor(http_client, timeout=request_timeout),
        YouTubeExtractor(),
        ExternalUrlExtractor(),
    ]


def create_registry(
    http_client: httpx.AsyncClient,
    extractors_config: Optional[ExtractorsConfig] = None,
) -> ExtractorRegistry:
    """Registry with the built-in extractors, configured from ``extractors``."""
    extractors_config = extractors_config or get_config().extractors
    return ExtractorRegistry(
        default_extractors(http_client, request_timeout=extractors_config.request_timeout),
        cache=MemoryCache(max_entries=extractors_config.cache_max_entries),
        disabled=extractors_config.disabled,
    )


__all__ = [
    # Base
    "Extractor",
    "ExtractorRegistry",
    "create_registry",
    "default_extractors",
    # Extractors
    "DirectMediaExtractor",
    "ExternalUrlExtractor",
    "YouTubeExtractor",
]
