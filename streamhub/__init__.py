"""
StreamHub - stream resolution for media addons

Finds playable streams for a movie or episode:
- Queries pluggable content sources, priority sources first
- Resolves candidate links through pluggable extractors
- Ranks results by quality and recommends a cache lifetime
"""

__version__ = "1.0.0"
__author__ = "StreamHub Contributors"
__license__ = "MIT"

from streamhub.config import get_config, load_config

__all__ = [
    "__version__",
    "get_config",
    "load_config",
]
