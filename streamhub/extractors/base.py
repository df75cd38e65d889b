"""
Base extractor.

An extractor turns a candidate page URL found by a source (an embed page,
a file hoster link) into playable stream results.
"""

from abc import ABC, abstractmethod
from urllib.parse import urlparse

from streamhub.resolving.base import Context, UrlMeta, UrlResult


class Extractor(ABC):
    """
    Abstract base class for extractors.

    Attributes:
        id: Unique id, used for disabling and cache keys
        label: Display name used when extraction fails
        ttl: Default lifetime of results in milliseconds
    """

    id: str = ""
    label: str = ""
    ttl: int = 6 * 60 * 60 * 1000

    @abstractmethod
    def supports(self, ctx: Context, url: str) -> bool:
        """Check whether this extractor can handle the URL."""
        pass

    def normalize(self, url: str) -> str:
        """Canonical form of the URL, used as cache key."""
        return url

    @abstractmethod
    async def extract(self, ctx: Context, url: str, meta: UrlMeta) -> list[UrlResult]:
        """
        Resolve a page URL to stream results.

        Args:
            ctx: Request context
            url: Normalized URL
            meta: Metadata from the source, already merged with its defaults

        Returns:
            Resolved streams, possibly empty

        Raises:
            Exception: Any failure; the registry turns it into an error result
        """
        pass

    @staticmethod
    def hostname(url: str) -> str:
        return urlparse(url).hostname or url
