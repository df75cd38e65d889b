"""
Stream resolution data model.

Shared types passed between sources, the extractor registry and the
stream resolver.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


class ContentType(str, Enum):
    """Kinds of titles a client can request streams for."""

    MOVIE = "movie"
    SERIES = "series"


class Format(str, Enum):
    """Container/delivery format of a resolved stream."""

    MP4 = "mp4"
    HLS = "hls"
    MKV = "mkv"
    UNKNOWN = "unknown"


@dataclass
class Context:
    """
    Per-request context.

    Attributes:
        host_url: Public URL of this addon, used for reconfiguration links
        config: Per-request addon configuration (feature toggles)
        id: Request id, used to correlate log lines
        ip: Client IP address, if known
    """

    host_url: str
    config: dict[str, str] = field(default_factory=dict)
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    ip: Optional[str] = None


@dataclass
class UrlMeta:
    """
    Metadata attached to a candidate or resolved URL.

    Attributes:
        height: Vertical video resolution in pixels
        bytes: File size
        country_codes: Audio/subtitle country codes, most relevant first
        source_id: Id of the source that found the URL
        source_label: Display name of that source
        title: Original title line shown above the stream label
        ttl: How long the result stays valid, in milliseconds
    """

    height: Optional[int] = None
    bytes: Optional[int] = None
    country_codes: list[str] = field(default_factory=list)
    source_id: Optional[str] = None
    source_label: Optional[str] = None
    title: Optional[str] = None
    ttl: Optional[int] = None

    def merged_with_defaults(self, source_id: str, source_label: str) -> "UrlMeta":
        """Copy with the source id/label filled in where not already set."""
        return replace(
            self,
            country_codes=list(self.country_codes),
            source_id=self.source_id or source_id,
            source_label=self.source_label or source_label,
        )


@dataclass
class UrlResult:
    """
    A resolved stream.

    Exactly one of ``url`` (direct or, with ``is_external``, a link the
    client opens itself) or ``yt_id`` addresses the stream. Results with
    ``error`` set are external links to the page that failed.
    """

    url: Optional[str]
    label: str
    format: Format = Format.UNKNOWN
    meta: UrlMeta = field(default_factory=UrlMeta)
    is_external: bool = False
    request_headers: Optional[dict[str, str]] = None
    error: Optional[BaseException] = None
    yt_id: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def height(self) -> int:
        return self.meta.height or 0

    @property
    def bytes(self) -> int:
        return self.meta.bytes or 0

    @property
    def ttl(self) -> Optional[int]:
        return self.meta.ttl

    @property
    def is_secure(self) -> bool:
        return self.url is not None and urlparse(self.url).scheme == "https"


@dataclass
class SourceResult:
    """Candidate page URL found by a source."""

    url: str
    meta: Optional[UrlMeta] = None


class Source(ABC):
    """
    Abstract base class for content sources.

    Each source knows how to find candidate page URLs for a title on one
    site. Instances are configured once at startup and shared between
    requests, so ``handle`` must not keep per-request state on ``self``.
    """

    id: str = ""
    label: str = ""
    base_url: str = ""
    content_types: frozenset[ContentType] = frozenset()

    def supports(self, content_type: ContentType) -> bool:
        """Check whether this source serves the given content type."""
        return content_type in self.content_types

    @abstractmethod
    async def handle(
        self,
        ctx: Context,
        content_type: ContentType,
        title_id: Any,
    ) -> list[SourceResult]:
        """
        Find candidate URLs for a title.

        Args:
            ctx: Request context
            content_type: Requested content type
            title_id: Parsed title id (``ImdbId`` or ``TmdbId``)

        Returns:
            Candidate URLs, possibly empty

        Raises:
            Exception: Any failure; the resolver treats it as a source error
        """
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r}>"
