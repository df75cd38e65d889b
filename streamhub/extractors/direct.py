"""
Direct media extractor.

Handles links that already point at a media file or HLS playlist. A HEAD
request confirms the file exists and reports its size.
"""

import logging
import re
from dataclasses import replace
from typing import Optional
from urllib.parse import urlparse

import httpx

from streamhub.errors import HttpStatusError, NotFoundError
from streamhub.extractors.base import Extractor
from streamhub.resolving.base import Context, Format, UrlMeta, UrlResult

logger = logging.getLogger(__name__)


class DirectMediaExtractor(Extractor):
    """
    Extractor for direct .mp4/.mkv/.m3u8 links.

    Features:
    - Format detection from the file extension
    - File size from Content-Length (not for HLS playlists)
    - Height from a quality token in the path, e.g. ``movie.1080p.mp4``
    """

    id = "direct"
    label = "Direct"
    ttl = 3 * 60 * 60 * 1000

    EXTENSIONS = {
        ".mp4": Format.MP4,
        ".mkv": Format.MKV,
        ".m3u8": Format.HLS,
    }

    HEIGHT_PATTERN = re.compile(r"(?<!\d)(2160|1440|1080|720|576|480|360|240)p(?![a-z0-9])", re.IGNORECASE)

    def __init__(self, http_client: httpx.AsyncClient, timeout: float = 10.0):
        self.http_client = http_client
        self.timeout = timeout

    def _format_for(self, url: str) -> Optional[Format]:
        path = urlparse(url).path.lower()
        for extension, media_format in self.EXTENSIONS.items():
            if path.endswith(extension):
                return media_format
        return None

    def supports(self, ctx: Context, url: str) -> bool:
        return urlparse(url).scheme in ("http", "https") and self._format_for(url) is not None

    def _height_from_url(self, url: str) -> Optional[int]:
        match = self.HEIGHT_PATTERN.search(urlparse(url).path)
        return int(match.group(1)) if match else None

    async def extract(self, ctx: Context, url: str, meta: UrlMeta) -> list[UrlResult]:
        media_format = self._format_for(url) or Format.UNKNOWN

        response = await self.http_client.head(url, follow_redirects=True, timeout=self.timeout)
        if response.status_code == 404:
            raise NotFoundError(f"{url} not found")
        if response.status_code >= 400:
            raise HttpStatusError(response.status_code, url)

        size = meta.bytes
        if size is None and media_format != Format.HLS:
            content_length = response.headers.get("content-length")
            if content_length and content_length.isdigit():
                size = int(content_length)

        height = meta.height if meta.height is not None else self._height_from_url(url)

        logger.debug(f"[{ctx.id}] Direct media {url}: format={media_format.value} height={height} bytes={size}")

        return [
            UrlResult(
                url=url,
                label=self.hostname(url),
                format=media_format,
                meta=replace(meta, height=height, bytes=size),
            )
        ]
