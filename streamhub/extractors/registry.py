"""
Extractor Registry.

Routes candidate URLs to the first extractor that supports them and caches
the extracted results until their TTL runs out.
"""

import copy
import logging
from typing import Iterable, Optional

from streamhub.cache.memory import MemoryCache
from streamhub.extractors.base import Extractor
from streamhub.resolving.base import Context, Format, UrlMeta, UrlResult

logger = logging.getLogger(__name__)


class ExtractorRegistry:
    """
    Central extraction hub.

    Usage:
        registry = ExtractorRegistry(default_extractors(http_client))
        results = await registry.handle(ctx, url, meta)
    """

    def __init__(
        self,
        extractors: Iterable[Extractor],
        cache: Optional[MemoryCache] = None,
        disabled: Iterable[str] = (),
    ):
        self._extractors: list[Extractor] = list(extractors)
        self._cache = cache if cache is not None else MemoryCache()
        self._disabled = set(disabled)
        logger.info(
            f"ExtractorRegistry initialized with {len(self._extractors)} extractors"
            + (f" ({len(self._disabled)} disabled)" if self._disabled else "")
        )

    @property
    def extractors(self) -> list[Extractor]:
        return list(self._extractors)

    def find(self, ctx: Context, url: str) -> Optional[Extractor]:
        """First enabled extractor supporting the URL."""
        for extractor in self._extractors:
            if extractor.id in self._disabled:
                continue
            if extractor.supports(ctx, url):
                return extractor
        return None

    async def handle(self, ctx: Context, url: str, meta: UrlMeta) -> list[UrlResult]:
        """
        Extract stream results for a candidate URL.

        Extractor failures are returned as a single error result so the
        user can be told why a source link did not play.
        """
        extractor = self.find(ctx, url)
        if extractor is None:
            logger.debug(f"[{ctx.id}] No extractor for {url}")
            return []

        normalized_url = extractor.normalize(url)
        cache_key = f"{extractor.id}:{meta.source_id}:{normalized_url}"

        cached = await self._cache.get_with_ttl(cache_key)
        if cached is not None:
            logger.debug(f"[{ctx.id}] Cache hit for {cache_key}")
            stored, remaining = cached
            return _refreshed(stored, meta, remaining * 1000)

        try:
            results = await extractor.extract(ctx, normalized_url, meta)
        except Exception as e:
            logger.info(f"[{ctx.id}] Extractor {extractor.id} failed for {normalized_url}: {e}")
            return [
                UrlResult(
                    url=normalized_url,
                    label=extractor.label,
                    format=Format.UNKNOWN,
                    meta=copy.deepcopy(meta),
                    is_external=True,
                    error=e,
                )
            ]

        for result in results:
            if result.meta.ttl is None:
                result.meta.ttl = extractor.ttl

        if results:
            ttl_ms = min(result.meta.ttl for result in results)
            await self._cache.set(cache_key, copy.deepcopy(results), ttl=ttl_ms / 1000)

        return results


def _refreshed(stored: list[UrlResult], meta: UrlMeta, remaining_ms: float) -> list[UrlResult]:
    """
    Copy cached results for a new caller.

    TTLs are reduced by the time the results already spent in the cache,
    and candidate-level metadata of the current caller replaces the values
    captured at extraction time.
    """
    # The cache entry lives as long as the shortest-lived result
    elapsed_ms = min(result.meta.ttl for result in stored) - remaining_ms

    results = copy.deepcopy(stored)
    for result in results:
        result.meta.ttl = max(0, int(result.meta.ttl - elapsed_ms))
        for name in ("height", "bytes", "title", "source_id", "source_label"):
            value = getattr(meta, name)
            if value is not None:
                setattr(result.meta, name, value)
        if meta.country_codes:
            result.meta.country_codes = list(meta.country_codes)
    return results
