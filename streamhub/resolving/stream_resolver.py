"""
Stream Resolver.

Queries the configured sources for a title, extracts every candidate URL
they find, then ranks and formats the results.

Scheduling is two-phase. Priority sources run one at a time, in priority
order, and stop as soon as enough playable results were found. Only if
they fall short are the remaining sources queried, all at once.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional, Sequence

from streamhub.config import AddonConfig, ResolverConfig, get_config
from streamhub.errors import ExtractorTimeoutError, SourceTimeoutError
from streamhub.resolving.base import (
    ContentType,
    Context,
    Source,
    SourceResult,
    UrlMeta,
    UrlResult,
)
from streamhub.resolving.stream_formatter import StreamFormatter
from streamhub.schemas import ResolveResponse, StreamEntry
from streamhub.utils.toggles import show_errors

if TYPE_CHECKING:
    from streamhub.extractors.registry import ExtractorRegistry

logger = logging.getLogger(__name__)


@dataclass
class SourceOutcome:
    """What a single source contributed to one resolve call."""

    source: Source
    results: list[UrlResult] = field(default_factory=list)
    error: Optional[BaseException] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def playable_count(self) -> int:
        return count_playable(self.results)


def count_playable(results: Sequence[UrlResult]) -> int:
    """Number of results that are not error markers."""
    return sum(1 for result in results if not result.is_error)


def min_results_needed(content_type: ContentType) -> int:
    """Playable results needed before the remaining sources are skipped."""
    return 1 if content_type == ContentType.MOVIE else 2


def ranking_key(result: UrlResult) -> tuple:
    """
    Sort key for URL results.

    Errors last, external links after direct streams, then highest
    resolution, then largest file, then label.
    """
    return (
        result.is_error,
        result.is_external,
        -result.height,
        -result.bytes,
        result.label.casefold(),
        result.label,
    )


def rank_results(results: Sequence[UrlResult]) -> list[UrlResult]:
    return sorted(results, key=ranking_key)


def determine_ttl(results: Sequence[UrlResult], empty_ttl: int = 900000) -> Optional[int]:
    """
    Cache lifetime in milliseconds for a set of results.

    ``None`` when at least one result has no known lifetime.
    """
    if not results:
        return empty_ttl

    if any(result.ttl is None for result in results):
        return None

    return min(result.ttl for result in results)


class StreamResolver:
    """
    Resolves streams for a title across a set of sources.

    Usage:
        resolver = StreamResolver(extractor_registry)
        response = await resolver.resolve(ctx, sources, ContentType.MOVIE, parse_id("tt0111161"))
        payload = response.to_dict()
    """

    def __init__(
        self,
        extractor_registry: "ExtractorRegistry",
        resolver_config: Optional[ResolverConfig] = None,
        addon_config: Optional[AddonConfig] = None,
    ):
        if resolver_config is None or addon_config is None:
            app_config = get_config()
            resolver_config = resolver_config or app_config.resolver
            addon_config = addon_config or app_config.addon

        self.extractor_registry = extractor_registry
        self.config = resolver_config
        self.formatter = StreamFormatter(app_name=addon_config.name, addon_id=addon_config.id)

    def partition_sources(self, sources: Sequence[Source]) -> tuple[list[Source], list[Source]]:
        """
        Split sources into priority sources (in priority order) and the rest.
        """
        priority = self.config.priority_source_ids
        prioritized = sorted(
            (source for source in sources if source.id in priority),
            key=lambda source: priority.index(source.id),
        )
        other = [source for source in sources if source.id not in priority]
        return prioritized, other

    async def resolve(
        self,
        ctx: Context,
        sources: Sequence[Source],
        content_type: ContentType,
        title_id: Any,
    ) -> ResolveResponse:
        """
        Resolve streams for a title.

        Args:
            ctx: Request context
            sources: Sources the user enabled
            content_type: Requested content type
            title_id: Parsed title id, passed through to the sources

        Returns:
            Ranked stream entries and the recommended cache TTL
        """
        start_time = time.monotonic()

        if not sources:
            return ResolveResponse(streams=[self.formatter.build_no_sources_stream(ctx)])

        prioritized, other = self.partition_sources(sources)
        outcomes: list[SourceOutcome] = []
        playable = 0

        for source in prioritized:
            outcome = await self._handle_source(ctx, source, content_type, title_id)
            if outcome is None:
                continue
            outcomes.append(outcome)
            playable += outcome.playable_count

            if content_type == ContentType.MOVIE and outcome.playable_count > 0:
                logger.info(
                    f"[{ctx.id}] Early cutoff (movie): {source.id} returned "
                    f"{outcome.playable_count} results, skipping remaining priority sources"
                )
                break
            if content_type != ContentType.MOVIE and playable >= 2:
                logger.info(
                    f"[{ctx.id}] Early cutoff ({content_type.value}): {playable} results so far, "
                    f"skipping remaining priority sources"
                )
                break

        min_needed = min_results_needed(content_type)
        if playable < min_needed and other:
            logger.info(
                f"[{ctx.id}] Not enough results ({playable}/{min_needed}), "
                f"querying {len(other)} remaining sources"
            )
            fallback = await asyncio.gather(
                *(self._handle_source(ctx, source, content_type, title_id) for source in other)
            )
            outcomes.extend(outcome for outcome in fallback if outcome is not None)

        url_results = [result for outcome in outcomes for result in outcome.results]
        failed = [outcome for outcome in outcomes if outcome.failed]

        logger.info(
            f"[{ctx.id}] Final: {len(url_results)} URL results "
            f"({len(url_results) - count_playable(url_results)} errors, {len(failed)} failed sources) "
            f"in {time.monotonic() - start_time:.2f}s"
        )

        streams = self._build_streams(ctx, failed, rank_results(url_results))

        ttl = None
        if not failed:
            ttl = determine_ttl(url_results, empty_ttl=self.config.empty_result_ttl) or None

        return ResolveResponse(streams=streams, ttl=ttl)

    def _build_streams(
        self,
        ctx: Context,
        failed: Sequence[SourceOutcome],
        ranked: Sequence[UrlResult],
    ) -> list[StreamEntry]:
        include_errors = show_errors(ctx.config)
        streams: list[StreamEntry] = []

        if include_errors:
            streams.extend(
                self.formatter.build_source_error_stream(ctx, outcome.source, outcome.error)
                for outcome in failed
            )

        streams.extend(
            self.formatter.format(ctx, result)
            for result in ranked
            if not result.is_error or include_errors
        )
        return streams

    async def _handle_source(
        self,
        ctx: Context,
        source: Source,
        content_type: ContentType,
        title_id: Any,
    ) -> Optional[SourceOutcome]:
        """
        Query one source and extract all of its candidate URLs.

        Returns None if the source does not serve this content type. Source
        failures are recorded on the outcome, never raised.
        """
        if not source.supports(content_type):
            return None

        logger.info(f"[{ctx.id}] Processing source: {source.id}")

        try:
            candidates = await self._with_timeout(
                source.handle(ctx, content_type, title_id),
                self.config.source_timeout,
                f"Source {source.id} timed out",
                SourceTimeoutError,
            )
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning(f"[{ctx.id}] Source {source.id} failed: {type(e).__name__}: {e}")
            return SourceOutcome(source=source, error=e)

        extracted = await asyncio.gather(
            *(self._extract(ctx, source, candidate) for candidate in candidates)
        )

        results = [result for batch in extracted for result in batch]
        logger.debug(
            f"[{ctx.id}] Source {source.id}: {len(candidates)} candidates, {len(results)} URL results"
        )
        return SourceOutcome(source=source, results=results)

    async def _extract(self, ctx: Context, source: Source, candidate: SourceResult) -> list[UrlResult]:
        meta = (candidate.meta or UrlMeta()).merged_with_defaults(source.id, source.label)

        try:
            return await self._with_timeout(
                self.extractor_registry.handle(ctx, candidate.url, meta),
                self.config.extractor_timeout,
                f"Extraction of {candidate.url} timed out",
                ExtractorTimeoutError,
            )
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.debug(f"[{ctx.id}] Extractor failed for {candidate.url}: {e}")
            return []

    @staticmethod
    async def _with_timeout(awaitable, timeout: Optional[float], message: str, error_class: type[Exception]):
        if timeout is None:
            return await awaitable
        try:
            return await asyncio.wait_for(awaitable, timeout)
        except asyncio.TimeoutError as e:
            raise error_class(message) from e
