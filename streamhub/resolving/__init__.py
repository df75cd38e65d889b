"""
Stream resolution.

Queries sources, extracts their candidate URLs and turns the results into
ranked, formatted stream entries.
"""

from streamhub.resolving.base import (
    ContentType,
    Context,
    Format,
    Source,
    SourceResult,
    UrlMeta,
    UrlResult,
)
from streamhub.resolving.stream_formatter import StreamFormatter, quality_label, resolution_label
from streamhub.resolving.stream_resolver import (
    StreamResolver,
    determine_ttl,
    rank_results,
)

__all__ = [
    # Base
    "ContentType",
    "Context",
    "Format",
    "Source",
    "SourceResult",
    "UrlMeta",
    "UrlResult",
    # Resolution
    "StreamFormatter",
    "StreamResolver",
    "determine_ttl",
    "quality_label",
    "rank_results",
    "resolution_label",
]
