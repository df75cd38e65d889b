"""
Stream entry formatting.

Turns ranked ``UrlResult`` objects into the ``StreamEntry`` records a
client lists: display name, multi-line title, quality labels, a synthetic
filename and playback hints.
"""

import logging
import re
from typing import Optional

from streamhub.errors import nice_error_message
from streamhub.resolving.base import Context, Format, Source, UrlResult
from streamhub.schemas import BehaviorHints, ProxyHeaders, StreamEntry
from streamhub.utils.formatting import flag_from_country_code, format_bytes
from streamhub.utils.toggles import show_external_urls

logger = logging.getLogger(__name__)

# (minimum height, label), checked top down
QUALITY_THRESHOLDS = [
    (2160, "2160p"),
    (1440, "1440p"),
    (1080, "1080p"),
    (720, "720p"),
    (576, "576p"),
    (480, "480p"),
    (360, "360p"),
]
LOWEST_QUALITY = "240p"

RESOLUTION_LABELS = {
    "2160p": "4K",
    "1440p": "QHD",
    "1080p": "FHD",
    "720p": "HD",
    "576p": "SD",
    "480p": "SD",
    "360p": "SD",
}

PENDING_GLYPH = "⏳"
EXTERNAL_SUFFIX = "⚠️ external"
STREAM_TYPE = "hls"

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def quality_label(height: Optional[int]) -> Optional[str]:
    """Map a video height to its quality label, ``None`` when unknown."""
    if height is None:
        return None
    for minimum, label in QUALITY_THRESHOLDS:
        if height >= minimum:
            return label
    return LOWEST_QUALITY


def resolution_label(quality: str) -> str:
    """Map a quality label to its resolution class."""
    return RESOLUTION_LABELS.get(quality, "n/a")


class StreamFormatter:
    """Builds client stream entries for one addon identity."""

    def __init__(self, app_name: str, addon_id: str):
        self.app_name = app_name
        self.addon_id = addon_id

    def format(self, ctx: Context, result: UrlResult) -> StreamEntry:
        """Build the stream entry for a resolved (or failed) URL result."""
        quality = quality_label(result.meta.height)

        return StreamEntry(
            **self._address(result),
            name=self.build_name(ctx, result),
            title=self.build_title(ctx, result),
            type=STREAM_TYPE,
            behavior_hints=self._behavior_hints(result),
            quality=quality,
            resolution=resolution_label(quality) if quality else None,
        )

    def build_name(self, ctx: Context, result: UrlResult) -> str:
        parts = [self.app_name]
        parts.extend(flag_from_country_code(code) for code in result.meta.country_codes)

        quality = quality_label(result.meta.height)
        if quality:
            parts.append(quality.replace("p", "P"))

        parts.append(PENDING_GLYPH)

        if result.is_external and show_external_urls(ctx.config):
            parts.append(EXTERNAL_SUFFIX)

        return " ".join(parts)

    def build_title(self, ctx: Context, result: UrlResult) -> str:
        lines = []

        if result.meta.title:
            lines.append(result.meta.title)

        label = result.label or "Stream"
        source_label = result.meta.source_label or "Unknown"
        lines.append(f"🔗 {label} from {source_label}")

        if result.meta.bytes:
            lines.append(f"💾 {format_bytes(result.meta.bytes)}")

        if result.error is not None:
            lines.append(nice_error_message(ctx, result.meta.source_id or "", result.error))

        return "\n".join(lines)

    def build_filename(self, result: UrlResult) -> str:
        """
        Synthetic filename used by clients for subtitle matching.

        ``<quality>.<source>.<CC>[.[<size>]].mkv``
        """
        quality = quality_label(result.meta.height) or "Unknown"
        source_name = _NON_ALNUM.sub("", result.meta.source_label or "") or "Unknown"
        country_code = (result.meta.country_codes[0] if result.meta.country_codes else "Unknown")[:2].upper()

        parts = [quality, source_name, country_code]
        if result.meta.bytes:
            parts.append(f"[{format_bytes(result.meta.bytes)}]")
        parts.append("mkv")

        return ".".join(parts)

    def build_source_error_stream(self, ctx: Context, source: Source, error: BaseException) -> StreamEntry:
        """Visible entry for a source that failed as a whole."""
        return StreamEntry(
            name=self.app_name,
            title="\n".join([f"🔗 {source.label}", nice_error_message(ctx, source.id, error)]),
            external_url=source.base_url,
        )

    def build_no_sources_stream(self, ctx: Context) -> StreamEntry:
        """Entry asking the user to pick at least one source."""
        return StreamEntry(
            name=self.app_name,
            title="⚠️ No sources found. Please reconfigure the addon.",
            external_url=ctx.host_url,
        )

    def _address(self, result: UrlResult) -> dict[str, str]:
        if result.yt_id:
            return {"yt_id": result.yt_id}
        if not result.is_external:
            return {"url": result.url}
        return {"external_url": result.url}

    def _behavior_hints(self, result: UrlResult) -> BehaviorHints:
        hints = BehaviorHints(
            binge_group=f"{self.addon_id}-{result.meta.source_id}",
            filename=self.build_filename(result),
        )

        if result.format != Format.MP4 or not result.is_secure:
            hints.not_web_ready = True

        if result.request_headers is not None:
            hints.not_web_ready = True
            hints.proxy_headers = ProxyHeaders(request=result.request_headers)

        if result.meta.bytes:
            hints.video_size = result.meta.bytes

        return hints
