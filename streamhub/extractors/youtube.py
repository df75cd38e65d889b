"""
YouTube extractor.

YouTube links are handed to the client as video ids; the client plays
them with its own YouTube support.
"""

import re
from typing import Optional

from streamhub.extractors.base import Extractor
from streamhub.resolving.base import Context, UrlMeta, UrlResult


class YouTubeExtractor(Extractor):
    id = "youtube"
    label = "YouTube"
    ttl = 24 * 60 * 60 * 1000

    # Regex patterns for YouTube video IDs
    VIDEO_ID_PATTERNS = [
        r"(?:youtube\.com/watch\?(?:.*&)?v=|youtu\.be/|youtube\.com/embed/)([a-zA-Z0-9_-]{11})",
        r"youtube\.com/v/([a-zA-Z0-9_-]{11})",
        r"youtube\.com/shorts/([a-zA-Z0-9_-]{11})",
    ]

    def extract_video_id(self, url: str) -> Optional[str]:
        """
        Extract video ID from a YouTube URL.

        Supports watch, youtu.be, embed, v and shorts links.
        """
        for pattern in self.VIDEO_ID_PATTERNS:
            match = re.search(pattern, url)
            if match:
                return match.group(1)
        return None

    def supports(self, ctx: Context, url: str) -> bool:
        return self.extract_video_id(url) is not None

    def normalize(self, url: str) -> str:
        return f"https://www.youtube.com/watch?v={self.extract_video_id(url)}"

    async def extract(self, ctx: Context, url: str, meta: UrlMeta) -> list[UrlResult]:
        return [
            UrlResult(
                url=None,
                yt_id=self.extract_video_id(url),
                label=self.label,
                meta=meta,
            )
        ]
