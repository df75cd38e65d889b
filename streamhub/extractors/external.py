"""
Fallback extractor for links no other extractor understands.

They are listed as external links, which the client opens in a browser,
but only for users who asked for them.
"""

from urllib.parse import urlparse

from streamhub.extractors.base import Extractor
from streamhub.resolving.base import Context, UrlMeta, UrlResult
from streamhub.utils.toggles import show_external_urls


class ExternalUrlExtractor(Extractor):
    id = "external"
    label = "External"

    def supports(self, ctx: Context, url: str) -> bool:
        return urlparse(url).scheme in ("http", "https")

    async def extract(self, ctx: Context, url: str, meta: UrlMeta) -> list[UrlResult]:
        if not show_external_urls(ctx.config):
            return []

        return [
            UrlResult(
                url=url,
                label=self.hostname(url),
                meta=meta,
                is_external=True,
            )
        ]
