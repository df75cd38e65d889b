"""
Unit tests for stream entry formatting.
"""

import pytest

from streamhub.errors import BlockedError
from streamhub.resolving.base import Context, Format
from streamhub.resolving.stream_formatter import StreamFormatter, quality_label, resolution_label
from tests.fixtures.factories import FakeSource, make_result


@pytest.fixture
def formatter() -> StreamFormatter:
    return StreamFormatter(app_name="StreamHub", addon_id="streamhub")


@pytest.mark.unit
class TestQualityLabels:
    """Tests for height and quality mapping."""

    @pytest.mark.parametrize(
        "height,expected",
        [
            (4320, "2160p"),
            (2160, "2160p"),
            (1600, "1440p"),
            (1080, "1080p"),
            (1079, "720p"),
            (720, "720p"),
            (576, "576p"),
            (480, "480p"),
            (360, "360p"),
            (359, "240p"),
            (0, "240p"),
        ],
    )
    def test_quality_label(self, height, expected):
        assert quality_label(height) == expected

    def test_unknown_height(self):
        assert quality_label(None) is None

    def test_resolution_labels(self):
        assert resolution_label("2160p") == "4K"
        assert resolution_label("1440p") == "QHD"
        assert resolution_label("1080p") == "FHD"
        assert resolution_label("720p") == "HD"
        assert resolution_label("576p") == "SD"
        assert resolution_label("360p") == "SD"
        assert resolution_label("240p") == "n/a"


@pytest.mark.unit
class TestBuildName:
    """Tests for the display name."""

    def test_flags_and_quality(self, formatter, ctx):
        result = make_result(height=1080, country_codes=["es", "mx"])

        assert formatter.build_name(ctx, result) == "StreamHub 🇪🇸 🇲🇽 1080P ⏳"

    def test_without_quality(self, formatter, ctx):
        assert formatter.build_name(ctx, make_result()) == "StreamHub ⏳"

    def test_external_suffix_requires_toggle(self, formatter, ctx):
        result = make_result(is_external=True)
        toggled = Context(host_url="https://addon.test/", config={"includeExternalUrls": "on"})

        assert formatter.build_name(ctx, result) == "StreamHub ⏳"
        assert formatter.build_name(toggled, result) == "StreamHub ⏳ ⚠️ external"


@pytest.mark.unit
class TestBuildTitle:
    """Tests for the multi-line title."""

    def test_all_lines(self, formatter, ctx):
        result = make_result(
            label="Latino",
            source_label="Embed69",
            size=1610612736,
            title="The Shawshank Redemption (1994)",
        )

        assert formatter.build_title(ctx, result) == (
            "The Shawshank Redemption (1994)\n"
            "🔗 Latino from Embed69\n"
            "💾 1.5 GB"
        )

    def test_defaults(self, formatter, ctx):
        assert formatter.build_title(ctx, make_result(label="")) == "🔗 Stream from Unknown"

    def test_error_line(self, formatter, ctx):
        result = make_result(label="Voe", source_id="site1", error=BlockedError(reason="cloudflare"))

        lines = formatter.build_title(ctx, result).splitlines()

        assert lines[-1] == "⚠️ Request was blocked (cloudflare)."


@pytest.mark.unit
class TestBuildFilename:
    """Tests for the synthetic filename."""

    def test_full(self, formatter):
        result = make_result(height=1080, source_label="Pelis Plus 4K!", country_codes=["mx"], size=1073741824)

        assert formatter.build_filename(result) == "1080p.PelisPlus4K.MX.[1 GB].mkv"

    def test_unknowns(self, formatter):
        assert formatter.build_filename(make_result()) == "Unknown.Unknown.UN.mkv"

    def test_source_label_not_taken_from_title(self, formatter):
        result = make_result(height=720, source_label="Site", title="Movie (from somewhere)", country_codes=["es"])

        assert formatter.build_filename(result) == "720p.Site.ES.mkv"


@pytest.mark.unit
class TestFormat:
    """Tests for complete stream entries."""

    def test_direct_mp4_over_https(self, formatter, ctx):
        result = make_result(height=2160, size=2048, source_id="site1", source_label="Site1")

        entry = formatter.format(ctx, result).to_dict()

        assert entry["url"] == "https://cdn.test/video.mp4"
        assert entry["type"] == "hls"
        assert entry["quality"] == "2160p"
        assert entry["resolution"] == "4K"
        assert entry["behaviorHints"] == {
            "bingeGroup": "streamhub-site1",
            "videoSize": 2048,
            "filename": "2160p.Site1.UN.[2 KB].mkv",
        }

    def test_not_web_ready_for_http_or_other_format(self, formatter, ctx):
        insecure = make_result(url="http://cdn.test/video.mp4")
        playlist = make_result(media_format=Format.HLS)

        assert formatter.format(ctx, insecure).behavior_hints.not_web_ready is True
        assert formatter.format(ctx, playlist).behavior_hints.not_web_ready is True

    def test_request_headers_are_proxied(self, formatter, ctx):
        result = make_result(request_headers={"Referer": "https://site1.test/"})

        hints = formatter.format(ctx, result).to_dict()["behaviorHints"]

        assert hints["notWebReady"] is True
        assert hints["proxyHeaders"] == {"request": {"Referer": "https://site1.test/"}}

    def test_no_quality_fields_without_height(self, formatter, ctx):
        entry = formatter.format(ctx, make_result()).to_dict()

        assert "quality" not in entry
        assert "resolution" not in entry

    def test_address_selection(self, formatter, ctx):
        youtube = make_result(url=None, yt_id="dQw4w9WgXcQ")
        external = make_result(url="https://site1.test/watch", is_external=True)

        assert formatter.format(ctx, youtube).to_dict()["ytId"] == "dQw4w9WgXcQ"
        external_entry = formatter.format(ctx, external).to_dict()
        assert external_entry["externalUrl"] == "https://site1.test/watch"
        assert "url" not in external_entry

    def test_source_error_stream(self, formatter, ctx):
        source = FakeSource("site1", label="Site One")

        entry = formatter.build_source_error_stream(ctx, source, TimeoutError()).to_dict()

        assert entry == {
            "externalUrl": "https://site1.test/",
            "name": "StreamHub",
            "title": "🔗 Site One\n⏱️ Request timed out.",
        }
