"""Utility modules for StreamHub"""

from .formatting import flag_from_country_code, format_bytes
from .ids import ImdbId, TitleId, TmdbId, parse_id
from .logging_setup import setup_logging, setup_logging_from_config
from .toggles import show_errors, show_external_urls

__all__ = [
    "flag_from_country_code",
    "format_bytes",
    "ImdbId",
    "TitleId",
    "TmdbId",
    "parse_id",
    "setup_logging",
    "setup_logging_from_config",
    "show_errors",
    "show_external_urls",
]
