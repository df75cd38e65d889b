"""
Title identifiers.

Clients request streams by IMDb id (``tt0944947`` or ``tt0944947:1:2`` for an
episode) or by TMDB id (``tmdb:1399`` / ``tmdb:1399:1:2``).
"""

import re
from dataclasses import dataclass
from typing import Optional, Union

_IMDB_PATTERN = re.compile(r"^(tt\d+)(?::(\d+):(\d+))?$")
_TMDB_PATTERN = re.compile(r"^tmdb:(\d+)(?::(\d+):(\d+))?$")


@dataclass(frozen=True)
class ImdbId:
    id: str
    season: Optional[int] = None
    episode: Optional[int] = None

    def __str__(self) -> str:
        return _join(self.id, self.season, self.episode)


@dataclass(frozen=True)
class TmdbId:
    id: int
    season: Optional[int] = None
    episode: Optional[int] = None

    def __str__(self) -> str:
        return _join(f"tmdb:{self.id}", self.season, self.episode)


TitleId = Union[ImdbId, TmdbId]


def _join(base: str, season: Optional[int], episode: Optional[int]) -> str:
    if season is None or episode is None:
        return base
    return f"{base}:{season}:{episode}"


def parse_id(raw: str) -> TitleId:
    """
    Parse a client title id.

    Raises:
        ValueError: If the id is neither an IMDb nor a TMDB id
    """
    value = raw.strip()

    match = _IMDB_PATTERN.match(value)
    if match:
        imdb_id, season, episode = match.groups()
        return ImdbId(imdb_id, _int_or_none(season), _int_or_none(episode))

    match = _TMDB_PATTERN.match(value)
    if match:
        tmdb_id, season, episode = match.groups()
        return TmdbId(int(tmdb_id), _int_or_none(season), _int_or_none(episode))

    raise ValueError(f"Unsupported title id: {raw!r}")


def _int_or_none(value: Optional[str]) -> Optional[int]:
    return int(value) if value is not None else None
