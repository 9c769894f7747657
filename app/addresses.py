"""Season-episode addresses and per-season episode grouping."""

from __future__ import annotations

import re
from typing import Iterable

from .errors import InvalidFormat
from .models import EpisodeSummary, SeasonIndex

ADDRESS_RE = re.compile(r"(0|[1-9][0-9]*)-(0|[1-9][0-9]*)")


def encode_address(season: int, episode: int) -> str:
    """Return the ``"{season}-{episode}"`` address for an episode."""

    if season < 0 or episode < 0:
        raise ValueError("Season and episode numbers must be non-negative")
    return f"{season}-{episode}"


def parse_address(value: str) -> tuple[int, int]:
    """Parse ``"1-5"`` into ``(1, 5)``.

    Only two unpadded decimal groups joined by a single hyphen are accepted;
    anything else raises :class:`InvalidFormat`.
    """

    if not isinstance(value, str):
        raise InvalidFormat()
    match = ADDRESS_RE.fullmatch(value)
    if not match:
        raise InvalidFormat()
    return int(match.group(1)), int(match.group(2))


def season_key(season: int) -> str:
    return str(season)


def group_by_season(episodes: Iterable[EpisodeSummary]) -> SeasonIndex:
    """Sort episodes by ``(season, number)`` and bucket them by season key."""

    index = SeasonIndex()
    for episode in sorted(episodes, key=lambda item: (item.season, item.number)):
        key = season_key(episode.season)
        index.seasons.setdefault(key, []).append(str(episode.number))
        index.episodes.setdefault(key, []).append(episode)
    return index
