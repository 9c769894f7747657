"""Latest-episodes feed derivation."""

from __future__ import annotations

from itertools import islice
from typing import Any, Iterable, Mapping

from ..models import LatestEpisodeEntry
from ..utils import as_list, coerce_int, resolve_thumbnail

RELATIONAL_FEED_CAP = 20
STATIC_FEED_CAP = 9
STATIC_EPISODES_PER_SERIES = 3


def derive_document_feed(
    series_records: Iterable[Mapping[str, Any]],
    *,
    per_series: int = STATIC_EPISODES_PER_SERIES,
    cap: int = STATIC_FEED_CAP,
) -> list[dict[str, Any]]:
    """Build feed rows from a document that has no recency information.

    Takes the first ``per_series`` episodes of every series in document order
    and truncates the flattened list to ``cap``. The result is not
    chronological.
    """

    rows: list[dict[str, Any]] = []
    for record in series_records:
        for episode in islice(as_list(record.get("episodes")), per_series):
            if not isinstance(episode, Mapping):
                continue
            rows.append(
                {
                    "series_slug": record.get("slug"),
                    "series_title": record.get("title"),
                    "season": 1,
                    "episode": episode.get("number"),
                    "episode_title": episode.get("title"),
                    "thumbnail": resolve_thumbnail(episode),
                    "added_at": episode.get("releaseDate"),
                }
            )
    return rows[:cap]


def to_latest_entries(
    rows: Iterable[Mapping[str, Any]], *, cap: int
) -> list[LatestEpisodeEntry]:
    """Rename feed rows into :class:`LatestEpisodeEntry` objects, keeping order."""

    entries: list[LatestEpisodeEntry] = []
    for row in islice(rows, cap):
        season = coerce_int(row.get("season"))
        episode = coerce_int(row.get("episode"))
        slug = row.get("series_slug")
        if season is None or episode is None or not slug:
            continue
        added_at = row.get("added_at")
        entries.append(
            LatestEpisodeEntry(
                series_slug=str(slug),
                series=row.get("series_title"),
                season=season,
                episode=episode,
                title=row.get("episode_title"),
                thumbnail=row.get("thumbnail"),
                added_at=str(added_at) if added_at is not None else None,
            )
        )
    return entries
