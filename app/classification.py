"""Series/movie classification table for the static sample document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal


ContentType = Literal["movie", "series"]


@dataclass(frozen=True)
class KnownSeries:
    """A multi-episode title shipped in the sample document."""

    key: str
    title: str


KNOWN_SERIES: tuple[KnownSeries, ...] = (
    KnownSeries(key="campfire-cooking", title="Campfire Cooking in Another World"),
    KnownSeries(key="hunter-x-hunter-hindi", title="Hunter x Hunter (Hindi)"),
    KnownSeries(key="food-wars", title="Food Wars! Shokugeki no Soma"),
)

DEFAULT_STATIC_SERIES_IDS: tuple[str, ...] = tuple(entry.key for entry in KNOWN_SERIES)


def classify_record(record_id: object, series_ids: Iterable[str]) -> ContentType:
    """Return ``series`` when the identifier is allow-listed, ``movie`` otherwise.

    The static document does not separate series from movies, so the type is
    looked up in a closed table instead of being inferred from the record.
    """

    if isinstance(record_id, str) and record_id in set(series_ids):
        return "series"
    return "movie"
