"""Static catalog source reading the bundled sample document."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

from ..classification import classify_record
from ..utils import as_list, coerce_int
from .base import CatalogSource, RawRecord
from .feed import derive_document_feed

logger = logging.getLogger(__name__)

DOCUMENT_KEYS: tuple[str, ...] = ("series", "movies", "episodes", "latest")


def empty_document() -> dict[str, list[Any]]:
    return {key: [] for key in DOCUMENT_KEYS}


def load_document(path: str | Path) -> dict[str, list[Any]]:
    """Parse the sample document, degrading to an empty catalog on failure."""

    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.error("Failed to load sample data from %s: %s", path, exc)
        return empty_document()

    if not isinstance(raw, dict):
        logger.error("Sample data at %s is not a JSON object", path)
        return empty_document()

    document = empty_document()
    for key in DOCUMENT_KEYS:
        document[key] = [entry for entry in as_list(raw.get(key)) if isinstance(entry, dict)]
    logger.info(
        "Loaded sample data successfully (%d series, %d movies)",
        len(document["series"]),
        len(document["movies"]),
    )
    return document


class StaticDocumentSource(CatalogSource):
    """Serves records from a document parsed once at startup."""

    kind = "static"
    description = "Sample Data (Development)"

    def __init__(self, document: dict[str, list[Any]], series_ids: Iterable[str]):
        self._document = document
        self._series_ids = frozenset(series_ids)

    @classmethod
    def from_path(cls, path: str | Path, series_ids: Iterable[str]) -> "StaticDocumentSource":
        return cls(load_document(path), series_ids)

    @property
    def series_ids(self) -> frozenset[str]:
        return self._series_ids

    def _find(self, key: str, slug: str) -> RawRecord | None:
        for record in self._document.get(key, []):
            if record.get("slug") == slug:
                return record
        return None

    async def list_series(self) -> list[RawRecord]:
        return list(self._document["series"])

    async def list_movies(self) -> list[RawRecord]:
        return list(self._document["movies"])

    async def list_episodes(self, series_slug: str) -> list[RawRecord]:
        record = self._find("series", series_slug)
        if record is None:
            return []
        return [episode for episode in as_list(record.get("episodes")) if isinstance(episode, dict)]

    async def list_latest_episodes(self, limit: int) -> list[RawRecord]:
        return derive_document_feed(self._document["series"], cap=limit)

    async def get_series(self, slug: str) -> RawRecord | None:
        return self._find("series", slug)

    async def get_movie(self, slug: str) -> RawRecord | None:
        movie = self._find("movies", slug)
        if movie is not None:
            return movie
        record = self._find("series", slug)
        if record is None:
            return None
        if classify_record(record.get("id"), self._series_ids) == "movie":
            return record
        return None

    async def get_episode(
        self, series_slug: str, season: int, episode: int
    ) -> RawRecord | None:
        if season != 1:
            return None
        for candidate in await self.list_episodes(series_slug):
            if coerce_int(candidate.get("number")) == episode:
                return candidate
        return None
