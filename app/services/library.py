"""Normalisation of raw series and movie records into library entries."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from ..classification import classify_record
from ..models import LibraryEntry
from ..utils import as_genres, coerce_int
from .base import SourceKind


def _relational_series(record: Mapping[str, Any]) -> LibraryEntry:
    return LibraryEntry(
        type="series",
        slug=str(record.get("slug") or ""),
        title=str(record.get("title") or ""),
        poster=record.get("poster"),
        genres=as_genres(record.get("genres")),
        synopsis=record.get("description") or "",
        status="Available",
        release_year=coerce_int(record.get("year")),
        # Recomputed from the episode count on the detail view.
        total_episodes=None,
    )


def _relational_movie(record: Mapping[str, Any]) -> LibraryEntry:
    return LibraryEntry(
        type="movie",
        slug=str(record.get("slug") or ""),
        title=str(record.get("title") or ""),
        poster=record.get("poster"),
        genres=as_genres(record.get("genres")),
        synopsis=record.get("description") or "",
        status="Movie",
        release_year=coerce_int(record.get("year")),
        total_episodes=1,
    )


def _static_record(record: Mapping[str, Any], series_ids: Iterable[str]) -> LibraryEntry:
    return LibraryEntry(
        type=classify_record(record.get("id"), series_ids),
        slug=str(record.get("slug") or ""),
        title=str(record.get("title") or ""),
        poster=record.get("poster"),
        genres=as_genres(record.get("genres")),
        synopsis=record.get("synopsis") or "",
        status=record.get("status") or "Available",
        release_year=coerce_int(record.get("year")),
        total_episodes=coerce_int(record.get("totalEpisodes")),
    )


def build_library(
    series_records: Iterable[Mapping[str, Any]],
    movie_records: Iterable[Mapping[str, Any]],
    *,
    kind: SourceKind,
    series_ids: Iterable[str] = (),
) -> list[LibraryEntry]:
    """Map raw records from either backend onto :class:`LibraryEntry`.

    Series come first, then movies, each in the order the source returned
    them. Static records are classified through ``series_ids``; everything
    listed as a movie by the static source is a movie.
    """

    if kind == "static":
        allow_list = tuple(series_ids)
        entries = [_static_record(record, allow_list) for record in series_records]
        for record in movie_records:
            entry = _static_record(record, ())
            entries.append(entry.model_copy(update={"status": record.get("status") or "Movie"}))
        return entries

    return [
        *(_relational_series(record) for record in series_records),
        *(_relational_movie(record) for record in movie_records),
    ]
