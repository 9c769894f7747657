"""Assembly of canonical catalog payloads on top of the active source."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping

import httpx

from ..addresses import encode_address, group_by_season, parse_address
from ..config import Settings
from ..errors import NotFound
from ..models import (
    EpisodeDetail,
    EpisodeSummary,
    LatestEpisodeEntry,
    LibraryEntry,
    MovieDetail,
    SeriesDetail,
)
from ..utils import (
    as_genres,
    as_list,
    coerce_int,
    resolve_release_year,
    resolve_thumbnail,
)
from .base import CatalogSource
from .feed import RELATIONAL_FEED_CAP, STATIC_FEED_CAP, to_latest_entries
from .library import build_library
from .recommendations import RecommendationSampler
from .sample_data import StaticDocumentSource
from .supabase import RelationalSource

logger = logging.getLogger(__name__)


def create_source(settings: Settings, http_client: httpx.AsyncClient) -> CatalogSource:
    """Select the backend once, based on the store connection settings."""

    if not settings.store_configured:
        logger.warning("SUPABASE_URL and SUPABASE_ANON_KEY not set, using sample data")
        return StaticDocumentSource.from_path(
            settings.sample_data_path, settings.static_series_ids
        )
    logger.info("Using relational store at %s", settings.store_url)
    return RelationalSource(settings, http_client)


def _episode_summary(record: Mapping[str, Any], *, static: bool) -> EpisodeSummary | None:
    if static:
        season = 1
        number = coerce_int(record.get("number"))
    else:
        season = coerce_int(record.get("season"))
        number = coerce_int(record.get("episode"))
    if season is None or number is None or season < 0 or number < 0:
        return None
    return EpisodeSummary(
        season=season,
        id=encode_address(season, number),
        number=number,
        title=record.get("title"),
        duration=(record.get("duration") or "") if static else "",
        thumbnail=resolve_thumbnail(record),
        description=(record.get("description") or "") if static else "",
        episode_main_poster=record.get("episode_main_poster"),
        episode_card_thumbnail=record.get("episode_card_thumbnail"),
        episode_list_thumbnail=record.get("episode_list_thumbnail"),
        video_player_thumbnail=record.get("video_player_thumbnail"),
    )


class CatalogService:
    """Builds library, detail and feed payloads from the configured source."""

    def __init__(
        self,
        source: CatalogSource,
        *,
        series_ids: tuple[str, ...] = (),
        sampler: RecommendationSampler | None = None,
    ) -> None:
        self._source = source
        self._series_ids = series_ids
        self._sampler = sampler or RecommendationSampler()

    @property
    def source(self) -> CatalogSource:
        return self._source

    @property
    def is_static(self) -> bool:
        return self._source.kind == "static"

    async def library(self) -> list[LibraryEntry]:
        series_records, movie_records = await asyncio.gather(
            self._source.list_series(), self._source.list_movies()
        )
        return build_library(
            series_records,
            movie_records,
            kind=self._source.kind,
            series_ids=self._series_ids,
        )

    async def series_detail(self, slug: str) -> SeriesDetail:
        record = await self._source.get_series(slug)
        if record is None:
            raise NotFound("Series not found")

        raw_episodes = await self._source.list_episodes(slug)
        summaries = [
            summary
            for summary in (
                _episode_summary(episode, static=self.is_static)
                for episode in raw_episodes
            )
            if summary is not None
        ]
        index = group_by_season(summaries)

        if self.is_static:
            description = record.get("synopsis") or ""
            total = coerce_int(record.get("totalEpisodes")) or len(
                as_list(record.get("episodes"))
            )
        else:
            description = record.get("description") or ""
            total = len(raw_episodes)

        return SeriesDetail(
            slug=str(record.get("slug") or slug),
            title=str(record.get("title") or ""),
            description=description,
            poster=record.get("poster"),
            banner_image=record.get("banner_image"),
            genres=as_genres(record.get("genres")),
            status=record.get("status") or "Available",
            release_year=resolve_release_year(record),
            total_episodes=total,
            seasons=index.seasons,
            episodes=index.episodes,
        )

    async def movie_detail(self, slug: str) -> MovieDetail:
        record = await self._source.get_movie(slug)
        if record is None:
            raise NotFound("Movie not found")

        description = record.get("description")
        if self.is_static and not description:
            description = record.get("synopsis")
        poster = record.get("poster")
        return MovieDetail(
            slug=str(record.get("slug") or slug),
            title=str(record.get("title") or ""),
            description=description or "",
            poster=poster,
            banner_image=record.get("banner_image"),
            movie_poster=poster,
            thumbnail=poster,
            genres=as_genres(record.get("genres")),
            languages=as_genres(record.get("languages")),
            release_year=resolve_release_year(record),
            runtime=coerce_int(record.get("runtime")),
            servers=as_list(record.get("servers")),
        )

    async def episode(self, slug: str, address: str) -> EpisodeDetail:
        season, number = parse_address(address)
        record = await self._source.get_episode(slug, season, number)
        if record is None:
            raise NotFound("Episode not found")

        if self.is_static:
            description = record.get("description") or ""
            duration = record.get("duration") or ""
            release_date = record.get("releaseDate") or ""
        else:
            description = duration = release_date = ""

        return EpisodeDetail(
            series=slug,
            season=season,
            episode=number,
            episode_title=record.get("title"),
            title=record.get("title"),
            thumbnail=resolve_thumbnail(record),
            episode_main_poster=record.get("episode_main_poster"),
            episode_card_thumbnail=record.get("episode_card_thumbnail"),
            episode_list_thumbnail=record.get("episode_list_thumbnail"),
            video_player_thumbnail=record.get("video_player_thumbnail"),
            servers=as_list(record.get("servers")),
            description=description,
            duration=duration,
            release_date=str(release_date),
        )

    async def latest_episodes(self) -> list[LatestEpisodeEntry]:
        cap = STATIC_FEED_CAP if self.is_static else RELATIONAL_FEED_CAP
        rows = await self._source.list_latest_episodes(cap)
        return to_latest_entries(rows, cap=cap)

    async def suggestions(self, slug: str) -> list[LibraryEntry]:
        """Return recommendations for the series identified by ``slug``."""

        record = await self._source.get_series(slug)
        if record is None:
            raise NotFound("Series not found")
        library = await self.library()
        return self._sampler.sample(slug, as_genres(record.get("genres")), library)
