"""Relational catalog source backed by the Supabase REST interface."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import Settings
from ..errors import SourceUnavailable
from .base import CatalogSource, RawRecord

logger = logging.getLogger(__name__)


class RelationalSource(CatalogSource):
    """Thin wrapper issuing one PostgREST query per call."""

    kind = "relational"
    description = "Supabase PostgreSQL"

    _REST_PREFIX = "/rest/v1"

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient):
        if not settings.store_configured:
            raise ValueError("Store URL and key are required when initialising RelationalSource")
        self._settings = settings
        self._client = http_client

    def _headers(self) -> dict[str, str]:
        key = self._settings.store_key or ""
        return {
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Accept": "application/json",
        }

    def _url(self, table: str) -> str:
        base = (self._settings.store_url or "").rstrip("/")
        return f"{base}{self._REST_PREFIX}/{table}"

    async def _select(self, table: str, params: dict[str, Any]) -> list[RawRecord]:
        query = {"select": "*", **params}
        try:
            response = await self._client.get(
                self._url(table), params=query, headers=self._headers()
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Store query on %s failed with status %s: %s",
                table,
                exc.response.status_code,
                exc.response.text,
            )
            raise SourceUnavailable(f"Query on {table} failed") from exc
        except httpx.HTTPError as exc:
            logger.warning("Store query on %s failed: %s", table, exc)
            raise SourceUnavailable(f"Query on {table} failed") from exc
        except ValueError as exc:
            logger.warning("Store returned a non-JSON body for %s", table)
            raise SourceUnavailable(f"Query on {table} failed") from exc

        if not isinstance(payload, list):
            raise SourceUnavailable(f"Unexpected payload for {table}")
        return [row for row in payload if isinstance(row, dict)]

    async def _select_one(self, table: str, params: dict[str, Any]) -> RawRecord | None:
        rows = await self._select(table, {**params, "limit": 1})
        return rows[0] if rows else None

    async def list_series(self) -> list[RawRecord]:
        return await self._select("series", {"order": "title.asc"})

    async def list_movies(self) -> list[RawRecord]:
        return await self._select("movies", {"order": "title.asc"})

    async def list_episodes(self, series_slug: str) -> list[RawRecord]:
        return await self._select(
            "episodes",
            {
                "series_slug": f"eq.{series_slug}",
                "order": "season.asc,episode.asc",
            },
        )

    async def list_latest_episodes(self, limit: int) -> list[RawRecord]:
        return await self._select(
            "latest_episodes", {"order": "added_at.desc", "limit": limit}
        )

    async def get_series(self, slug: str) -> RawRecord | None:
        return await self._select_one("series", {"slug": f"eq.{slug}"})

    async def get_movie(self, slug: str) -> RawRecord | None:
        return await self._select_one("movies", {"slug": f"eq.{slug}"})

    async def get_episode(
        self, series_slug: str, season: int, episode: int
    ) -> RawRecord | None:
        return await self._select_one(
            "episodes",
            {
                "series_slug": f"eq.{series_slug}",
                "season": f"eq.{season}",
                "episode": f"eq.{episode}",
            },
        )
