"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

# Make ``app`` importable without an editable install; the package sits at
# the project root next to ``tests``.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.errors import SourceUnavailable  # noqa: E402
from app.services.base import CatalogSource, RawRecord  # noqa: E402


@pytest.fixture
def anyio_backend() -> str:
    """Run AnyIO tests on asyncio only."""

    return "asyncio"


def _episodes(slug: str, count: int) -> list[dict[str, Any]]:
    return [
        {
            "number": number,
            "title": f"{slug} episode {number}",
            "duration": "24m",
            "thumbnail": f"https://img.example.com/{slug}-{number}.jpg",
            "description": f"Episode {number}",
            "releaseDate": f"2024-01-0{number}",
        }
        for number in range(1, count + 1)
    ]


@pytest.fixture
def sample_document() -> dict[str, list[Any]]:
    """A small static document mirroring the bundled sample format."""

    return {
        "series": [
            {
                "id": "campfire-cooking",
                "slug": "campfire-cooking",
                "title": "Campfire Cooking",
                "poster": "https://img.example.com/campfire.jpg",
                "genres": ["Adventure", "Comedy"],
                "synopsis": "Cooking in another world.",
                "year": 2023,
                "episodes": list(reversed(_episodes("campfire-cooking", 3))),
            },
            {
                "id": "food-wars",
                "slug": "food-wars",
                "title": "Food Wars",
                "poster": "https://img.example.com/food-wars.jpg",
                "genres": ["Comedy", "School"],
                "synopsis": "Cooking duels.",
                "status": "Completed",
                "year": 2015,
                "totalEpisodes": 24,
                "episodes": _episodes("food-wars", 5),
            },
            {
                "id": "suzume",
                "slug": "suzume",
                "title": "Suzume",
                "poster": "https://img.example.com/suzume.jpg",
                "genres": ["Fantasy"],
                "synopsis": "Closing doors.",
                "year": 2022,
                "runtime": 122,
                "episodes": [],
            },
        ],
        "movies": [],
        "episodes": [],
        "latest": [],
    }


class FakeRelationalSource(CatalogSource):
    """In-memory stand-in returning rows shaped like the relational tables."""

    kind = "relational"
    description = "Fake store"

    def __init__(
        self,
        *,
        series: list[RawRecord] | None = None,
        movies: list[RawRecord] | None = None,
        episodes: list[RawRecord] | None = None,
        latest: list[RawRecord] | None = None,
        fail: bool = False,
    ) -> None:
        self.series = series or []
        self.movies = movies or []
        self.episodes = episodes or []
        self.latest = latest or []
        self.fail = fail
        self.latest_limits: list[int] = []

    def _check(self) -> None:
        if self.fail:
            raise SourceUnavailable("boom")

    async def list_series(self) -> list[RawRecord]:
        self._check()
        return self.series

    async def list_movies(self) -> list[RawRecord]:
        self._check()
        return self.movies

    async def list_episodes(self, series_slug: str) -> list[RawRecord]:
        self._check()
        return [row for row in self.episodes if row["series_slug"] == series_slug]

    async def list_latest_episodes(self, limit: int) -> list[RawRecord]:
        self._check()
        self.latest_limits.append(limit)
        return self.latest[:limit]

    async def get_series(self, slug: str) -> RawRecord | None:
        self._check()
        return next((row for row in self.series if row["slug"] == slug), None)

    async def get_movie(self, slug: str) -> RawRecord | None:
        self._check()
        return next((row for row in self.movies if row["slug"] == slug), None)

    async def get_episode(
        self, series_slug: str, season: int, episode: int
    ) -> RawRecord | None:
        self._check()
        for row in self.episodes:
            if (row["series_slug"], row["season"], row["episode"]) == (series_slug, season, episode):
                return row
        return None


@pytest.fixture
def make_relational_source():
    """Return a factory building :class:`FakeRelationalSource` instances."""

    return FakeRelationalSource
