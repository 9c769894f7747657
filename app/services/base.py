"""Common interface implemented by the catalog data sources."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Literal

SourceKind = Literal["relational", "static"]
RawRecord = dict[str, Any]


class CatalogSource(ABC):
    """Supplies raw series, movie and episode records in backend-native shape."""

    kind: SourceKind
    description: str = ""

    @abstractmethod
    async def list_series(self) -> list[RawRecord]:
        """Return every series record ordered by title."""

    @abstractmethod
    async def list_movies(self) -> list[RawRecord]:
        """Return every movie record ordered by title."""

    @abstractmethod
    async def list_episodes(self, series_slug: str) -> list[RawRecord]:
        """Return the raw episode records belonging to a series."""

    @abstractmethod
    async def list_latest_episodes(self, limit: int) -> list[RawRecord]:
        """Return feed rows for recently added episodes, newest first."""

    @abstractmethod
    async def get_series(self, slug: str) -> RawRecord | None:
        ...

    @abstractmethod
    async def get_movie(self, slug: str) -> RawRecord | None:
        ...

    @abstractmethod
    async def get_episode(
        self, series_slug: str, season: int, episode: int
    ) -> RawRecord | None:
        ...
