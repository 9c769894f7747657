"""Pydantic models describing the canonical catalog payloads."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

ContentType = Literal["movie", "series"]


class CatalogModel(BaseModel):
    """Base model serialising by wire alias."""

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class LibraryEntry(CatalogModel):
    """A series or movie card returned by ``/api/library``."""

    type: ContentType
    slug: str
    title: str
    poster: str | None = None
    genres: list[str] = Field(default_factory=list)
    synopsis: str = ""
    status: str = "Available"
    release_year: int | None = None
    total_episodes: int | None = Field(default=None, alias="totalEpisodes")


class EpisodeSummary(CatalogModel):
    """Episode entry listed inside a series detail payload."""

    season: int = Field(exclude=True)
    id: str
    number: int
    title: str | None = None
    duration: str = ""
    thumbnail: str | None = None
    description: str = ""
    episode_main_poster: str | None = None
    episode_card_thumbnail: str | None = None
    episode_list_thumbnail: str | None = None
    video_player_thumbnail: str | None = None


class SeasonIndex(BaseModel):
    """Episodes bucketed by season key."""

    seasons: dict[str, list[str]] = Field(default_factory=dict)
    episodes: dict[str, list[EpisodeSummary]] = Field(default_factory=dict)


class SeriesDetail(CatalogModel):
    type: Literal["series"] = "series"
    slug: str
    title: str
    description: str = ""
    poster: str | None = None
    banner_image: str | None = None
    genres: list[str] = Field(default_factory=list)
    status: str = "Available"
    release_year: int | None = None
    total_episodes: int = Field(default=0, alias="totalEpisodes")
    seasons: dict[str, list[str]] = Field(default_factory=dict)
    episodes: dict[str, list[EpisodeSummary]] = Field(default_factory=dict)


class EpisodeDetail(CatalogModel):
    """Single episode returned by the season-episode lookup."""

    series: str
    season: int
    episode: int
    episode_title: str | None = None
    title: str | None = None
    thumbnail: str | None = None
    episode_main_poster: str | None = None
    episode_card_thumbnail: str | None = None
    episode_list_thumbnail: str | None = None
    video_player_thumbnail: str | None = None
    servers: list[Any] = Field(default_factory=list)
    description: str = ""
    duration: str = ""
    release_date: str = Field(default="", alias="releaseDate")


class MovieDetail(CatalogModel):
    type: Literal["movie"] = "movie"
    slug: str
    title: str
    description: str = ""
    poster: str | None = None
    banner_image: str | None = None
    movie_poster: str | None = None
    thumbnail: str | None = None
    genres: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)
    status: str = "Movie"
    release_year: int | None = None
    runtime: int | None = None
    servers: list[Any] = Field(default_factory=list)


class LatestEpisodeEntry(CatalogModel):
    """Recently added episode shown on the home feed."""

    series_slug: str = Field(alias="seriesSlug")
    series: str | None = None
    season: int
    episode: int
    title: str | None = None
    thumbnail: str | None = None
    added_at: str | None = Field(default=None, alias="addedAt")
