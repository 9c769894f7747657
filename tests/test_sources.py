"""Tests for the relational and static catalog sources."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from app.classification import DEFAULT_STATIC_SERIES_IDS
from app.config import DEFAULT_SAMPLE_DATA_PATH, Settings
from app.errors import SourceUnavailable
from app.services.catalog import create_source
from app.services.sample_data import StaticDocumentSource, empty_document, load_document
from app.services.supabase import RelationalSource


def build_settings(**overrides: Any) -> Settings:
    """Return relational store settings suitable for tests."""

    base = {
        "SUPABASE_URL": "https://store.example.com",
        "SUPABASE_ANON_KEY": "anon-key",
    }
    base.update(overrides)
    return Settings(_env_file=None, **base)  # type: ignore[arg-type]


def test_load_document_reads_bundled_sample() -> None:
    document = load_document(DEFAULT_SAMPLE_DATA_PATH)
    slugs = [record["slug"] for record in document["series"]]
    assert "campfire-cooking" in slugs
    assert document["movies"] == []


def test_load_document_missing_file_degrades(tmp_path) -> None:
    assert load_document(tmp_path / "missing.json") == empty_document()


def test_load_document_malformed_json_degrades(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_document(path) == {"series": [], "movies": [], "episodes": [], "latest": []}


def test_load_document_rejects_non_object(tmp_path) -> None:
    path = tmp_path / "list.json"
    path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
    assert load_document(path) == empty_document()


def test_load_document_drops_non_object_records(tmp_path) -> None:
    path = tmp_path / "mixed.json"
    path.write_text(json.dumps({"series": [{"slug": "a"}, "junk", 4]}), encoding="utf-8")
    document = load_document(path)
    assert document["series"] == [{"slug": "a"}]
    assert document["latest"] == []


@pytest.mark.anyio("asyncio")
async def test_static_source_lookups(sample_document) -> None:
    source = StaticDocumentSource(sample_document, DEFAULT_STATIC_SERIES_IDS)

    assert source.kind == "static"
    assert len(await source.list_series()) == 3
    assert await source.list_movies() == []
    assert len(await source.list_episodes("food-wars")) == 5
    assert await source.list_episodes("unknown") == []

    assert (await source.get_series("food-wars"))["title"] == "Food Wars"
    assert await source.get_series("unknown") is None

    assert (await source.get_movie("suzume"))["title"] == "Suzume"
    assert await source.get_movie("food-wars") is None

    episode = await source.get_episode("food-wars", 1, 4)
    assert episode is not None and episode["number"] == 4
    assert await source.get_episode("food-wars", 2, 4) is None
    assert await source.get_episode("food-wars", 1, 99) is None


@pytest.mark.anyio("asyncio")
async def test_static_source_latest_uses_first_three_per_series(sample_document) -> None:
    source = StaticDocumentSource(sample_document, DEFAULT_STATIC_SERIES_IDS)
    rows = await source.list_latest_episodes(9)

    assert [(row["series_slug"], row["episode"]) for row in rows] == [
        ("campfire-cooking", 3),
        ("campfire-cooking", 2),
        ("campfire-cooking", 1),
        ("food-wars", 1),
        ("food-wars", 2),
        ("food-wars", 3),
    ]
    assert all(row["season"] == 1 for row in rows)


def test_create_source_selects_static_without_credentials(tmp_path) -> None:
    settings = Settings(_env_file=None, SUPABASE_URL="", SAMPLE_DATA_PATH=str(tmp_path / "none.json"))

    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(500)))
    source = create_source(settings, client)
    assert isinstance(source, StaticDocumentSource)


def test_create_source_selects_relational_with_credentials() -> None:
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200, json=[])))
    source = create_source(build_settings(), client)
    assert isinstance(source, RelationalSource)
    assert source.kind == "relational"


def test_relational_source_requires_credentials() -> None:
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200, json=[])))
    with pytest.raises(ValueError):
        RelationalSource(Settings(_env_file=None), client)


@pytest.mark.anyio("asyncio")
async def test_relational_source_builds_postgrest_queries() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path.endswith("/episodes"):
            return httpx.Response(200, json=[{"season": 1, "episode": 1}])
        return httpx.Response(200, json=[])

    transport = httpx.MockTransport(handler)
    async with httpx.AsyncClient(transport=transport) as http_client:
        source = RelationalSource(build_settings(), http_client)
        await source.list_series()
        episodes = await source.list_episodes("food-wars")
        await source.list_latest_episodes(20)
        missing = await source.get_movie("unknown")
        found = await source.get_episode("food-wars", 1, 5)

    assert episodes == [{"season": 1, "episode": 1}]
    assert missing is None
    assert found == {"season": 1, "episode": 1}

    series_request, episodes_request, latest_request, movie_request, episode_request = requests
    assert series_request.url.path == "/rest/v1/series"
    assert series_request.url.params["order"] == "title.asc"
    assert series_request.url.params["select"] == "*"
    assert series_request.headers["apikey"] == "anon-key"
    assert series_request.headers["Authorization"] == "Bearer anon-key"

    assert episodes_request.url.params["series_slug"] == "eq.food-wars"
    assert episodes_request.url.params["order"] == "season.asc,episode.asc"

    assert latest_request.url.path == "/rest/v1/latest_episodes"
    assert latest_request.url.params["order"] == "added_at.desc"
    assert latest_request.url.params["limit"] == "20"

    assert movie_request.url.params["slug"] == "eq.unknown"
    assert movie_request.url.params["limit"] == "1"

    assert episode_request.url.params["season"] == "eq.1"
    assert episode_request.url.params["episode"] == "eq.5"


@pytest.mark.anyio("asyncio")
async def test_relational_source_wraps_http_errors() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(503, text="down"))
    async with httpx.AsyncClient(transport=transport) as http_client:
        source = RelationalSource(build_settings(), http_client)
        with pytest.raises(SourceUnavailable):
            await source.list_series()


@pytest.mark.anyio("asyncio")
async def test_relational_source_wraps_transport_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
        source = RelationalSource(build_settings(), http_client)
        with pytest.raises(SourceUnavailable):
            await source.get_series("food-wars")


@pytest.mark.anyio("asyncio")
async def test_relational_source_rejects_unexpected_payloads() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"message": "nope"}))
    async with httpx.AsyncClient(transport=transport) as http_client:
        source = RelationalSource(build_settings(), http_client)
        with pytest.raises(SourceUnavailable):
            await source.list_movies()


@pytest.mark.anyio("asyncio")
async def test_static_source_movie_lookup_is_case_sensitive() -> None:
    document = empty_document()
    document["series"] = [
        {"id": "One-Piece", "slug": "one-piece", "title": "One Piece"},
        {"id": "one-piece", "slug": "one-piece-film", "title": "One Piece Film"},
    ]
    source = StaticDocumentSource(document, ("One-Piece",))

    assert await source.get_movie("one-piece") is None
    assert (await source.get_movie("one-piece-film"))["title"] == "One Piece Film"
