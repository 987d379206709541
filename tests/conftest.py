from typing import Any

import httpx
import pytest

from movie_catalog.core.config import get_settings
from movie_catalog.services.tmdb import TMDbClient

BASE_URL = "https://tmdb.test/3"


@pytest.fixture(autouse=True)
def reset_env(monkeypatch):
    # Keep a developer's real key out of the tests
    monkeypatch.setenv("TMDB_API_KEY", "test-key")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class FakeTMDb:
    """Routes requests by path to canned JSON, status codes or errors."""

    def __init__(self, routes: dict[str, Any]) -> None:
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/3")
        route = self.routes.get(path, 404)
        if isinstance(route, Exception):
            raise route
        if isinstance(route, int):
            return httpx.Response(route, json={"status_message": "nope"})
        if isinstance(route, str):
            return httpx.Response(200, text=route)
        return httpx.Response(200, json=route)

    def client(self, **kwargs: Any) -> TMDbClient:
        return TMDbClient(
            base_url=BASE_URL,
            transport=httpx.MockTransport(self.handler),
            **kwargs,
        )


@pytest.fixture
def fake_tmdb():
    def _build(routes: dict[str, Any]) -> FakeTMDb:
        return FakeTMDb(routes)

    return _build


@pytest.fixture
def fight_club():
    return {
        "id": 550,
        "title": "Fight Club",
        "poster_path": "/abc.jpg",
        "vote_average": 8.4,
        "release_date": "1999-10-15",
        "overview": "An insomniac office worker...",
        "genre_ids": [18],
    }


@pytest.fixture
def popular_payload():
    return {
        "page": 1,
        "results": [
            {"id": 3, "title": "Third", "poster_path": "/3.jpg", "vote_average": 7.1,
             "release_date": "2024-01-01", "overview": "", "genre_ids": [28, 12]},
            {"id": 1, "title": "First", "poster_path": None, "vote_average": 6.0,
             "release_date": "", "overview": "o", "genre_ids": []},
            {"id": 2, "title": "Second", "vote_average": 5.5, "genre_ids": [999]},
        ],
        "total_pages": 10,
    }


@pytest.fixture
def genres_payload():
    return {"genres": [{"id": 28, "name": "Action"}, {"id": 12, "name": "Adventure"}]}


@pytest.fixture
def credits_payload():
    return {
        "id": 550,
        "cast": [
            {"id": 819, "name": "Edward Norton", "character": "The Narrator", "profile_path": "/en.jpg"},
            {"id": 287, "name": "Brad Pitt", "character": "Tyler Durden", "profile_path": None},
            {"id": 1, "name": "", "character": "Nobody"},
            {"id": 7, "name": "Extra", "character": None},
        ],
        "crew": [{"id": 7467, "name": "David Fincher", "job": "Director"}],
    }
