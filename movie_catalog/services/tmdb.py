"""Thin async wrapper around the TMDb API shaping payloads into records."""

from __future__ import annotations

from typing import Any, Callable, TypeVar

import logging

import httpx

from movie_catalog.core.config import get_settings
from movie_catalog.services.errors import TMDbError, TMDbMalformedResponse, TMDbNotFound
from movie_catalog.services.models import Genre, Movie, MovieCredits, build_image_url, parse_rows

__all__ = [
    "TMDbClient",
    "TMDbError",
    "TMDbMalformedResponse",
    "TMDbNotFound",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TMDbClient:
    """TMDb HTTP client using API key auth.

    List operations never raise: any failure is logged and an empty list is
    returned. Single-movie operations raise :class:`TMDbError` subclasses.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        language: str | None = None,
        image_base: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.tmdb_api_key
        self.base_url = (base_url or settings.tmdb_base_url).rstrip("/")
        self.language = language or settings.tmdb_language
        self.image_base = (image_base or settings.tmdb_image_base).rstrip("/")
        self.image_size = settings.tmdb_image_size
        self._transport = transport

    async def _request(self, path: str) -> Any:
        url = f"{self.base_url}{path}"
        # A missing key is left for TMDb to reject with 401.
        query = {"api_key": self.api_key or "", "language": self.language}
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(url, params=query)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            code = exc.response.status_code
            if code == 404:
                raise TMDbNotFound(f"TMDb has no resource at {path}") from exc
            # str(exc) embeds the full URL, api_key included.
            raise TMDbError(f"TMDb returned HTTP {code} for {path}") from exc
        except httpx.HTTPError as exc:
            raise TMDbError(f"TMDb request to {path} failed: {exc}") from exc
        try:
            payload = response.json()
        except ValueError as exc:
            raise TMDbMalformedResponse(f"TMDb returned a non-JSON body for {path}") from exc
        logger.debug("TMDb payload for %s: %s", path, payload)
        return payload

    async def _list(self, path: str, key: str, parse: Callable[[Any], T]) -> list[T]:
        """Fetch a list endpoint, degrading to ``[]`` on any request failure.

        Malformed rows are dropped one by one; the remaining rows keep
        TMDb's order.
        """
        try:
            payload = await self._request(path)
            if not isinstance(payload, dict) or not isinstance(payload.get(key), list):
                raise TMDbMalformedResponse(f"TMDb payload for {path} has no '{key}' list")
            return parse_rows(payload[key], parse, path)
        except TMDbError as exc:
            logger.error("Error fetching %s: %s", path, exc)
            return []

    async def list_popular_movies(self) -> list[Movie]:
        """First page of popular movies, in TMDb order."""

        return await self._list("/movie/popular", "results", Movie.from_payload)

    async def list_upcoming_movies(self) -> list[Movie]:
        return await self._list("/movie/upcoming", "results", Movie.from_payload)

    async def list_genres(self) -> list[Genre]:
        return await self._list("/genre/movie/list", "genres", Genre.from_payload)

    async def get_movie_details(self, movie_id: int) -> Movie:
        """Fetch one movie; a missing id raises :class:`TMDbNotFound`."""

        _check_movie_id(movie_id)
        payload = await self._request(f"/movie/{movie_id}")
        return Movie.from_payload(payload)

    async def get_movie_credits(self, movie_id: int) -> MovieCredits:
        _check_movie_id(movie_id)
        payload = await self._request(f"/movie/{movie_id}/credits")
        return MovieCredits.from_payload(payload)

    def image_url(self, path: str | None, size: str | None = None) -> str | None:
        return build_image_url(path, size or self.image_size, base=self.image_base)


def _check_movie_id(movie_id: Any) -> None:
    if isinstance(movie_id, bool) or not isinstance(movie_id, int) or movie_id <= 0:
        raise ValueError(f"movie_id must be a positive integer, got {movie_id!r}")
