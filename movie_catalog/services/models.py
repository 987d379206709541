"""Immutable records shaped from TMDb wire payloads.

Each record maps one JSON object from the API. Required fields that are
missing or ill-typed raise :class:`TMDbMalformedResponse`; optional fields
fall back to fixed defaults so the same payload always yields the same
record. Unknown keys are ignored. Rows of a list (movie results, genres,
cast, crew) go through :func:`parse_rows`, which drops malformed rows
instead of failing the whole list.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, TypeVar

from movie_catalog.services.errors import TMDbMalformedResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")

IMAGE_SIZES = frozenset({"w92", "w154", "w185", "w342", "w500", "w780", "original"})
DEFAULT_IMAGE_BASE = "https://image.tmdb.org/t/p"


def _require_mapping(payload: Any, kind: str) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise TMDbMalformedResponse(f"{kind} payload must be an object, got {type(payload).__name__}")
    return payload


def _identifier(payload: Mapping[str, Any], key: str, kind: str) -> int:
    value = payload.get(key)
    # bool is an int subclass; TMDb never sends one as an id.
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise TMDbMalformedResponse(f"{kind}.{key} must be a non-negative integer, got {value!r}")
    return value


def _text(payload: Mapping[str, Any], key: str, kind: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str):
        raise TMDbMalformedResponse(f"{kind}.{key} must be a string, got {value!r}")
    return value


def _name(payload: Mapping[str, Any], kind: str) -> str:
    value = _text(payload, "name", kind)
    if not value.strip():
        raise TMDbMalformedResponse(f"{kind}.name must not be empty")
    return value


def _optional_text(payload: Mapping[str, Any], key: str, kind: str, *, default: str = "") -> str:
    value = payload.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise TMDbMalformedResponse(f"{kind}.{key} must be a string, got {value!r}")
    return value


def _optional_path(payload: Mapping[str, Any], key: str, kind: str) -> str | None:
    return _optional_text(payload, key, kind) or None


def _vote_average(payload: Mapping[str, Any]) -> float:
    value = payload.get("vote_average")
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TMDbMalformedResponse(f"movie.vote_average must be a number, got {value!r}")
    if not 0.0 <= value <= 10.0:
        raise TMDbMalformedResponse(f"movie.vote_average out of range: {value!r}")
    return float(value)


def _genre_ids(payload: Mapping[str, Any]) -> tuple[int, ...]:
    if payload.get("genre_ids") is not None:
        raw = payload["genre_ids"]
        if not isinstance(raw, list):
            raise TMDbMalformedResponse(f"movie.genre_ids must be a list, got {raw!r}")
        ids = []
        for value in raw:
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise TMDbMalformedResponse(f"movie.genre_ids holds a non-integer: {value!r}")
            ids.append(value)
        return tuple(ids)
    # /movie/{id} embeds full genre objects instead of ids.
    genres = payload.get("genres")
    if genres is None:
        return ()
    if not isinstance(genres, list):
        raise TMDbMalformedResponse(f"movie.genres must be a list, got {genres!r}")
    return tuple(Genre.from_payload(item).id for item in genres)


@dataclass(frozen=True, slots=True)
class Genre:
    """A TMDb movie genre."""

    id: int
    name: str

    @classmethod
    def from_payload(cls, payload: Any) -> Genre:
        data = _require_mapping(payload, "genre")
        return cls(id=_identifier(data, "id", "genre"), name=_text(data, "name", "genre"))

    def to_payload(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True, slots=True)
class Movie:
    """A movie as listed or detailed by TMDb."""

    id: int
    title: str
    poster_path: str | None = None
    vote_average: float = 0.0
    release_date: str = ""
    overview: str = ""
    genre_ids: tuple[int, ...] = ()

    @classmethod
    def from_payload(cls, payload: Any) -> Movie:
        data = _require_mapping(payload, "movie")
        return cls(
            id=_identifier(data, "id", "movie"),
            title=_text(data, "title", "movie"),
            poster_path=_optional_path(data, "poster_path", "movie"),
            vote_average=_vote_average(data),
            release_date=_optional_text(data, "release_date", "movie"),
            overview=_optional_text(data, "overview", "movie"),
            genre_ids=_genre_ids(data),
        )

    def to_payload(self) -> dict[str, Any]:
        """Serialize back to the list-endpoint wire shape."""
        return {
            "id": self.id,
            "title": self.title,
            "poster_path": self.poster_path,
            "vote_average": self.vote_average,
            "release_date": self.release_date,
            "overview": self.overview,
            "genre_ids": list(self.genre_ids),
        }


@dataclass(frozen=True, slots=True)
class CastMember:
    id: int
    name: str
    character: str = ""
    profile_path: str | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> CastMember:
        data = _require_mapping(payload, "cast")
        return cls(
            id=_identifier(data, "id", "cast"),
            name=_name(data, "cast"),
            character=_optional_text(data, "character", "cast"),
            profile_path=_optional_path(data, "profile_path", "cast"),
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "character": self.character,
            "profile_path": self.profile_path,
        }


@dataclass(frozen=True, slots=True)
class MovieCredits:
    """Cast of a movie. Crew rows are kept as raw payloads."""

    id: int
    cast: tuple[CastMember, ...] = ()
    crew: tuple[dict[str, Any], ...] = ()

    @classmethod
    def from_payload(cls, payload: Any) -> MovieCredits:
        data = _require_mapping(payload, "credits")
        raw_cast = data.get("cast") or []
        raw_crew = data.get("crew") or []
        if not isinstance(raw_cast, list) or not isinstance(raw_crew, list):
            raise TMDbMalformedResponse("credits.cast and credits.crew must be lists")
        return cls(
            id=_identifier(data, "id", "credits"),
            cast=tuple(parse_rows(raw_cast, CastMember.from_payload, "credits.cast")),
            crew=tuple(parse_rows(raw_crew, _crew_row, "credits.crew")),
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "cast": [member.to_payload() for member in self.cast],
            "crew": [dict(member) for member in self.crew],
        }


def _crew_row(payload: Any) -> dict[str, Any]:
    return dict(_require_mapping(payload, "crew"))


def parse_rows(rows: Iterable[Any], parse: Callable[[Any], T], where: str) -> list[T]:
    """Parse every row of a list payload, skipping malformed ones.

    A bad row is logged and dropped so the rest of the list survives.
    """
    parsed = []
    for index, row in enumerate(rows):
        try:
            parsed.append(parse(row))
        except TMDbMalformedResponse as exc:
            logger.warning("Skipping malformed row %d in %s: %s", index, where, exc)
    return parsed


def genre_lookup(genres: Iterable[Genre]) -> dict[int, str]:
    """Index genres by id for label resolution."""
    return {genre.id: genre.name for genre in genres}


def resolve_genre_names(genre_ids: Iterable[int], lookup: Mapping[int, str]) -> list[str]:
    """Map genre ids to names in order, silently dropping unknown ids."""
    return [lookup[genre_id] for genre_id in genre_ids if genre_id in lookup]


def build_image_url(
    path: str | None,
    size: str = "w500",
    *,
    base: str = DEFAULT_IMAGE_BASE,
) -> str | None:
    """Return the CDN URL for a poster/profile path, or None without artwork."""
    if size not in IMAGE_SIZES:
        raise ValueError(f"Unsupported TMDb image size: {size!r}")
    if not path:
        return None
    return f"{base.rstrip('/')}/{size}{path}"
