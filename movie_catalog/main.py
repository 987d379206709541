"""FastAPI entrypoint serving screen payloads to the mobile front-end."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Path, status
from pydantic import BaseModel

from movie_catalog.core.logging_config import configure_logging
from movie_catalog.services.models import CastMember, Genre, Movie
from movie_catalog.services.screens import load_movie_detail_screen, load_movie_list_screen
from movie_catalog.services.tmdb import TMDbClient, TMDbError, TMDbNotFound


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Apply logging settings before serving."""

    configure_logging()
    yield


app = FastAPI(title="Movie Catalog", lifespan=lifespan)


def get_tmdb_client() -> TMDbClient:
    return TMDbClient()


class GenreResponse(BaseModel):
    id: int
    name: str


class MovieResponse(BaseModel):
    id: int
    title: str
    poster_path: str | None = None
    poster_url: str | None = None
    vote_average: float
    release_date: str
    overview: str
    genre_ids: list[int]
    genre_names: list[str]


class CastMemberResponse(BaseModel):
    id: int
    name: str
    character: str
    profile_path: str | None = None
    profile_url: str | None = None


class MovieListResponse(BaseModel):
    popular: list[MovieResponse]
    upcoming: list[MovieResponse]
    genres: list[GenreResponse]


class MovieDetailResponse(BaseModel):
    movie: MovieResponse
    cast: list[CastMemberResponse]


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/movies", response_model=MovieListResponse)
async def movie_list(client: TMDbClient = Depends(get_tmdb_client)) -> MovieListResponse:
    """Popular and upcoming carousels; failing sections come back empty."""

    screen = await load_movie_list_screen(client)
    return MovieListResponse(
        popular=[_movie_to_response(client, m, screen.genre_names(m)) for m in screen.popular],
        upcoming=[_movie_to_response(client, m, screen.genre_names(m)) for m in screen.upcoming],
        genres=[_genre_to_response(g) for g in screen.genres],
    )


@app.get("/movies/{movie_id}", response_model=MovieDetailResponse)
async def movie_detail(
    movie_id: int = Path(..., gt=0),
    client: TMDbClient = Depends(get_tmdb_client),
) -> MovieDetailResponse:
    try:
        screen = await load_movie_detail_screen(client, movie_id)
    except TMDbNotFound as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Movie not found.",
        ) from exc
    except TMDbError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to load movie details.",
        ) from exc

    return MovieDetailResponse(
        movie=_movie_to_response(client, screen.movie, screen.genre_names),
        cast=[_cast_to_response(client, member) for member in screen.credits.cast],
    )


def _movie_to_response(client: TMDbClient, movie: Movie, genre_names: list[str]) -> MovieResponse:
    return MovieResponse(
        id=movie.id,
        title=movie.title,
        poster_path=movie.poster_path,
        poster_url=client.image_url(movie.poster_path),
        vote_average=movie.vote_average,
        release_date=movie.release_date,
        overview=movie.overview,
        genre_ids=list(movie.genre_ids),
        genre_names=genre_names,
    )


def _genre_to_response(genre: Genre) -> GenreResponse:
    return GenreResponse(id=genre.id, name=genre.name)


def _cast_to_response(client: TMDbClient, member: CastMember) -> CastMemberResponse:
    return CastMemberResponse(
        id=member.id,
        name=member.name,
        character=member.character,
        profile_path=member.profile_path,
        profile_url=client.image_url(member.profile_path, "w185"),
    )
