"""Per-screen fan-out/join loaders.

Each screen issues its independent fetches concurrently and waits for all of
them before it renders. Nothing is cached between loads.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from movie_catalog.services.models import Genre, Movie, MovieCredits, genre_lookup, resolve_genre_names
from movie_catalog.services.tmdb import TMDbClient


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MovieListScreen:
    """Data behind the home screen: popular and upcoming carousels."""

    popular: list[Movie] = field(default_factory=list)
    upcoming: list[Movie] = field(default_factory=list)
    genres: list[Genre] = field(default_factory=list)
    genre_labels: dict[int, str] = field(default_factory=dict)

    def genre_names(self, movie: Movie) -> list[str]:
        return resolve_genre_names(movie.genre_ids, self.genre_labels)


@dataclass(frozen=True, slots=True)
class MovieDetailScreen:
    movie: Movie
    credits: MovieCredits
    genre_names: list[str] = field(default_factory=list)


async def load_movie_list_screen(client: TMDbClient) -> MovieListScreen:
    """Fetch popular, upcoming and genres together.

    List calls degrade to empty lists, so one failing section leaves the
    others intact.
    """

    popular, upcoming, genres = await asyncio.gather(
        client.list_popular_movies(),
        client.list_upcoming_movies(),
        client.list_genres(),
    )
    logger.info(
        "Loaded movie list screen: %d popular, %d upcoming, %d genres",
        len(popular),
        len(upcoming),
        len(genres),
    )
    return MovieListScreen(
        popular=popular,
        upcoming=upcoming,
        genres=genres,
        genre_labels=genre_lookup(genres),
    )


async def load_movie_detail_screen(client: TMDbClient, movie_id: int) -> MovieDetailScreen:
    """Fetch details, credits and genres together.

    A details or credits failure reaches the caller; genre labels just go
    missing when the genre list cannot be loaded.
    """

    movie, credits, genres = await asyncio.gather(
        client.get_movie_details(movie_id),
        client.get_movie_credits(movie_id),
        client.list_genres(),
    )
    return MovieDetailScreen(
        movie=movie,
        credits=credits,
        genre_names=resolve_genre_names(movie.genre_ids, genre_lookup(genres)),
    )
