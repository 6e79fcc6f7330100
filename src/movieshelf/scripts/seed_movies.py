"""Seed script to populate a small sample catalogue."""

import asyncio
import logging

from movieshelf.config import settings
from movieshelf.database import AsyncSessionLocal, create_tables, engine
from movieshelf.services.movie_store import MovieStore, SqlMovieStore
from movieshelf.services.mutation import MutationPipeline
from movieshelf.services.results import Err, Ok
from movieshelf.services.retrieval import RetrievalPipeline

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
logger = logging.getLogger(__name__)

SAMPLE_MOVIES = [
    {
        "title": "The Shawshank Redemption",
        "director": "Frank Darabont",
        "releaseYear": 1994,
        "genre": "Drama",
        "rating": 9.3,
    },
    {
        "title": "The Godfather",
        "director": "Francis Ford Coppola",
        "releaseYear": 1972,
        "genre": "Crime",
        "rating": 9.2,
    },
    {
        "title": "Spirited Away",
        "director": "Hayao Miyazaki",
        "releaseYear": 2001,
        "genre": "Animation",
        "rating": 8.6,
    },
    {
        "title": "Pulp Fiction",
        "director": "Quentin Tarantino",
        "releaseYear": 1994,
        "genre": "Crime",
        "rating": 8.9,
    },
    {
        "title": "Metropolis",
        "director": "Fritz Lang",
        "releaseYear": 1927,
        "genre": "Science Fiction",
    },
]


async def title_exists(retrieval: RetrievalPipeline, title: str) -> bool:
    result = await retrieval.search_movies(title, {"limit": settings.max_page_size})
    if not isinstance(result, Ok):
        return False
    return any(movie.title.lower() == title.lower() for movie in result.data)


async def seed_movies(store: MovieStore) -> int:
    """Add the sample movies, skipping titles already present. Returns the number added."""
    retrieval = RetrievalPipeline(store, settings)
    mutation = MutationPipeline(store)

    created = 0
    for movie_data in SAMPLE_MOVIES:
        if await title_exists(retrieval, movie_data["title"]):
            logger.info(f"Movie {movie_data['title']!r} already exists, skipping")
            continue

        result = await mutation.create_movie(movie_data)
        if isinstance(result, Err):
            logger.error(f"Could not add {movie_data['title']!r}: {result.message} {result.errors or ''}")
            continue

        logger.info(f"Added movie: {result.data.title} ({result.data.id})")
        created += 1

    return created


async def main() -> None:
    await create_tables()
    try:
        created = await seed_movies(SqlMovieStore(AsyncSessionLocal))
    finally:
        await engine.dispose()
    logger.info(f"Movie seeding complete: {created} added")


if __name__ == "__main__":
    asyncio.run(main())
