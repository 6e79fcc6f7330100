"""Movie API endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request
from fastapi.responses import JSONResponse

from movieshelf.api.responses import render
from movieshelf.config import Settings, get_settings
from movieshelf.database import get_store
from movieshelf.services.movie_store import MovieStore
from movieshelf.services.mutation import MutationPipeline
from movieshelf.services.retrieval import RetrievalPipeline

router = APIRouter()


def get_retrieval(
    store: MovieStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> RetrievalPipeline:
    return RetrievalPipeline(store, settings)


def get_mutation(store: MovieStore = Depends(get_store)) -> MutationPipeline:
    return MutationPipeline(store)


@router.get("/movies")
async def list_movies(
    request: Request,
    retrieval: RetrievalPipeline = Depends(get_retrieval),
) -> JSONResponse:
    """
    List movies with pagination, filtering and sorting.

    Query parameters: page, limit, sortBy, sortOrder, genre, director,
    year, minRating, maxRating.
    """
    result = await retrieval.list_movies(dict(request.query_params))
    return render(result)


@router.get("/movies/search")
async def search_movies(
    request: Request,
    search: str | None = Query(None, description="Title search string"),
    retrieval: RetrievalPipeline = Depends(get_retrieval),
) -> JSONResponse:
    """Search movies by title (case-insensitive substring), paginated."""
    result = await retrieval.search_movies(search, dict(request.query_params))
    return render(result)


@router.get("/movies/stats")
async def get_movie_stats(
    retrieval: RetrievalPipeline = Depends(get_retrieval),
) -> JSONResponse:
    """Aggregate statistics over the whole catalogue."""
    return render(await retrieval.get_statistics())


@router.get("/movies/genre/{genre}")
async def get_movies_by_genre(
    genre: str,
    retrieval: RetrievalPipeline = Depends(get_retrieval),
) -> JSONResponse:
    """All movies matching a genre, unpaginated."""
    return render(await retrieval.get_movies_by_genre(genre))


@router.get("/movies/{movie_id}")
async def get_movie(
    movie_id: str,
    retrieval: RetrievalPipeline = Depends(get_retrieval),
) -> JSONResponse:
    return render(await retrieval.get_movie(movie_id))


@router.post("/movies")
async def create_movie(
    payload: Any = Body(None),
    mutation: MutationPipeline = Depends(get_mutation),
) -> JSONResponse:
    result = await mutation.create_movie(payload if payload is not None else {})
    return render(result, success_status=201)


@router.put("/movies/{movie_id}")
async def update_movie(
    movie_id: str,
    payload: Any = Body(None),
    mutation: MutationPipeline = Depends(get_mutation),
) -> JSONResponse:
    """Partially update a movie; fields not in the body are left untouched."""
    return render(await mutation.update_movie(movie_id, payload))


@router.delete("/movies/{movie_id}")
async def delete_movie(
    movie_id: str,
    mutation: MutationPipeline = Depends(get_mutation),
) -> JSONResponse:
    return render(await mutation.delete_movie(movie_id))
