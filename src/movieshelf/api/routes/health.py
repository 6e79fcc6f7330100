"""Health check endpoint."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from movieshelf.database import get_store
from movieshelf.services.errors import StoreUnavailableError
from movieshelf.services.movie_store import MovieStore

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check(store: MovieStore = Depends(get_store)) -> JSONResponse:
    """
    Health check endpoint.

    Returns:
        Service status plus whether the movie store answered a ping;
        503 when the store is unreachable
    """
    try:
        await store.ping()
    except StoreUnavailableError:
        return JSONResponse(status_code=503, content={"status": "degraded", "database": "unavailable"})
    return JSONResponse(content={"status": "ok", "database": "ok"})
