"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from movieshelf.api.responses import error_body
from movieshelf.api.routes import health, movies
from movieshelf.config import settings
from movieshelf.database import create_tables, engine
from movieshelf.services.errors import StoreUnavailableError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    # Startup: make sure the movies table exists
    await create_tables()
    logger.info("Database tables ready")

    yield

    # Shutdown: release pooled connections
    await engine.dispose()
    logger.info("Database engine disposed")


async def store_unavailable_handler(request: Request, exc: StoreUnavailableError) -> JSONResponse:
    logger.error(f"Store unavailable during {request.method} {request.url.path}: {exc.__cause__}")
    return JSONResponse(status_code=503, content=error_body(exc.message))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if any(err["type"] == "json_invalid" for err in errors):
        return JSONResponse(status_code=400, content=error_body("Invalid JSON format"))
    messages = [f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in errors]
    return JSONResponse(status_code=400, content=error_body("Validation failed", messages))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error during {request.method} {request.url.path}: {exc}", exc_info=exc)
    extra = {"error": str(exc)} if settings.expose_error_details else {}
    return JSONResponse(status_code=500, content=error_body("Internal server error", **extra))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StoreUnavailableError, store_unavailable_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


# Create FastAPI app
app = FastAPI(
    title="Movieshelf API",
    description="Record management service for a movie catalogue",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(health.router)
app.include_router(movies.router, prefix="/api/v1", tags=["movies"])


@app.get("/")
async def root() -> dict[str, str]:
    """Service banner."""
    return {
        "message": "Movieshelf API",
        "docs": "/docs",
        "health": "/health",
    }


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    uvicorn.run(
        "movieshelf.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
