"""Database connection and session management."""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from movieshelf.config import settings
from movieshelf.models import Base
from movieshelf.services.movie_store import SqlMovieStore

# Create async engine
engine = create_async_engine(
    settings.database_url,
    echo=settings.sql_echo,
    future=True,
)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def create_tables(bind: AsyncEngine = engine) -> None:
    """Create any missing tables for the ORM models."""
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def get_store() -> SqlMovieStore:
    """
    Dependency for FastAPI to provide the movie store.

    Usage:
        @app.get("/endpoint")
        async def endpoint(store: MovieStore = Depends(get_store)):
            # Use store here
    """
    return SqlMovieStore(AsyncSessionLocal)
