"""SQLAlchemy ORM models."""

from movieshelf.models.base import Base, TimestampMixin
from movieshelf.models.movie import Movie

__all__ = ["Base", "Movie", "TimestampMixin"]
