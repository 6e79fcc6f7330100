"""Movie model for storing catalogue records."""

from sqlalchemy import CheckConstraint, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from movieshelf.models.base import Base, TimestampMixin
from movieshelf.utils.ids import generate_object_id


class Movie(Base, TimestampMixin):
    """
    Movie model.

    Identifiers are 24-character hex strings assigned on insert.
    Range checks on rating and release year are enforced by the database
    as well as by the request validators.
    """

    __tablename__ = "movies"
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 10", name="ck_movies_rating_range"),
        CheckConstraint(
            "release_year >= 1800 AND release_year <= 2100",
            name="ck_movies_release_year_range",
        ),
    )

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=generate_object_id)
    title: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    director: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    release_year: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    genre: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)
    rating: Mapped[float | None] = mapped_column(Float, nullable=True, index=True)

    @property
    def formatted_rating(self) -> str:
        return f"{self.rating:.1f}" if self.rating is not None else "Not Rated"

    def summary(self) -> str:
        """One-line human readable description of the movie."""
        return (
            f"{self.title} ({self.release_year or 'Unknown'}) - "
            f"Directed by {self.director or 'Unknown'} - "
            f"Rating: {self.formatted_rating}"
        )

    def __repr__(self) -> str:
        return f"<Movie(id={self.id!r}, title={self.title!r}, release_year={self.release_year})>"
