"""Unit tests for building movie filters and sort specs from query parameters."""

import pytest

from movieshelf.utils.filters import (
    DEFAULT_SORT,
    MovieFilter,
    SortDirection,
    SortSpec,
    build_filter,
    build_sort,
)


class TestBuildFilter:
    def test_no_params_gives_empty_filter(self) -> None:
        movie_filter = build_filter({})
        assert movie_filter == MovieFilter()
        assert movie_filter.is_empty()

    def test_text_filters_are_trimmed(self) -> None:
        movie_filter = build_filter({"genre": "  Drama ", "director": "Nolan"})
        assert movie_filter.genre == "Drama"
        assert movie_filter.director == "Nolan"

    def test_blank_text_filters_are_ignored(self) -> None:
        assert build_filter({"genre": "   ", "director": ""}).is_empty()

    def test_year_is_parsed_as_integer(self) -> None:
        assert build_filter({"year": "1994"}).release_year == 1994

    def test_rating_bounds_may_appear_alone(self) -> None:
        assert build_filter({"minRating": 8}) == MovieFilter(min_rating=8.0)
        assert build_filter({"maxRating": "5.5"}) == MovieFilter(max_rating=5.5)

    def test_all_conditions_combined(self) -> None:
        movie_filter = build_filter(
            {
                "genre": "Crime",
                "director": "coppola",
                "year": 1972,
                "minRating": 9,
                "maxRating": 10,
            }
        )
        assert movie_filter == MovieFilter(
            genre="Crime",
            director="coppola",
            release_year=1972,
            min_rating=9.0,
            max_rating=10.0,
        )

    def test_parameter_order_does_not_matter(self) -> None:
        forward = {"genre": "Drama", "year": 1994, "minRating": 8}
        backward = dict(reversed(list(forward.items())))
        assert build_filter(forward) == build_filter(backward)

    def test_unrelated_keys_are_ignored(self) -> None:
        assert build_filter({"page": 2, "sortBy": "title", "search": "x"}).is_empty()


class TestBuildSort:
    def test_defaults_to_created_at_descending(self) -> None:
        assert build_sort({}) == DEFAULT_SORT == SortSpec("createdAt", SortDirection.DESC)

    def test_sort_order_defaults_to_descending(self) -> None:
        assert build_sort({"sortBy": "rating"}) == SortSpec("rating", SortDirection.DESC)

    def test_explicit_ascending(self) -> None:
        assert build_sort({"sortBy": "title", "sortOrder": "asc"}) == SortSpec(
            "title", SortDirection.ASC
        )

    def test_sort_order_without_sort_by_keeps_default(self) -> None:
        assert build_sort({"sortOrder": "asc"}) == DEFAULT_SORT

    def test_rejects_unknown_field(self) -> None:
        with pytest.raises(ValueError):
            build_sort({"sortBy": "budget"})
