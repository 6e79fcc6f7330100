"""Offset pagination arithmetic."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class PageRequest:
    """A validated page/limit pair."""

    page: int
    limit: int

    @property
    def skip(self) -> int:
        """Number of rows to skip before the requested page (0 for page 1)."""
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class Pagination:
    """Pagination block echoed back in list responses."""

    page: int
    limit: int
    total: int
    pages: int


def count_pages(total: int, limit: int) -> int:
    """
    Number of pages needed to show `total` rows, `limit` at a time.

    Returns 0 when there are no rows.
    """
    if total <= 0:
        return 0
    return math.ceil(total / limit)


def paginate(request: PageRequest, total: int) -> Pagination:
    """
    Build the pagination block for a page request and a row count.

    The requested page is echoed verbatim even when it lies past the
    last page; such a page simply has no rows.
    """
    return Pagination(
        page=request.page,
        limit=request.limit,
        total=total,
        pages=count_pages(total, request.limit),
    )
