"""Pagination arithmetic and the standard paged-result envelope.

Every list-style query returns ``PaginatedResult``: the rows of one page,
the total number of matching rows, and page metadata derived from both.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from shopcore.domain.exceptions import ValidationError

T = TypeVar("T")

MAX_LIMIT = 100


@dataclass(frozen=True)
class PageMeta:
    page: int
    limit: int
    total_pages: int
    previous_page: int | None
    next_page: int | None

    def to_dict(self) -> dict:
        return {
            "page": self.page,
            "limit": self.limit,
            "totalPages": self.total_pages,
            "previousPage": self.previous_page,
            "nextPage": self.next_page,
        }


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    documents: list[T]
    total: int
    meta: PageMeta

    @staticmethod
    def empty(page: int, limit: int) -> PaginatedResult:
        """Degenerate result returned when the store could not be queried."""
        return PaginatedResult(
            documents=[],
            total=0,
            meta=PageMeta(page, limit, total_pages=0, previous_page=None, next_page=None),
        )


@dataclass(frozen=True)
class PageWindow:
    """The storage range covering one page."""

    offset: int
    count: int


def _check_positive(page: int, limit: int) -> None:
    if isinstance(page, bool) or not isinstance(page, int) or page < 1:
        raise ValidationError(f"Page must be an integer >= 1, got {page!r}")
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValidationError(f"Limit must be an integer >= 1, got {limit!r}")


def validate_page_params(page: int, limit: int) -> None:
    """Reject malformed list-screen parameters instead of clamping them.

    Listings also cap the page size at ``MAX_LIMIT``; the arithmetic in
    ``compute_meta`` works for any positive limit.
    """
    _check_positive(page, limit)
    if limit > MAX_LIMIT:
        raise ValidationError(f"Limit cannot exceed {MAX_LIMIT}, got {limit}")


def compute_meta(page: int, limit: int, total: int) -> PageMeta:
    """Derive page metadata from (page, limit, total)."""
    _check_positive(page, limit)
    if total < 0:
        raise ValidationError(f"Total cannot be negative, got {total}")

    total_pages = -(-total // limit)
    return PageMeta(
        page=page,
        limit=limit,
        total_pages=total_pages,
        previous_page=page - 1 if page > 1 else None,
        next_page=page + 1 if page < total_pages else None,
    )


def page_window(page: int, limit: int) -> PageWindow:
    validate_page_params(page, limit)
    return PageWindow(offset=(page - 1) * limit, count=limit)
