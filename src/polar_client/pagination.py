"""
Pagination helpers.

Polar list endpoints return:

    {"items": [...], "pagination": {"total_count": 42, "max_page": 5}}

`Page[T]` parses that envelope; `iterate_pages` walks every page lazily and
yields one PolarResult per item.
"""

from typing import Callable, Generic, Iterable, Iterator, TypeVar

import structlog
from pydantic import BaseModel, ConfigDict, Field

from .result import PolarResult

logger = structlog.get_logger(__name__)

T = TypeVar("T")

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 10


class PaginationInfo(BaseModel):
    """Pagination metadata returned alongside list results."""

    model_config = ConfigDict(extra="ignore")

    total_count: int = 0
    max_page: int = 0


class Page(BaseModel, Generic[T]):
    """A single page of results."""

    model_config = ConfigDict(extra="ignore")

    items: list[T] = Field(default_factory=list)
    pagination: PaginationInfo = Field(default_factory=PaginationInfo)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[T]:  # type: ignore[override]
        return iter(self.items)

    @property
    def total_count(self) -> int:
        return self.pagination.total_count

    @property
    def max_page(self) -> int:
        return self.pagination.max_page

    def has_next(self, page: int) -> bool:
        """Whether a page after `page` exists."""
        return bool(self.items) and page < self.pagination.max_page


def iterate_pages(
    fetch_page: Callable[[int, int], PolarResult[Page[T]]],
    limit: int = MAX_PAGE_SIZE,
    resource: str | None = None,
) -> Iterator[PolarResult[T]]:
    """
    Walk every page of a list endpoint.

    Args:
        fetch_page: Callable taking (page, limit) and returning a page result
        limit: Page size
        resource: Name used in log events

    Yields:
        A success result per item. If a page request fails, a single
        failure result is yielded and iteration stops.
    """
    log = logger.bind(resource=resource) if resource else logger
    page = 1

    while True:
        result = fetch_page(page, limit)

        if result.is_failure:
            log.warning("Stopping page walk on error", page=page, error=str(result.error))
            yield PolarResult.fail(result.error)
            return

        current = result.value
        for item in current.items:
            yield PolarResult.ok(item)

        log.info(
            "Fetched page",
            page=page,
            max_page=current.max_page,
            count=len(current.items),
        )

        if not current.has_next(page):
            return

        page += 1


def iter_values(results: Iterable[PolarResult[T]]) -> Iterator[T]:
    """Unwrap a stream of results, raising the first error encountered."""
    for result in results:
        yield result.unwrap()
