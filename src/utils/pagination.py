"""Offset pagination helpers shared by list endpoints."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One page of results plus the numbers clients need to page further."""

    items: Sequence[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.total > 0 else 0


def page_offset(page: int, limit: int) -> int:
    """Row offset for a 1-based page number."""
    return (max(page, 1) - 1) * limit


async def paginate(
    db: AsyncSession,
    query: Select,
    page: int,
    limit: int,
    order_by: Iterable[Any] = (),
    options: Iterable[Any] = (),
) -> Page:
    """Run ``query`` for one page and count the full result set.

    ``query`` must carry only the filters; ordering and loader options are
    passed separately so they stay out of the COUNT statement.
    """
    count_query = select(func.count()).select_from(query.subquery())
    total = (await db.execute(count_query)).scalar() or 0

    page_query = (
        query.options(*options)
        .order_by(*order_by)
        .offset(page_offset(page, limit))
        .limit(limit)
    )
    result = await db.execute(page_query)
    items = result.scalars().all()

    return Page(items=items, total=total, page=page, limit=limit)
