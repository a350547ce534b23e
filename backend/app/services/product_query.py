"""
Query construction for the product listing: pagination and search.
"""
import math
from dataclasses import dataclass

from sqlalchemy import Select, func, or_, select
from sqlalchemy.sql.elements import ColumnElement

from app.config import Config
from app.models.product import Product
from app.services.validation import parse_positive_int

LIKE_ESCAPE = "\\"

# Keeps OFFSET within a 64-bit integer for any allowed limit
MAX_PAGE = 2**31 - 1


@dataclass(frozen=True)
class Pagination:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total_items: int) -> int:
        return math.ceil(total_items / self.limit)


def parse_pagination(
    page: str | None,
    limit: str | None,
    max_limit: int | None = None,
) -> Pagination:
    """Build pagination from raw query values.

    Missing values fall back to page 1 and the default page size; values
    below 1 are raised to 1 and the limit is capped at max_limit.
    """
    max_limit = max_limit or Config.MAX_PAGE_SIZE
    page_num = min(parse_positive_int(page, 1), MAX_PAGE)
    limit_num = min(parse_positive_int(limit, Config.DEFAULT_PAGE_SIZE), max_limit)
    return Pagination(page=page_num, limit=limit_num)


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def search_filter(search: str) -> ColumnElement[bool]:
    """Case-insensitive substring match on name OR category."""
    pattern = f"%{escape_like(search)}%"
    return or_(
        Product.name.ilike(pattern, escape=LIKE_ESCAPE),
        Product.category.ilike(pattern, escape=LIKE_ESCAPE),
    )


def build_list_queries(pagination: Pagination, search: str | None = None) -> tuple[Select, Select]:
    """Return (page_query, count_query) sharing the same filter.

    Rows come back in insertion (id) order.
    """
    page_query = select(Product).order_by(Product.id)
    count_query = select(func.count()).select_from(Product)

    if search:
        condition = search_filter(search)
        page_query = page_query.where(condition)
        count_query = count_query.where(condition)

    page_query = page_query.limit(pagination.limit).offset(pagination.offset)
    return page_query, count_query
