"""
Offset pagination for SQLAlchemy queries
"""
import math
from typing import Any, List, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Query

from cms_backend.schemas.base import Pagination

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def build_pagination(page: int, limit: int, total: int) -> Pagination:
    """Pagination block with pages = ceil(total / limit)"""
    return Pagination(
        page=page,
        limit=limit,
        total=total,
        pages=math.ceil(total / limit) if limit else 0,
    )


def paginate(
    count_query: Query,
    rows_query: Query,
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT
) -> Tuple[List[Any], Pagination]:
    """
    Fetch one page together with the total number of matches.
    
    The total is a window count selected alongside the rows, so both come
    from the same statement snapshot. count_query only runs when the page
    is empty (past the last page), where there is no row to carry it.
    
    Args:
        count_query: Query whose count() is the total number of matches
        rows_query: Ordered query returning a single entity per row
        page: 1-indexed page number
        limit: Page size
    
    Returns:
        Tuple of (rows on this page, pagination block)
    """
    page = max(page, 1)
    limit = max(min(limit, MAX_LIMIT), 1)
    
    result = (
        rows_query
        .add_columns(func.count().over().label("total"))
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    
    if result:
        rows = [row[0] for row in result]
        total = result[0].total
    else:
        rows = []
        total = count_query.order_by(None).count()
    
    return rows, build_pagination(page, limit, total)
