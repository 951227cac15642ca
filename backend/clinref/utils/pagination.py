from __future__ import annotations

from typing import Any, List, Tuple, TypedDict

from sqlalchemy.orm import Query

from clinref.domain.exceptions import ValidationError


class PageMeta(TypedDict):
    """
    Offset pagination metadata.

    Explicit keys prevent contract drift across list_* endpoints.
    """
    page: int
    limit: int
    total: int
    pages: int


def page_count(total: int, limit: int) -> int:
    return (total + limit - 1) // limit


def paginate_offset(
    query: Query,
    *,
    page: int,
    limit: int,
) -> Tuple[List[Any], int]:
    """
    Execute an offset-paginated query.

    The caller owns the ordering; it must be total or pages may overlap.

    Returns:
    - items: rows on the requested (1-indexed) page
    - total: row count across all pages
    """
    if page < 1:
        raise ValidationError("Page must be greater than zero")

    if limit < 1:
        raise ValidationError("Limit must be greater than zero")

    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()

    return items, total


def page_meta(*, page: int, limit: int, total: int) -> PageMeta:
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "pages": page_count(total, limit),
    }
