from typing import Callable, Any, List, Dict

from clinref.utils.pagination import page_meta


def normalize_pagination(
    items: List[Any],
    normalize_fn: Callable[[Any], Dict[str, Any]],
    *,
    page: int,
    limit: int,
    total: int,
) -> Dict[str, Any]:
    """
    Normalize offset-paginated API responses.

    Shape: {"data": [...], "pagination": {page, limit, total, pages}}
    """

    return {
        "data": [normalize_fn(item) for item in items],
        "pagination": page_meta(page=page, limit=limit, total=total),
    }
