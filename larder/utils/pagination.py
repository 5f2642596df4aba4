"""Page arithmetic for list endpoints."""

import math

from larder.schemas.page import Pagination


def paginate(total_items: int, page: int, size: int) -> Pagination:
    """
    Build the pagination block for page (1-based) of the given size.

    total_pages = ceil(total_items / size); next_page is set while page < total_pages
    and prev_page while page > 1.
    """
    total_pages = math.ceil(total_items / size)
    return Pagination(
        total_items=total_items,
        total_pages=total_pages,
        current_page=page,
        next_page=page + 1 if page < total_pages else None,
        prev_page=page - 1 if page > 1 else None,
        size=size,
    )


def page_offset(page: int, size: int) -> int:
    return (page - 1) * size
