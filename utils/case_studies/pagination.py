import math
from typing import List, Sequence, Tuple, TypeVar

PAGE_SIZE = 6

T = TypeVar("T")


def total_pages_for(count: int, page_size: int = PAGE_SIZE) -> int:
    """Number of pages for count items; never less than 1."""
    return max(1, math.ceil(count / page_size))


def clamp_page(page: int, total_pages: int) -> int:
    return min(max(1, page), max(1, total_pages))


def paginate(
    records: Sequence[T],
    page: int,
    page_size: int = PAGE_SIZE,
) -> Tuple[List[T], int]:
    """
    Slices records into the items for one page.

    Args:
        records: Filtered and sorted records
        page: 1-based page number; clamped to the available pages
        page_size: Maximum number of items per page

    Returns:
        Tuple of (items on the page, total number of pages)
    """
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    total_pages = total_pages_for(len(records), page_size)
    page = clamp_page(page, total_pages)
    start = (page - 1) * page_size
    return list(records[start:start + page_size]), total_pages


def next_page(page: int, total_pages: int) -> int:
    return clamp_page(page + 1, total_pages)


def prev_page(page: int, total_pages: int) -> int:
    return clamp_page(page - 1, total_pages)
