"""Pagination — 1-indexed page arithmetic for list queries."""

import math

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def page_offset(page: int, page_size: int) -> int:
    return (page - 1) * page_size


def total_pages(total: int, page_size: int) -> int:
    """ceil(total / page_size); zero when there is nothing to show."""
    return math.ceil(total / page_size)
