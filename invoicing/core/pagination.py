"""Pagination — page/limit arithmetic shared by invoice and client listings.

Invariants:
    - page is 1-based; offset = (page - 1) * limit
    - totalPages is 0 for an empty result set
"""

import math


def page_offset(page: int, limit: int) -> int:
    return (page - 1) * limit


def build_pagination(page: int, limit: int, total: int) -> dict:
    """Pagination block returned alongside list results. Pure, no IO."""
    total_pages = math.ceil(total / limit) if limit else 0
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": total_pages,
        "hasNext": page < total_pages,
        "hasPrev": page > 1,
    }
