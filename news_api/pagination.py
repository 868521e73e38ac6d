"""
Pagination calculator for the listing endpoints.

Pure functions only: raw ``limit`` / ``page`` query values go in, a bounded
limit, an SQL offset and a :class:`~news_api.schemas.Pagination` summary
come out.  Malformed input is never an error here; it silently falls back
to the configured defaults.
"""
import math
import re
import sys

from news_api.config import settings
from news_api.schemas import Pagination

# ASCII digits only: "７" or "٣" are not numbers here.
_LEADING_INT_RE = re.compile(r"\s*([+-]?)0*([0-9]+)")

# Longer digit runs saturate instead of going through int().
_MAX_DIGITS = len(str(sys.maxsize)) - 1

# Largest value a 64-bit OFFSET / LIMIT column accepts.
_MAX_SQL_INT = 2**63 - 1


def _saturate(num: int) -> int:
    return max(-sys.maxsize, min(num, sys.maxsize))


def parse_int(value) -> int | None:
    """
    Read the leading integer out of *value*, or return None.

    Strings are parsed up to the first non-digit (``"2.8"`` -> 2,
    ``"12abc"`` -> 12); floats are truncated toward zero.  Booleans,
    mappings and anything else that is not a number yield None.
    Magnitudes beyond ``sys.maxsize`` saturate to +/- ``sys.maxsize``.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return _saturate(value)
    if isinstance(value, float):
        return _saturate(int(value)) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _LEADING_INT_RE.match(value)
        if not match:
            return None
        sign, digits = match.groups()
        num = sys.maxsize if len(digits) > _MAX_DIGITS else int(digits)
        return -num if sign == "-" else num
    return None


def resolve_limit(
    value=None,
    *,
    default: int | None = None,
    maximum: int | None = None,
) -> int:
    """
    Return the page size for *value*, always within ``[1, maximum]``.

    Zero, negative and unparseable values fall back to *default*; anything
    above *maximum* is clamped.  Both bounds come from settings unless
    given explicitly.
    """
    default = settings.LISTING_DEFAULT_LIMIT if default is None else default
    maximum = settings.LISTING_MAX_LIMIT if maximum is None else maximum

    num = parse_int(value)
    if not num or num < 0:
        num = default
    return min(num, maximum)


def resolve_offset(limit=None, page=None) -> int:
    """
    SQL OFFSET for the 1-based *page* of size *limit*.

    An unparseable, zero or negative page is read as page 1.  A missing
    limit counts as zero.  Pages far beyond any data are capped so that
    ``offset + limit`` still fits a signed 64-bit SQL integer.
    """
    limit = limit or 0
    num = parse_int(page)
    if not num or num < 0:
        num = 1
    return min(limit * (num - 1), _MAX_SQL_INT - limit)


def build_pagination(total_count: int = 0, limit: int = 1, offset: int = 0) -> Pagination:
    """
    Summarise where the page at *offset* sits within *total_count* rows.

    The current page is derived from *offset* and *limit* rather than from
    the requested page number, so an arbitrary offset still yields a
    self-consistent summary.
    """
    # Integer ceiling division stays exact for very large offsets.
    current_page = -(-(offset + limit) // limit)
    total_pages = -(-total_count // limit)
    return Pagination(
        total_count=total_count,
        current_page=current_page,
        total_pages=total_pages,
        next_page=current_page + 1 if current_page < total_pages else None,
        prev_page=None if current_page == 1 else current_page - 1,
    )
