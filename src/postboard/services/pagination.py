"""Translate page query parameters into a bounded fetch window."""

from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = ["MAX_WINDOW_VALUE", "PageWindow", "build_page_window", "parse_page_param"]

_LEADING_INT = re.compile(r"^\s*([+-]?)(\d+)")

# Largest OFFSET/LIMIT a 64-bit SQL integer bind accepts.
MAX_WINDOW_VALUE = 2**63 - 1


@dataclass(frozen=True)
class PageWindow:
    """Offset/limit pair applied to the post listing query."""

    skip: int
    limit: int


def parse_page_param(raw: str | int | None) -> int | None:
    """Read the leading integer of a query value.

    Values such as ``"3"`` and ``"3abc"`` yield ``3``; values without a leading
    integer yield ``None``.
    """
    if raw is None:
        return None
    if isinstance(raw, int):
        return raw
    match = _LEADING_INT.match(raw)
    if match is None:
        return None
    sign, digits = match.groups()
    # Anything wider than a 64-bit value is clamped before int() sees it.
    value = MAX_WINDOW_VALUE if len(digits) > 19 else int(digits)
    return -value if sign == "-" else value


def build_page_window(page: str | int | None, page_size: str | int | None) -> PageWindow | None:
    """Return the skip/limit window for ``page`` of size ``page_size``.

    Pages are 1-based. When either value is missing, non-numeric, zero or
    negative, pagination is disabled and ``None`` is returned so the caller
    fetches the whole collection.

    Windows past the end of any real collection are clamped to
    ``MAX_WINDOW_VALUE`` and simply select nothing.
    """
    current_page = parse_page_param(page)
    size = parse_page_param(page_size)
    if not current_page or not size or current_page < 1 or size < 1:
        return None
    skip = min(size * (current_page - 1), MAX_WINDOW_VALUE)
    return PageWindow(skip=skip, limit=min(size, MAX_WINDOW_VALUE))
