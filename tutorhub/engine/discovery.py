"""Search, filter and paginate a tutorial list.

Every step is a pure function of its inputs; the incoming order is kept.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Union

from tutorhub.engine.types import Difficulty, Tutorial

DEFAULT_PAGE_SIZE = 6


@dataclass(frozen=True, slots=True)
class DiscoveryFilters:
    search: str = ""
    category_id: Optional[str] = None
    difficulty: Optional[Union[Difficulty, str]] = None

    @property
    def search_term(self) -> str:
        return (self.search or "").strip().lower()

    @property
    def is_active(self) -> bool:
        return bool(self.search_term or self.category_id or self.difficulty)


@dataclass(frozen=True, slots=True)
class DiscoveryPage:
    items: tuple[Tutorial, ...]
    total_matched: int
    total_pages: int
    page: int
    page_size: int


def matches_search(tutorial: Tutorial, term: str) -> bool:
    """*term* must already be trimmed and lower-cased."""
    if not term:
        return True
    if term in tutorial.title.lower() or term in tutorial.description.lower():
        return True
    return any(term in tag.lower() for tag in tutorial.tags)


def matches_category(tutorial: Tutorial, category_id: Optional[str]) -> bool:
    return not category_id or tutorial.category_id == category_id


def matches_difficulty(tutorial: Tutorial, difficulty: Optional[Union[Difficulty, str]]) -> bool:
    if not difficulty:
        return True
    wanted = difficulty.value if isinstance(difficulty, Difficulty) else str(difficulty)
    return tutorial.difficulty.value == wanted


def filter_tutorials(tutorials: Iterable[Tutorial], filters: DiscoveryFilters) -> list[Tutorial]:
    term = filters.search_term
    return [
        tutorial
        for tutorial in tutorials
        if matches_search(tutorial, term)
        and matches_category(tutorial, filters.category_id)
        and matches_difficulty(tutorial, filters.difficulty)
    ]


def paginate(items: Sequence[Tutorial], page: int, page_size: int = DEFAULT_PAGE_SIZE) -> DiscoveryPage:
    """Slice one 1-based page out of *items*.

    Pages outside ``1..total_pages`` come back empty; nothing is clamped.
    """
    if page_size < 1:
        raise ValueError("page_size must be positive")

    total = len(items)
    total_pages = math.ceil(total / page_size)
    if page < 1:
        window: tuple[Tutorial, ...] = ()
    else:
        start = (page - 1) * page_size
        window = tuple(items[start : start + page_size])

    return DiscoveryPage(
        items=window,
        total_matched=total,
        total_pages=total_pages,
        page=page,
        page_size=page_size,
    )


def discover(
    tutorials: Iterable[Tutorial],
    filters: Optional[DiscoveryFilters] = None,
    *,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> DiscoveryPage:
    filtered = filter_tutorials(tutorials, filters or DiscoveryFilters())
    return paginate(filtered, page, page_size)
