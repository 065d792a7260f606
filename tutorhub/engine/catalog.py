from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Protocol

from tutorhub.engine.errors import PersistenceError
from tutorhub.engine.types import Category, Tutorial

logger = logging.getLogger(__name__)


class CatalogSource(Protocol):
    """Read-only feed returning the authoritative catalogue snapshot."""

    def list_tutorials(self) -> list[Tutorial]: ...

    def list_categories(self) -> list[Category]: ...


@dataclass(frozen=True)
class Catalog:
    """Immutable snapshot of tutorials and categories.

    Tutorials keep the order of the source (newest first); nothing in the
    engine re-sorts them.
    """

    tutorials: tuple[Tutorial, ...] = ()
    categories: tuple[Category, ...] = ()
    _by_id: dict[str, Tutorial] = field(init=False, repr=False, compare=False)
    _by_slug: dict[str, Tutorial] = field(init=False, repr=False, compare=False)
    _categories_by_id: dict[str, Category] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        by_slug: dict[str, Tutorial] = {}
        for tutorial in self.tutorials:
            if tutorial.slug in by_slug:
                raise ValueError(f"duplicate tutorial slug: {tutorial.slug}")
            by_slug[tutorial.slug] = tutorial

        category_slugs: set[str] = set()
        for category in self.categories:
            if category.slug in category_slugs:
                raise ValueError(f"duplicate category slug: {category.slug}")
            category_slugs.add(category.slug)

        object.__setattr__(self, "_by_slug", by_slug)
        object.__setattr__(self, "_by_id", {t.id: t for t in self.tutorials})
        object.__setattr__(self, "_categories_by_id", {c.id: c for c in self.categories})

    @classmethod
    def build(cls, tutorials: Iterable[Tutorial], categories: Iterable[Category] = ()) -> "Catalog":
        return cls(tutorials=tuple(tutorials), categories=tuple(categories))

    @classmethod
    def load(cls, source: CatalogSource) -> "Catalog":
        """Fetch a fresh snapshot from *source*.

        Raises :class:`PersistenceError` when the source fails; any snapshot the
        caller already holds stays valid.
        """

        try:
            tutorials = source.list_tutorials()
            categories = source.list_categories()
        except PersistenceError:
            raise
        except Exception as exc:
            logger.error("Chargement du catalogue impossible: %s", exc)
            raise PersistenceError("list_catalog", str(exc)) from exc

        return cls.build(tutorials, categories)

    def __len__(self) -> int:
        return len(self.tutorials)

    def get(self, tutorial_id: str) -> Optional[Tutorial]:
        return self._by_id.get(tutorial_id)

    def get_by_slug(self, slug: str) -> Optional[Tutorial]:
        return self._by_slug.get(slug)

    def category(self, category_id: str | None) -> Optional[Category]:
        if category_id is None:
            return None
        return self._categories_by_id.get(category_id)

    def recent(self, limit: int) -> tuple[Tutorial, ...]:
        return self.tutorials[: max(limit, 0)]
