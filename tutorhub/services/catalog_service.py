from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tutorhub.crud import progress_crud, tutorial_crud, user_crud
from tutorhub.engine import types as domain
from tutorhub.engine.catalog import Catalog
from tutorhub.engine.discovery import DiscoveryFilters, discover
from tutorhub.engine.errors import PersistenceError
from tutorhub.models.tutorial.tutorial_model import Category, Tutorial
from tutorhub.schemas.tutorial.tutorial_schema import (
    CategoryCreate,
    CategoryUpdate,
    TutorialCreate,
    TutorialUpdate,
)
from tutorhub.utils.slug_utils import slugify

logger = logging.getLogger(__name__)


def _drop_nulls(values: dict[str, Any], required: tuple[str, ...]) -> dict[str, Any]:
    """Ignore explicit ``null`` on columns that cannot be emptied."""
    return {k: v for k, v in values.items() if not (k in required and v is None)}


@dataclass(slots=True)
class CatalogError(Exception):
    """Domain-specific exception raised by catalogue reads and admin writes."""

    code: str
    status_code: int = 400

    def __str__(self) -> str:  # pragma: no cover - human readable message
        return self.code


class CatalogService:
    """Catalogue browsing and the admin CRUD for tutorials and categories."""

    def __init__(self, db: Session):
        self.db = db
        self._catalog: Catalog | None = None

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------
    def _invalidate_catalog(self) -> None:
        self._catalog = None

    def load_catalog(self) -> Catalog:
        """Return the catalogue snapshot, fetching it on first use."""
        if self._catalog is None:
            try:
                self._catalog = Catalog.load(tutorial_crud.SqlCatalogSource(self.db))
            except PersistenceError as exc:
                logger.error("Catalogue indisponible: %s", exc)
                raise CatalogError("catalog_unavailable", status_code=503) from exc
        return self._catalog

    # ------------------------------------------------------------------
    # Browsing
    # ------------------------------------------------------------------
    def search(self, filters: DiscoveryFilters, *, page: int, page_size: int) -> dict:
        catalog = self.load_catalog()
        result = discover(catalog.tutorials, filters, page=page, page_size=page_size)
        return {
            "items": [self.serialize_tutorial(t, catalog) for t in result.items],
            "total_matched": result.total_matched,
            "total_pages": result.total_pages,
            "page": result.page,
            "page_size": result.page_size,
            "filters_active": filters.is_active,
        }

    def recent(self, limit: int) -> list[dict]:
        catalog = self.load_catalog()
        return [self.serialize_tutorial(t, catalog) for t in catalog.recent(limit)]

    def get_tutorial_by_slug(self, slug: str) -> dict:
        catalog = self.load_catalog()
        tutorial = catalog.get_by_slug(slug)
        if tutorial is None:
            raise CatalogError("tutorial_not_found", status_code=404)
        return self.serialize_tutorial(tutorial, catalog, include_content=True)

    def list_categories(self) -> list[domain.Category]:
        return list(self.load_catalog().categories)

    @staticmethod
    def serialize_tutorial(
        tutorial: domain.Tutorial,
        catalog: Catalog,
        *,
        include_content: bool = False,
    ) -> dict:
        category = catalog.category(tutorial.category_id)
        payload: dict[str, Any] = {
            "id": tutorial.id,
            "title": tutorial.title,
            "slug": tutorial.slug,
            "description": tutorial.description,
            "category": (
                {
                    "id": category.id,
                    "name": category.name,
                    "slug": category.slug,
                    "description": category.description,
                }
                if category
                else None
            ),
            "difficulty": tutorial.difficulty,
            "duration": tutorial.duration,
            "tags": list(tutorial.tags),
            "created_at": tutorial.created_at,
        }
        if include_content:
            payload["content"] = tutorial.content
            payload["video_url"] = tutorial.video_url
            payload["updated_at"] = tutorial.updated_at
        return payload

    # ------------------------------------------------------------------
    # Admin: tutorials
    # ------------------------------------------------------------------
    def create_tutorial(self, payload: TutorialCreate) -> Tutorial:
        values = payload.model_dump(exclude={"slug"})
        values["title"] = values["title"].strip()
        values["slug"] = self._resolve_slug(
            payload.slug,
            fallback=values["title"],
            exists=tutorial_crud.tutorial_slug_exists,
        )
        self._ensure_category(values.get("category_id"))

        tutorial = self._commit(tutorial_crud.create_tutorial, values)
        logger.info("Tutoriel créé: %s (%s)", tutorial.slug, tutorial.id)
        return tutorial

    def update_tutorial(self, tutorial_id: str, payload: TutorialUpdate) -> Tutorial:
        tutorial = tutorial_crud.get_tutorial(self.db, tutorial_id)
        if tutorial is None:
            raise CatalogError("tutorial_not_found", status_code=404)

        values = _drop_nulls(
            payload.model_dump(exclude_unset=True, exclude={"slug"}),
            ("title", "description", "content", "difficulty", "tags"),
        )
        if "title" in values:
            values["title"] = values["title"].strip()
        if payload.slug is not None:
            values["slug"] = self._resolve_slug(
                payload.slug,
                fallback=values.get("title", tutorial.title),
                exists=tutorial_crud.tutorial_slug_exists,
                exclude_id=tutorial.id,
            )
        if "category_id" in values:
            self._ensure_category(values["category_id"])

        tutorial = self._commit(tutorial_crud.update_tutorial, tutorial, values)
        logger.info("Tutoriel modifié: %s", tutorial.slug)
        return tutorial

    def delete_tutorial(self, tutorial_id: str) -> None:
        tutorial = tutorial_crud.get_tutorial(self.db, tutorial_id)
        if tutorial is None:
            raise CatalogError("tutorial_not_found", status_code=404)
        tutorial_crud.delete_tutorial(self.db, tutorial)
        self._invalidate_catalog()

    # ------------------------------------------------------------------
    # Admin: categories
    # ------------------------------------------------------------------
    def create_category(self, payload: CategoryCreate) -> Category:
        values = payload.model_dump(exclude={"slug"})
        values["name"] = values["name"].strip()
        values["slug"] = self._resolve_slug(
            payload.slug,
            fallback=values["name"],
            exists=tutorial_crud.category_slug_exists,
        )
        category = self._commit(tutorial_crud.create_category, values)
        logger.info("Catégorie créée: %s", category.slug)
        return category

    def update_category(self, category_id: str, payload: CategoryUpdate) -> Category:
        category = tutorial_crud.get_category(self.db, category_id)
        if category is None:
            raise CatalogError("category_not_found", status_code=404)

        values = _drop_nulls(payload.model_dump(exclude_unset=True, exclude={"slug"}), ("name",))
        if "name" in values:
            values["name"] = values["name"].strip()
        if payload.slug is not None:
            values["slug"] = self._resolve_slug(
                payload.slug,
                fallback=values.get("name", category.name),
                exists=tutorial_crud.category_slug_exists,
                exclude_id=category.id,
            )
        return self._commit(tutorial_crud.update_category, category, values)

    def delete_category(self, category_id: str) -> None:
        category = tutorial_crud.get_category(self.db, category_id)
        if category is None:
            raise CatalogError("category_not_found", status_code=404)
        tutorial_crud.delete_category(self.db, category)
        self._invalidate_catalog()

    def admin_stats(self) -> dict:
        return {
            "total_tutorials": tutorial_crud.count_tutorials(self.db),
            "total_categories": tutorial_crud.count_categories(self.db),
            "total_users": user_crud.count_users(self.db),
            "completed_tutorials": progress_crud.count_completed(self.db),
        }

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _resolve_slug(
        self,
        explicit: Optional[str],
        *,
        fallback: str,
        exists: Callable[..., bool],
        exclude_id: str | None = None,
    ) -> str:
        """Derive the stored slug.

        An explicit slug is normalised with the same rule as a derived one, so
        stored slugs are always canonical.
        """
        slug = slugify(explicit if explicit is not None and explicit.strip() else fallback)
        if not slug:
            raise CatalogError("invalid_slug", status_code=422)
        if exists(self.db, slug, exclude_id=exclude_id):
            raise CatalogError("slug_taken", status_code=409)
        return slug

    def _ensure_category(self, category_id: str | None) -> None:
        if category_id is None:
            return
        if tutorial_crud.get_category(self.db, category_id) is None:
            raise CatalogError("category_not_found", status_code=404)

    def _commit(self, operation: Callable[..., Any], *args: Any) -> Any:
        try:
            result = operation(self.db, *args)
        except IntegrityError as exc:
            # Course entre deux admins sur le même slug
            self.db.rollback()
            raise CatalogError("slug_taken", status_code=409) from exc
        self._invalidate_catalog()
        return result
