# Fichier: tutorhub/crud/tutorial_crud.py

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tutorhub.crud.progress_crud import delete_tutorial_progress
from tutorhub.engine import types as domain
from tutorhub.engine.errors import PersistenceError
from tutorhub.models.tutorial.tutorial_model import Category, Tutorial
from tutorhub.utils.datetime_utils import as_utc

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# Conversion ORM -> domaine
# ----------------------------------------------------------------------
def to_domain_category(row: Category) -> domain.Category:
    return domain.Category(
        id=row.id,
        name=row.name,
        slug=row.slug,
        description=row.description,
    )


def to_domain_tutorial(row: Tutorial) -> domain.Tutorial:
    return domain.Tutorial(
        id=row.id,
        title=row.title,
        slug=row.slug,
        description=row.description,
        content=row.content,
        category_id=row.category_id,
        difficulty=domain.Difficulty(row.difficulty),
        duration=row.duration,
        tags=tuple(row.tags or ()),
        video_url=row.video_url,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


# ----------------------------------------------------------------------
# Lecture
# ----------------------------------------------------------------------
def list_tutorials(db: Session) -> list[Tutorial]:
    """Tutoriels du plus récent au plus ancien."""
    return (
        db.query(Tutorial)
        .order_by(Tutorial.created_at.desc(), Tutorial.title.asc())
        .all()
    )


def list_categories(db: Session) -> list[Category]:
    return db.query(Category).order_by(Category.name.asc()).all()


def get_tutorial(db: Session, tutorial_id: str) -> Optional[Tutorial]:
    return db.get(Tutorial, tutorial_id)


def get_category(db: Session, category_id: str) -> Optional[Category]:
    return db.get(Category, category_id)


def tutorial_slug_exists(db: Session, slug: str, *, exclude_id: str | None = None) -> bool:
    query = db.query(Tutorial.id).filter(Tutorial.slug == slug)
    if exclude_id is not None:
        query = query.filter(Tutorial.id != exclude_id)
    return query.first() is not None


def category_slug_exists(db: Session, slug: str, *, exclude_id: str | None = None) -> bool:
    query = db.query(Category.id).filter(Category.slug == slug)
    if exclude_id is not None:
        query = query.filter(Category.id != exclude_id)
    return query.first() is not None


def count_tutorials(db: Session) -> int:
    return db.query(Tutorial).count()


def count_categories(db: Session) -> int:
    return db.query(Category).count()


# ----------------------------------------------------------------------
# Écriture (console d'administration)
# ----------------------------------------------------------------------
def create_tutorial(db: Session, values: Mapping[str, Any]) -> Tutorial:
    tutorial = Tutorial(**values)
    db.add(tutorial)
    db.commit()
    db.refresh(tutorial)
    return tutorial


def update_tutorial(db: Session, tutorial: Tutorial, values: Mapping[str, Any]) -> Tutorial:
    for key, value in values.items():
        setattr(tutorial, key, value)
    db.commit()
    db.refresh(tutorial)
    return tutorial


def delete_tutorial(db: Session, tutorial: Tutorial) -> None:
    removed = delete_tutorial_progress(db, tutorial.id)
    logger.info("Suppression du tutoriel %s (%s lignes de progression)", tutorial.slug, removed)
    db.delete(tutorial)
    db.commit()


def create_category(db: Session, values: Mapping[str, Any]) -> Category:
    category = Category(**values)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def update_category(db: Session, category: Category, values: Mapping[str, Any]) -> Category:
    for key, value in values.items():
        setattr(category, key, value)
    db.commit()
    db.refresh(category)
    return category


def delete_category(db: Session, category: Category) -> None:
    # Les tutoriels rattachés passent "sans catégorie"
    db.query(Tutorial).filter(Tutorial.category_id == category.id).update(
        {Tutorial.category_id: None}, synchronize_session=False
    )
    db.delete(category)
    db.commit()


class SqlCatalogSource:
    """CatalogSource reading the ``tutorials`` and ``categories`` tables."""

    def __init__(self, db: Session):
        self.db = db

    def list_tutorials(self) -> list[domain.Tutorial]:
        try:
            rows = list_tutorials(self.db)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise PersistenceError("list_tutorials", str(exc)) from exc
        return [to_domain_tutorial(row) for row in rows]

    def list_categories(self) -> list[domain.Category]:
        try:
            rows = list_categories(self.db)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise PersistenceError("list_categories", str(exc)) from exc
        return [to_domain_category(row) for row in rows]
