"""Endpoints publics du catalogue: recherche, détail, catégories."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from tutorhub.api.v2.dependencies import get_db
from tutorhub.core.config import settings
from tutorhub.engine.discovery import DiscoveryFilters
from tutorhub.schemas.tutorial.tutorial_schema import (
    CategoryOut,
    TutorialOut,
    TutorialPageOut,
    TutorialSummaryOut,
)
from tutorhub.services.catalog_service import CatalogError, CatalogService

router = APIRouter()
categories_router = APIRouter()


@router.get("", response_model=TutorialPageOut, summary="Rechercher et paginer les tutoriels")
def search_tutorials(
    search: str = Query("", max_length=200),
    category: Optional[str] = Query(None, description="Identifiant de catégorie"),
    difficulty: Optional[str] = Query(None, description="beginner | intermediate | advanced"),
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
) -> dict:
    size = min(page_size or settings.TUTORIALS_PAGE_SIZE, settings.TUTORIALS_MAX_PAGE_SIZE)
    filters = DiscoveryFilters(search=search, category_id=category or None, difficulty=difficulty or None)
    service = CatalogService(db)
    try:
        return service.search(filters, page=page, page_size=size)
    except CatalogError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.code) from exc


@router.get("/recent", response_model=List[TutorialSummaryOut], summary="Derniers tutoriels publiés")
def recent_tutorials(db: Session = Depends(get_db)) -> list:
    service = CatalogService(db)
    try:
        return service.recent(settings.RECENT_TUTORIALS_LIMIT)
    except CatalogError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.code) from exc


@router.get("/{slug}", response_model=TutorialOut, summary="Détail d'un tutoriel")
def get_tutorial(slug: str, db: Session = Depends(get_db)) -> dict:
    service = CatalogService(db)
    try:
        return service.get_tutorial_by_slug(slug)
    except CatalogError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.code) from exc


@categories_router.get("", response_model=List[CategoryOut], summary="Lister les catégories")
def list_categories(db: Session = Depends(get_db)) -> list:
    service = CatalogService(db)
    try:
        return service.list_categories()
    except CatalogError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.code) from exc
