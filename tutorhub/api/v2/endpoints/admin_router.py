"""Console d'administration: CRUD tutoriels / catégories et statistiques globales."""
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from tutorhub.api.v2.dependencies import get_current_admin, get_db
from tutorhub.crud.tutorial_crud import to_domain_category, to_domain_tutorial
from tutorhub.engine.catalog import Catalog
from tutorhub.models.user.user_model import User
from tutorhub.schemas.tutorial.tutorial_schema import (
    CategoryCreate,
    CategoryOut,
    CategoryUpdate,
    TutorialCreate,
    TutorialOut,
    TutorialUpdate,
)
from tutorhub.schemas.user.user_schema import AdminStatsOut
from tutorhub.services.catalog_service import CatalogError, CatalogService

router = APIRouter()


def _tutorial_payload(tutorial) -> dict:
    categories = [to_domain_category(tutorial.category)] if tutorial.category is not None else []
    snapshot = Catalog.build([to_domain_tutorial(tutorial)], categories)
    return CatalogService.serialize_tutorial(snapshot.tutorials[0], snapshot, include_content=True)


@router.get("/stats", response_model=AdminStatsOut)
def get_admin_stats(
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
) -> dict:
    return CatalogService(db).admin_stats()


@router.post("/tutorials", response_model=TutorialOut, status_code=status.HTTP_201_CREATED)
def create_tutorial(
    payload: TutorialCreate,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
) -> dict:
    try:
        tutorial = CatalogService(db).create_tutorial(payload)
    except CatalogError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.code) from exc
    return _tutorial_payload(tutorial)


@router.put("/tutorials/{tutorial_id}", response_model=TutorialOut)
def update_tutorial(
    tutorial_id: str,
    payload: TutorialUpdate,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
) -> dict:
    try:
        tutorial = CatalogService(db).update_tutorial(tutorial_id, payload)
    except CatalogError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.code) from exc
    return _tutorial_payload(tutorial)


@router.delete("/tutorials/{tutorial_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tutorial(
    tutorial_id: str,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
) -> Response:
    try:
        CatalogService(db).delete_tutorial(tutorial_id)
    except CatalogError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.code) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/categories", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    try:
        return CatalogService(db).create_category(payload)
    except CatalogError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.code) from exc


@router.put("/categories/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: str,
    payload: CategoryUpdate,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
):
    try:
        return CatalogService(db).update_category(category_id, payload)
    except CatalogError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.code) from exc


@router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: str,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_admin),
) -> Response:
    try:
        CatalogService(db).delete_category(category_id)
    except CatalogError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.code) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
