"""Endpoints de progression de l'utilisateur connecté."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from tutorhub.api.v2.dependencies import get_current_user, get_db
from tutorhub.models.user.user_model import User
from tutorhub.schemas.progress.progress_schema import (
    InProgressTutorialOut,
    ProgressLedgerOut,
    ProgressRecordOut,
    UserStatsResponse,
)
from tutorhub.services.catalog_service import CatalogError
from tutorhub.services.progress_service import ProgressError, ProgressService, resolve_timezone

router = APIRouter()


def _build_service(db: Session, current_user: User) -> ProgressService:
    try:
        return ProgressService(db=db, user=current_user)
    except ProgressError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.code) from exc


@router.get("", response_model=ProgressLedgerOut, summary="Progression de l'utilisateur")
def get_ledger(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> dict:
    service = _build_service(db, current_user)
    return {"records": service.list_records()}


@router.get("/stats", response_model=UserStatsResponse, summary="Statistiques du tableau de bord")
def get_user_stats(
    tz: Optional[str] = Query(None, description="Fuseau IANA, ex. Europe/Paris"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> dict:
    """Tutoriels terminés / en cours, temps passé (minutes) et streak."""
    service = _build_service(db, current_user)
    try:
        return service.get_user_stats(resolve_timezone(tz))
    except (ProgressError, CatalogError) as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.code) from exc


@router.get("/in-progress", response_model=List[InProgressTutorialOut], summary="Tutoriels en cours")
def get_in_progress(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list:
    service = _build_service(db, current_user)
    try:
        return service.in_progress_tutorials()
    except CatalogError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.code) from exc


@router.get("/{tutorial_id}", response_model=ProgressRecordOut, summary="Progression sur un tutoriel")
def get_tutorial_progress(
    tutorial_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    service = _build_service(db, current_user)
    record = service.get_record(tutorial_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="progress_not_found")
    return record


@router.post("/{tutorial_id}/start", response_model=ProgressRecordOut, summary="Commencer un tutoriel")
def start_tutorial(
    tutorial_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    service = _build_service(db, current_user)
    try:
        return service.start_tutorial(tutorial_id)
    except (ProgressError, CatalogError) as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.code) from exc


@router.post("/{tutorial_id}/complete", response_model=ProgressRecordOut, summary="Marquer comme terminé")
def complete_tutorial(
    tutorial_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    service = _build_service(db, current_user)
    try:
        return service.complete_tutorial(tutorial_id)
    except (ProgressError, CatalogError) as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.code) from exc
