# Fichier: tutorhub/crud/progress_crud.py
"""Persistance de la progression (table ``user_tutorials``)."""

from __future__ import annotations

import logging
from typing import Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tutorhub.engine.errors import PersistenceError
from tutorhub.engine.types import ProgressRecord, ProgressStatus
from tutorhub.models.progress.user_tutorial_model import UserTutorial
from tutorhub.utils.datetime_utils import as_utc

logger = logging.getLogger(__name__)


def to_record(row: UserTutorial) -> ProgressRecord:
    return ProgressRecord(
        tutorial_id=row.tutorial_id,
        status=ProgressStatus(row.status),
        progress=row.progress or 0,
        started_at=as_utc(row.started_at),
        completed_at=as_utc(row.completed_at),
    )


def get_user_progress_rows(db: Session, user_id: int) -> list[UserTutorial]:
    return (
        db.query(UserTutorial)
        .filter(UserTutorial.user_id == user_id)
        .order_by(UserTutorial.started_at.asc(), UserTutorial.id.asc())
        .all()
    )


def count_completed(db: Session) -> int:
    return (
        db.query(UserTutorial)
        .filter(UserTutorial.status == ProgressStatus.COMPLETED)
        .count()
    )


def delete_tutorial_progress(db: Session, tutorial_id: str) -> int:
    """Supprime les lignes de progression rattachées à un tutoriel (sans commit)."""
    return (
        db.query(UserTutorial)
        .filter(UserTutorial.tutorial_id == tutorial_id)
        .delete(synchronize_session=False)
    )


class SqlProgressStore:
    """ProgressStore backed by the ``user_tutorials`` table.

    SQLAlchemy failures are rolled back and re-raised as PersistenceError.
    """

    def __init__(self, db: Session):
        self.db = db

    def fetch_progress(self, user_id: Union[int, str]) -> list[ProgressRecord]:
        try:
            rows = get_user_progress_rows(self.db, int(user_id))
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Lecture de la progression impossible (user=%s): %s", user_id, exc)
            raise PersistenceError("fetch_progress", str(exc)) from exc
        return [to_record(row) for row in rows]

    def upsert_progress(self, user_id: Union[int, str], record: ProgressRecord) -> None:
        try:
            row = (
                self.db.query(UserTutorial)
                .filter_by(user_id=int(user_id), tutorial_id=record.tutorial_id)
                .first()
            )
            if row is None:
                row = UserTutorial(user_id=int(user_id), tutorial_id=record.tutorial_id)
                self.db.add(row)

            row.status = record.status
            row.progress = record.progress
            row.started_at = record.started_at
            row.completed_at = record.completed_at
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(
                "Écriture de la progression impossible (user=%s, tutorial=%s): %s",
                user_id,
                record.tutorial_id,
                exc,
            )
            raise PersistenceError("upsert_progress", str(exc)) from exc
