import logging
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import Callable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sqlalchemy.orm import Session

from tutorhub.core.config import settings
from tutorhub.crud.progress_crud import SqlProgressStore
from tutorhub.engine.errors import MutationResult
from tutorhub.engine.ledger import ProgressLedger
from tutorhub.engine.stats import derive_stats
from tutorhub.engine.types import ProgressRecord, ProgressStatus
from tutorhub.models.user.user_model import User
from tutorhub.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ProgressError(Exception):
    code: str
    status_code: int = 400

    def __str__(self) -> str:  # pragma: no cover - human readable message
        return self.code


def resolve_timezone(name: Optional[str]) -> tzinfo:
    """Fuseau IANA demandé par le client, sinon celui de la configuration."""
    candidate = (name or settings.DEFAULT_TIMEZONE or "UTC").strip()
    if candidate.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(candidate)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ProgressError("invalid_timezone", status_code=400) from exc


class ProgressService:
    """Suivi de progression de l'utilisateur connecté.

    Chaque requête construit son propre ledger à partir de la base; les
    mutations passent par le ledger qui relit la base après écriture.
    """

    def __init__(
        self,
        db: Session,
        user: Optional[User],
        *,
        catalog_service: Optional[CatalogService] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.db = db
        self.user = user
        self.catalog_service = catalog_service or CatalogService(db)
        ledger_kwargs = {"clock": clock} if clock else {}
        self.ledger = ProgressLedger(
            SqlProgressStore(db),
            user.id if user is not None else None,
            **ledger_kwargs,
        )
        self._raise_for(self.ledger.refresh())

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def start_tutorial(self, tutorial_id: str) -> Optional[ProgressRecord]:
        self._ensure_tutorial(tutorial_id)
        self._raise_for(self.ledger.start(tutorial_id))
        return self.ledger.get(tutorial_id)

    def complete_tutorial(self, tutorial_id: str) -> Optional[ProgressRecord]:
        self._ensure_tutorial(tutorial_id)
        self._raise_for(self.ledger.complete(tutorial_id))
        return self.ledger.get(tutorial_id)

    # ------------------------------------------------------------------
    # Lecture
    # ------------------------------------------------------------------
    def get_record(self, tutorial_id: str) -> Optional[ProgressRecord]:
        return self.ledger.get(tutorial_id)

    def list_records(self) -> list[ProgressRecord]:
        return list(self.ledger)

    def get_user_stats(self, tz: Optional[tzinfo] = None, *, now: Optional[datetime] = None) -> dict:
        catalog = self.catalog_service.load_catalog()
        stats = derive_stats(catalog, self.ledger, now=now, tz=tz or resolve_timezone(None))
        return {
            "completed_count": stats.completed_count,
            "in_progress_count": stats.in_progress_count,
            "total_time_spent": stats.total_time_spent,
            "current_streak": stats.current_streak,
        }

    def in_progress_tutorials(self) -> list[dict]:
        """Tutoriels en cours, du plus récemment commencé au plus ancien."""
        catalog = self.catalog_service.load_catalog()
        entries = []
        records = sorted(
            (r for r in self.ledger if r.status == ProgressStatus.IN_PROGRESS),
            key=lambda r: r.started_at,
            reverse=True,
        )
        for record in records:
            tutorial = catalog.get(record.tutorial_id)
            if tutorial is None:
                continue
            entries.append(
                {
                    "tutorial": CatalogService.serialize_tutorial(tutorial, catalog),
                    "progress": record.progress,
                    "started_at": record.started_at,
                }
            )
        return entries

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _ensure_tutorial(self, tutorial_id: str) -> None:
        if self.catalog_service.load_catalog().get(tutorial_id) is None:
            raise ProgressError("unknown_tutorial", status_code=404)

    def _raise_for(self, result: MutationResult) -> None:
        if result.ok:
            return
        logger.warning("Progression indisponible pour user=%s: %s", getattr(self.user, "id", None), result.error)
        raise ProgressError("progress_unavailable", status_code=503)
