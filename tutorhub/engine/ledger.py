"""Per-user progress ledger.

The ledger never mutates its in-memory view directly: every write goes to the
persistence collaborator first and the view is then re-read from it.  A failed
write or re-read leaves the previous view in place.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Iterator, Mapping, Optional, Protocol, Union

from tutorhub.engine.errors import MutationResult, PersistenceError
from tutorhub.engine.types import ProgressRecord, ProgressStatus

logger = logging.getLogger(__name__)

UserId = Union[int, str]


class ProgressStore(Protocol):
    def fetch_progress(self, user_id: UserId) -> list[ProgressRecord]: ...

    def upsert_progress(self, user_id: UserId, record: ProgressRecord) -> None: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProgressLedger:
    """ProgressRecords of one user, keyed by tutorial id."""

    def __init__(
        self,
        store: ProgressStore,
        user_id: Optional[UserId],
        *,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.store = store
        self.user_id = user_id
        self._clock = clock
        self._records: dict[str, ProgressRecord] = {}

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------
    @property
    def has_identity(self) -> bool:
        return self.user_id is not None

    @property
    def records(self) -> Mapping[str, ProgressRecord]:
        return dict(self._records)

    def get(self, tutorial_id: str) -> Optional[ProgressRecord]:
        return self._records.get(tutorial_id)

    def status_of(self, tutorial_id: str) -> ProgressStatus:
        record = self._records.get(tutorial_id)
        return record.status if record else ProgressStatus.NOT_STARTED

    def __iter__(self) -> Iterator[ProgressRecord]:
        return iter(list(self._records.values()))

    def __len__(self) -> int:
        return len(self._records)

    def refresh(self) -> MutationResult:
        """Re-read the ledger from the store."""
        if not self.has_identity:
            self._records = {}
            return MutationResult.no_identity()

        try:
            fetched = self.store.fetch_progress(self.user_id)
        except PersistenceError as exc:
            logger.warning("Rafraîchissement de la progression échoué (user=%s): %s", self.user_id, exc)
            return MutationResult.failure(exc)

        self._records = {record.tutorial_id: record for record in fetched}
        return MutationResult.success()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def start(self, tutorial_id: str) -> MutationResult:
        """Materialise an ``in_progress`` record unless one already exists."""
        if not self.has_identity:
            return MutationResult.no_identity()

        if tutorial_id in self._records:
            return MutationResult.success()

        record = ProgressRecord(
            tutorial_id=tutorial_id,
            status=ProgressStatus.IN_PROGRESS,
            progress=0,
            started_at=self._clock(),
        )
        return self._persist(record)

    def complete(self, tutorial_id: str) -> MutationResult:
        """Mark *tutorial_id* as completed.

        ``started_at`` is kept when a record exists; ``completed_at`` always
        takes the time of the latest call.
        """
        if not self.has_identity:
            return MutationResult.no_identity()

        now = self._clock()
        existing = self._records.get(tutorial_id)
        record = ProgressRecord(
            tutorial_id=tutorial_id,
            status=ProgressStatus.COMPLETED,
            progress=100,
            started_at=existing.started_at if existing else now,
            completed_at=now,
        )
        return self._persist(record)

    def _persist(self, record: ProgressRecord) -> MutationResult:
        try:
            self.store.upsert_progress(self.user_id, record)
        except PersistenceError as exc:
            logger.warning(
                "Écriture de la progression échouée (user=%s, tutorial=%s): %s",
                self.user_id,
                record.tutorial_id,
                exc,
            )
            return MutationResult.failure(exc)

        logger.info(
            "Progression enregistrée: user=%s tutorial=%s status=%s",
            self.user_id,
            record.tutorial_id,
            record.status.value,
        )
        return self.refresh()
