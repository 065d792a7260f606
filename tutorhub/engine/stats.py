from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Iterable, Optional

from tutorhub.engine.catalog import Catalog
from tutorhub.engine.types import LearningStats, ProgressRecord, ProgressStatus
from tutorhub.utils.datetime_utils import as_utc


def _local_date(value: datetime, tz: tzinfo) -> date:
    return as_utc(value).astimezone(tz).date()


def completion_days(records: Iterable[ProgressRecord], tz: tzinfo = timezone.utc) -> set[date]:
    """Distinct local calendar dates carrying at least one completion."""
    return {
        _local_date(record.completed_at, tz)
        for record in records
        if record.status == ProgressStatus.COMPLETED and record.completed_at is not None
    }


def current_streak(days: set[date], today: date) -> int:
    """Number of active days, provided the user was active today or yesterday.

    This is a recency-gated count of distinct active days, not a strict run of
    consecutive days.
    """
    if today in days or (today - timedelta(days=1)) in days:
        return len(days)
    return 0


def derive_stats(
    catalog: Catalog,
    records: Iterable[ProgressRecord],
    *,
    now: Optional[datetime] = None,
    tz: tzinfo = timezone.utc,
) -> LearningStats:
    """Compute the dashboard statistics of one user.

    Records pointing at tutorials missing from *catalog* still count as
    completed/in progress but add no time.
    """

    records = list(records)
    completed = [r for r in records if r.status == ProgressStatus.COMPLETED]
    in_progress = [r for r in records if r.status == ProgressStatus.IN_PROGRESS]

    completed_ids = {r.tutorial_id for r in completed}
    total_time = sum(
        tutorial.duration or 0
        for tutorial in catalog.tutorials
        if tutorial.id in completed_ids
    )

    now = now or datetime.now(timezone.utc)
    today = _local_date(now, tz)
    streak = current_streak(completion_days(completed, tz), today)

    return LearningStats(
        completed_count=len(completed),
        in_progress_count=len(in_progress),
        total_time_spent=total_time,
        current_streak=streak,
    )
