"""Domain records shared by the progress and discovery engine.

These are plain frozen dataclasses so the engine stays independent from the
persistence layer; the ORM rows are converted at the ``crud`` boundary.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


class Difficulty(str, enum.Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ProgressStatus(str, enum.Enum):
    # ``not_started`` is never stored: it is the absence of a record.
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass(frozen=True, slots=True)
class Category:
    id: str
    name: str
    slug: str
    description: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Tutorial:
    id: str
    title: str
    slug: str
    description: str
    content: str
    category_id: Optional[str]
    difficulty: Difficulty
    duration: Optional[int] = None
    tags: tuple[str, ...] = ()
    video_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.duration is not None and self.duration < 0:
            raise ValueError("duration must be non-negative")
        if len(set(self.tags)) != len(self.tags):
            raise ValueError("duplicate_tag")


@dataclass(frozen=True, slots=True)
class ProgressRecord:
    """One user's relationship to one tutorial."""

    tutorial_id: str
    status: ProgressStatus
    progress: int
    started_at: datetime
    completed_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if not 0 <= self.progress <= 100:
            raise ValueError("progress must be within 0..100")
        if self.status == ProgressStatus.COMPLETED:
            if self.progress != 100 or self.completed_at is None:
                raise ValueError("completed records need progress=100 and completed_at")
        elif self.status == ProgressStatus.IN_PROGRESS:
            if self.completed_at is not None:
                raise ValueError("in-progress records cannot carry completed_at")
        else:
            raise ValueError("not_started records are never materialised")

    @property
    def is_completed(self) -> bool:
        return self.status == ProgressStatus.COMPLETED


@dataclass(frozen=True, slots=True)
class LearningStats:
    completed_count: int = 0
    in_progress_count: int = 0
    total_time_spent: int = 0
    current_streak: int = 0
