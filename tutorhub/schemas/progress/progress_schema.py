"""Schémas Pydantic pour les endpoints de progression."""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from tutorhub.engine.types import ProgressStatus
from tutorhub.schemas.tutorial.tutorial_schema import TutorialSummaryOut


class ProgressRecordOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    tutorial_id: str
    status: ProgressStatus
    progress: int
    started_at: datetime
    completed_at: Optional[datetime] = None


class ProgressLedgerOut(BaseModel):
    records: List[ProgressRecordOut] = Field(default_factory=list)


class InProgressTutorialOut(BaseModel):
    tutorial: TutorialSummaryOut
    progress: int
    started_at: datetime


class UserStatsResponse(BaseModel):
    completed_count: int = 0
    in_progress_count: int = 0
    # minutes
    total_time_spent: int = 0
    current_streak: int = 0
