from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tutorhub.db.base_class import Base
from tutorhub.engine.types import ProgressStatus

if TYPE_CHECKING:
    from ..tutorial.tutorial_model import Tutorial
    from ..user.user_model import User


class UserTutorial(Base):
    """Ligne de progression d'un utilisateur sur un tutoriel (une seule par couple)."""

    __tablename__ = "user_tutorials"
    __table_args__ = (
        UniqueConstraint("user_id", "tutorial_id", name="uq_user_tutorial"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True)
    tutorial_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("tutorials.id", ondelete="CASCADE"), index=True
    )
    status: Mapped[ProgressStatus] = mapped_column(
        Enum(ProgressStatus, name="tutorial_status", values_callable=lambda obj: [e.value for e in obj]),
        nullable=False,
        default=ProgressStatus.IN_PROGRESS,
    )
    progress: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    user: Mapped["User"] = relationship(back_populates="progress_records")
    tutorial: Mapped["Tutorial"] = relationship()

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return (
            "<UserTutorial(user_id={0}, tutorial_id={1}, status={2}, progress={3})>".format(
                self.user_id,
                self.tutorial_id,
                self.status,
                self.progress,
            )
        )
