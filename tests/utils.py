"""Utility helpers for test factories."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from tutorhub.core.security import get_password_hash
from tutorhub.engine.types import Difficulty
from tutorhub.models.tutorial.tutorial_model import Category, Tutorial
from tutorhub.models.user.user_model import User, UserRole

BASE_TIME = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def create_user(db, **kwargs) -> User:
    password = kwargs.pop("password", None)
    defaults = {
        "name": "User",
        "email": "user@example.com",
        "hashed_password": get_password_hash(password) if password else "x",
        "role": UserRole.USER,
        "is_active": True,
        "created_at": datetime.utcnow(),
    }
    defaults.update(kwargs)
    user = User(**defaults)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def create_admin(db, **kwargs) -> User:
    kwargs.setdefault("name", "Admin")
    kwargs.setdefault("email", "admin@example.com")
    return create_user(db, role=UserRole.ADMIN, **kwargs)


def create_category(db, *, name: str = "Web", slug: str | None = None, **kwargs) -> Category:
    category = Category(name=name, slug=slug or name.lower().replace(" ", "-"), **kwargs)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def create_tutorial(
    db,
    *,
    title: str = "Intro",
    slug: str | None = None,
    age_days: int = 0,
    **kwargs,
) -> Tutorial:
    """``age_days`` recule ``created_at`` pour obtenir un ordre déterministe."""
    defaults = {
        "description": kwargs.pop("description", f"About {title}"),
        "content": kwargs.pop("content", "# Contenu"),
        "difficulty": kwargs.pop("difficulty", Difficulty.BEGINNER),
        "duration": kwargs.pop("duration", 10),
        "tags": kwargs.pop("tags", []),
        "created_at": BASE_TIME - timedelta(days=age_days),
    }
    defaults.update(kwargs)
    tutorial = Tutorial(title=title, slug=slug or title.lower().replace(" ", "-"), **defaults)
    db.add(tutorial)
    db.commit()
    db.refresh(tutorial)
    return tutorial
