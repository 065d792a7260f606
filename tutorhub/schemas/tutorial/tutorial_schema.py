"""Schémas Pydantic du catalogue (tutoriels, catégories, pages de recherche)."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tutorhub.engine.types import Difficulty


def _clean_tags(tags: Optional[List[str]]) -> Optional[List[str]]:
    if tags is None:
        return None
    cleaned: list[str] = []
    for tag in tags:
        value = (tag or "").strip()
        if not value:
            continue
        if value in cleaned:
            raise ValueError("duplicate_tag")
        cleaned.append(value)
    return cleaned


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    # Dérivé du nom quand absent
    slug: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    slug: Optional[str] = Field(default=None, max_length=200)
    description: Optional[str] = None


class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    description: Optional[str] = None


class TutorialCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(default=None, max_length=255)
    description: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    video_url: Optional[str] = Field(default=None, max_length=500)
    category_id: Optional[str] = None
    difficulty: Difficulty = Difficulty.BEGINNER
    duration: Optional[int] = Field(default=None, ge=0)
    tags: List[str] = Field(default_factory=list)

    @field_validator("tags")
    @classmethod
    def _ensure_unique_tags(cls, value: List[str]) -> List[str]:
        return _clean_tags(value) or []


class TutorialUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    slug: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = Field(default=None, min_length=1)
    video_url: Optional[str] = Field(default=None, max_length=500)
    category_id: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    duration: Optional[int] = Field(default=None, ge=0)
    tags: Optional[List[str]] = None

    @field_validator("tags")
    @classmethod
    def _ensure_unique_tags(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        return _clean_tags(value)


class TutorialSummaryOut(BaseModel):
    id: str
    title: str
    slug: str
    description: str
    category: Optional[CategoryOut] = None
    difficulty: Difficulty
    duration: Optional[int] = None
    tags: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None


class TutorialOut(TutorialSummaryOut):
    content: str
    video_url: Optional[str] = None
    updated_at: Optional[datetime] = None


class TutorialPageOut(BaseModel):
    items: List[TutorialSummaryOut] = Field(default_factory=list)
    total_matched: int = 0
    total_pages: int = 0
    page: int = 1
    page_size: int
    filters_active: bool = False
