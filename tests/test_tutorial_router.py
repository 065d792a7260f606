from __future__ import annotations

import pytest
from fastapi import HTTPException

from tutorhub.api.v2.endpoints.tutorial_router import (
    get_tutorial,
    list_categories,
    recent_tutorials,
    search_tutorials,
)
from tutorhub.engine.types import Difficulty
from tests.utils import create_category, create_tutorial


def _search(db, **kwargs):
    params = {"search": "", "category": None, "difficulty": None, "page": 1, "page_size": None}
    params.update(kwargs)
    return search_tutorials(db=db, **params)


def test_search_uses_default_page_size(db_session):
    for idx in range(8):
        create_tutorial(db_session, title=f"Tuto {idx}", age_days=idx)

    result = _search(db_session)

    assert result["page_size"] == 6
    assert len(result["items"]) == 6
    assert result["total_pages"] == 2

    second = _search(db_session, page=2)
    assert [item["title"] for item in second["items"]] == ["Tuto 6", "Tuto 7"]


def test_search_caps_page_size(db_session):
    create_tutorial(db_session, title="Only")
    assert _search(db_session, page_size=500)["page_size"] == 48


def test_search_filters_by_category_and_difficulty(db_session):
    web = create_category(db_session, name="Web")
    data = create_category(db_session, name="Data")
    create_tutorial(db_session, title="HTML", category_id=web.id)
    create_tutorial(db_session, title="React", category_id=web.id, difficulty=Difficulty.ADVANCED)
    create_tutorial(db_session, title="SQL", category_id=data.id, difficulty=Difficulty.ADVANCED)

    result = _search(db_session, category=web.id, difficulty="advanced")

    assert [item["title"] for item in result["items"]] == ["React"]
    assert result["filters_active"] is True


def test_recent_returns_three_newest(db_session):
    for idx in range(5):
        create_tutorial(db_session, title=f"R{idx}", age_days=idx)

    assert [t["title"] for t in recent_tutorials(db=db_session)] == ["R0", "R1", "R2"]


def test_get_tutorial_by_slug(db_session):
    create_tutorial(db_session, title="Docker", video_url="https://videos.example.com/docker")

    detail = get_tutorial("docker", db=db_session)
    assert detail["video_url"] == "https://videos.example.com/docker"

    with pytest.raises(HTTPException) as exc:
        get_tutorial("kubernetes", db=db_session)
    assert exc.value.status_code == 404
    assert exc.value.detail == "tutorial_not_found"


def test_list_categories_sorted_by_name(db_session):
    create_category(db_session, name="Web")
    create_category(db_session, name="Data")

    assert [c.name for c in list_categories(db=db_session)] == ["Data", "Web"]
