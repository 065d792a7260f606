from __future__ import annotations

import pytest
from fastapi import HTTPException

from tutorhub.api.v2.dependencies import get_current_admin
from tutorhub.api.v2.endpoints import admin_router
from tutorhub.models.tutorial.tutorial_model import Category, Tutorial
from tutorhub.schemas.tutorial.tutorial_schema import (
    CategoryCreate,
    CategoryUpdate,
    TutorialCreate,
    TutorialUpdate,
)
from tests.utils import create_admin, create_user


@pytest.fixture()
def admin(db_session):
    return create_admin(db_session)


def test_non_admin_is_rejected(db_session):
    user = create_user(db_session)
    with pytest.raises(HTTPException) as exc:
        get_current_admin(current_user=user)
    assert exc.value.status_code == 403
    assert exc.value.detail == "admin_required"


def test_admin_passes(admin):
    assert get_current_admin(current_user=admin) is admin


def test_tutorial_lifecycle(db_session, admin):
    category = admin_router.create_category(CategoryCreate(name="Backend"), db=db_session, current_admin=admin)

    created = admin_router.create_tutorial(
        TutorialCreate(
            title="FastAPI en 10 minutes",
            description="Une API rapide",
            content="# FastAPI",
            category_id=category.id,
            duration=10,
            tags=["python", "api"],
        ),
        db=db_session,
        current_admin=admin,
    )
    assert created["slug"] == "fastapi-en-10-minutes"
    assert created["category"]["name"] == "Backend"
    assert created["content"] == "# FastAPI"

    updated = admin_router.update_tutorial(
        created["id"],
        TutorialUpdate(category_id=None),
        db=db_session,
        current_admin=admin,
    )
    assert updated["category"] is None

    response = admin_router.delete_tutorial(created["id"], db=db_session, current_admin=admin)
    assert response.status_code == 204
    assert db_session.query(Tutorial).count() == 0


def test_conflicting_slug_maps_to_409(db_session, admin):
    payload = TutorialCreate(title="Redis", description="Cache", content="...")
    admin_router.create_tutorial(payload, db=db_session, current_admin=admin)

    with pytest.raises(HTTPException) as exc:
        admin_router.create_tutorial(payload, db=db_session, current_admin=admin)
    assert exc.value.status_code == 409
    assert exc.value.detail == "slug_taken"


def test_missing_tutorial_maps_to_404(db_session, admin):
    with pytest.raises(HTTPException) as exc:
        admin_router.update_tutorial("nope", TutorialUpdate(title="x"), db=db_session, current_admin=admin)
    assert exc.value.status_code == 404
    assert exc.value.detail == "tutorial_not_found"


def test_category_update_and_delete(db_session, admin):
    category = admin_router.create_category(CategoryCreate(name="Mobile"), db=db_session, current_admin=admin)

    renamed = admin_router.update_category(
        category.id,
        CategoryUpdate(name="Mobile & Desktop", slug="mobile-desktop"),
        db=db_session,
        current_admin=admin,
    )
    assert renamed.slug == "mobile-desktop"

    admin_router.delete_category(category.id, db=db_session, current_admin=admin)
    assert db_session.query(Category).count() == 0

    with pytest.raises(HTTPException) as exc:
        admin_router.delete_category(category.id, db=db_session, current_admin=admin)
    assert exc.value.status_code == 404


def test_admin_stats(db_session, admin):
    admin_router.create_tutorial(
        TutorialCreate(title="One", description="d", content="c"), db=db_session, current_admin=admin
    )
    stats = admin_router.get_admin_stats(db=db_session, current_admin=admin)
    assert stats["total_tutorials"] == 1
    assert stats["total_users"] == 1
    assert stats["completed_tutorials"] == 0
