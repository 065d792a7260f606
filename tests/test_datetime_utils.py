from datetime import datetime, timedelta, timezone

from tutorhub.crud import progress_crud, tutorial_crud
from tutorhub.engine.discovery import DiscoveryFilters
from tutorhub.services.catalog_service import CatalogService
from tutorhub.services.progress_service import ProgressService
from tutorhub.utils.datetime_utils import as_utc
from tests.utils import create_tutorial, create_user


def test_as_utc():
    naive = datetime(2024, 1, 1, 12, 0)
    paris = timezone(timedelta(hours=1))
    aware = datetime(2024, 1, 1, 12, 0, tzinfo=paris)

    assert as_utc(naive) == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert as_utc(aware) is aware
    assert as_utc(None) is None


def test_progress_timestamps_read_back_as_utc(db_session):
    user = create_user(db_session)
    tutorial = create_tutorial(db_session, title="Timezones")
    ProgressService(db_session, user).complete_tutorial(tutorial.id)

    rows = progress_crud.get_user_progress_rows(db_session, user.id)
    record = progress_crud.to_record(rows[0])

    assert record.started_at.tzinfo is not None
    assert record.completed_at.utcoffset() == timedelta(0)


def test_catalogue_timestamps_read_back_as_utc(db_session):
    tutorial = create_tutorial(db_session, title="Clock")

    domain = tutorial_crud.to_domain_tutorial(tutorial_crud.get_tutorial(db_session, tutorial.id))
    assert domain.created_at.utcoffset() == timedelta(0)

    item = CatalogService(db_session).search(DiscoveryFilters(), page=1, page_size=6)["items"][0]
    assert item["created_at"].isoformat().endswith("+00:00")
