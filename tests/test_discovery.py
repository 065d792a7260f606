import pytest

from tutorhub.engine.discovery import DiscoveryFilters, discover, filter_tutorials, paginate
from tutorhub.engine.types import Difficulty, Tutorial


def _tutorial(idx, *, title=None, description="", category_id=None, difficulty=Difficulty.BEGINNER, tags=()):
    return Tutorial(
        id=f"t{idx}",
        title=title or f"Tutorial {idx}",
        slug=f"tutorial-{idx}",
        description=description,
        content="",
        category_id=category_id,
        difficulty=difficulty,
        tags=tuple(tags),
    )


CATALOG = [
    _tutorial(1, title="Python basics", category_id="prog", tags=("python",)),
    _tutorial(2, title="Advanced SQL", category_id="data", difficulty=Difficulty.ADVANCED),
    _tutorial(3, title="Pandas", description="Dataframes with PYTHON", category_id="data",
              difficulty=Difficulty.INTERMEDIATE),
    _tutorial(4, title="CSS grid", category_id="web", tags=("Frontend", "layout")),
    _tutorial(5, title="FastAPI", category_id="web", difficulty=Difficulty.INTERMEDIATE, tags=("python", "api")),
]


def _ids(items):
    return [t.id for t in items]


def test_no_filters_returns_everything_in_order():
    assert _ids(filter_tutorials(CATALOG, DiscoveryFilters())) == ["t1", "t2", "t3", "t4", "t5"]
    assert not DiscoveryFilters().is_active
    assert not DiscoveryFilters(search="   ").is_active


def test_search_matches_title_description_and_tags_case_insensitively():
    filters = DiscoveryFilters(search="  PyThOn ")
    assert filters.is_active
    assert _ids(filter_tutorials(CATALOG, filters)) == ["t1", "t3", "t5"]


def test_search_matches_tag_substring():
    assert _ids(filter_tutorials(CATALOG, DiscoveryFilters(search="front"))) == ["t4"]


def test_filters_combine_with_and():
    filters = DiscoveryFilters(search="python", category_id="data", difficulty=Difficulty.INTERMEDIATE)
    assert _ids(filter_tutorials(CATALOG, filters)) == ["t3"]

    filters = DiscoveryFilters(category_id="web", difficulty="intermediate")
    assert _ids(filter_tutorials(CATALOG, filters)) == ["t5"]


def test_unknown_difficulty_or_category_matches_nothing():
    assert filter_tutorials(CATALOG, DiscoveryFilters(difficulty="expert")) == []
    assert filter_tutorials(CATALOG, DiscoveryFilters(category_id="nope")) == []


def test_paginate_slices_pages():
    items = [_tutorial(i) for i in range(1, 14)]

    first = paginate(items, 1, 6)
    last = paginate(items, 3, 6)

    assert first.total_matched == 13
    assert first.total_pages == 3
    assert _ids(first.items) == [f"t{i}" for i in range(1, 7)]
    assert _ids(last.items) == ["t13"]


def test_out_of_range_pages_are_empty_not_clamped():
    items = [_tutorial(i) for i in range(1, 4)]
    assert paginate(items, 2, 6).items == ()
    assert paginate(items, 0, 6).items == ()
    assert paginate(items, 2, 6).total_pages == 1


def test_empty_result_has_zero_pages():
    page = discover(CATALOG, DiscoveryFilters(search="cobol"))
    assert page.total_matched == 0
    assert page.total_pages == 0
    assert page.items == ()


def test_invalid_page_size():
    with pytest.raises(ValueError):
        paginate(CATALOG, 1, 0)


def test_discover_defaults_to_six_per_page():
    items = [_tutorial(i) for i in range(1, 10)]
    page = discover(items)
    assert page.page_size == 6
    assert len(page.items) == 6
    assert page.total_pages == 2


def test_seven_matches_over_pages_of_six():
    items = [_tutorial(i, category_id="web") for i in range(1, 8)] + [_tutorial(99, category_id="data")]
    filters = DiscoveryFilters(category_id="web")

    first = discover(items, filters, page=1, page_size=6)
    second = discover(items, filters, page=2, page_size=6)
    third = discover(items, filters, page=3, page_size=6)

    assert len(first.items) == 6
    assert first.total_pages == 2
    assert len(second.items) == 1
    assert third.items == ()
    assert third.total_matched == 7


def test_uppercase_term_matches_tag():
    items = [_tutorial(1, title="Hooks", tags=("React",)), _tutorial(2, title="Vue")]
    assert _ids(filter_tutorials(items, DiscoveryFilters(search="REACT"))) == ["t1"]


def test_category_match_with_other_difficulty_is_excluded():
    filters = DiscoveryFilters(category_id="prog", difficulty=Difficulty.ADVANCED)
    assert filter_tutorials(CATALOG, filters) == []


def test_unfiltered_first_page_is_head_of_catalog():
    page = discover(CATALOG, DiscoveryFilters(), page=1, page_size=3)
    assert list(page.items) == CATALOG[:3]
