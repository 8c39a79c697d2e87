"""Tests for the application state transitions."""

from __future__ import annotations

from pathlib import Path

import pytest

from exhibits.controller import (
    AppState,
    ChangeSort,
    Controller,
    NextPage,
    PrevPage,
    Search,
    ShowView,
    ToggleDetail,
    View,
    initial_state,
    update,
)
from exhibits.data import load_app_data
from exhibits.filters import FilterCriteria, MatchMode
from exhibits.presenter import SortKey


@pytest.fixture
def controller(many_records) -> Controller:
    return Controller.from_data({"records": many_records, "error": None}, page_size=50)


class TestInitialState:
    """Test initial_state()."""

    def test_facets_and_bounds(self, three_records) -> None:
        state = initial_state({"records": three_records, "error": None})
        assert state.facets == [("関東地方", ["東京都"]), ("近畿地方", ["大阪府"])]
        assert state.year_bounds == (1980, 2000)
        assert state.view is View.HOME
        assert state.results.empty
        assert state.sort_key is SortKey.DATE_ASC

    def test_failed_load_gives_empty_state(self, tmp_path: Path) -> None:
        state = initial_state(load_app_data(tmp_path / "missing.csv"))
        assert state.load_error
        assert state.records.empty
        assert state.facets == []
        assert state.year_bounds is None
        after = update(state, Search(FilterCriteria(keyword="猫")))
        assert after.results.empty
        assert after.total_pages == 0


class TestSearch:
    """Test the Search action."""

    def test_search_resets_page_and_shows_results(self, controller) -> None:
        controller.dispatch(Search(FilterCriteria()))
        controller.dispatch(NextPage())
        controller.dispatch(ToggleDetail(3))
        state = controller.dispatch(Search(FilterCriteria(year_start=1975, year_end=2024)))
        assert state.page == 1
        assert state.expanded == frozenset()
        assert state.view is View.RESULT
        assert len(state.results) == 120

    def test_results_follow_current_sort(self, controller) -> None:
        controller.dispatch(ChangeSort(SortKey.DATE_DESC))
        state = controller.dispatch(Search(FilterCriteria()))
        dates = state.results["start_date"].tolist()
        assert dates == sorted(dates, reverse=True)

    def test_search_stores_criteria(self, controller) -> None:
        criteria = FilterCriteria(keyword="展覧会 001", mode=MatchMode.OR)
        state = controller.dispatch(Search(criteria))
        assert state.criteria == criteria


class TestChangeSort:
    """Test the ChangeSort action."""

    def test_resort_keeps_page(self, controller) -> None:
        controller.dispatch(Search(FilterCriteria()))
        controller.dispatch(NextPage())
        state = controller.dispatch(ChangeSort(SortKey.TITLE_ASC))
        assert state.page == 2
        assert state.sort_key is SortKey.TITLE_ASC
        assert state.results["title"].tolist()[:2] == ["展覧会 000", "展覧会 001"]
        assert controller.page_view.range_start == 51

    def test_resort_does_not_rematch(self, controller) -> None:
        controller.dispatch(Search(FilterCriteria(year_start=2000)))
        before = set(controller.state.results.index)
        controller.dispatch(ChangeSort(SortKey.DATE_DESC))
        assert set(controller.state.results.index) == before

    def test_same_key_is_noop(self, controller) -> None:
        state = controller.dispatch(Search(FilterCriteria()))
        assert update(state, ChangeSort(SortKey.DATE_ASC)) is state


class TestPaging:
    """Test NextPage / PrevPage."""

    def test_bounds_are_noops(self, controller) -> None:
        controller.dispatch(Search(FilterCriteria()))
        assert controller.dispatch(PrevPage()).page == 1
        controller.dispatch(NextPage())
        controller.dispatch(NextPage())
        assert controller.dispatch(NextPage()).page == 3
        assert controller.page_view.range_end == 120
        assert controller.dispatch(PrevPage()).page == 2

    def test_paging_without_results(self, controller) -> None:
        controller.dispatch(Search(FilterCriteria(keyword="存在しない")))
        assert controller.dispatch(NextPage()).page == 1
        assert controller.page_view.is_empty


class TestDetailAndViews:
    """Test ToggleDetail and ShowView."""

    def test_toggle(self, controller) -> None:
        controller.dispatch(ToggleDetail(5))
        assert 5 in controller.state.expanded
        controller.dispatch(ToggleDetail(7))
        controller.dispatch(ToggleDetail(5))
        assert controller.state.expanded == frozenset({7})

    def test_page_change_collapses_rows(self, controller) -> None:
        controller.dispatch(Search(FilterCriteria()))
        controller.dispatch(ToggleDetail(0))
        assert controller.dispatch(NextPage()).expanded == frozenset()

    def test_show_view(self, controller) -> None:
        assert controller.dispatch(ShowView(View.ABOUT)).view is View.ABOUT
        assert controller.dispatch(ShowView(View.HOME)).view is View.HOME

    def test_unknown_action(self) -> None:
        with pytest.raises(TypeError):
            update(AppState(), object())  # type: ignore[arg-type]


class TestAbout:
    """Test the cached about payload."""

    def test_about_is_computed_once(self, controller) -> None:
        first = controller.about
        assert first["total_count"] == 120
        assert controller.about is first
