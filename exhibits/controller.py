from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional, Tuple, Union

import pandas as pd

from exhibits.data import empty_records
from exhibits.facets import PrefectureFacets, build_prefecture_facets, year_bounds
from exhibits.filters import FilterCriteria
from exhibits.metrics_about import compute_about
from exhibits.presenter import DEFAULT_SORT, ITEMS_PER_PAGE, PageView, SortKey, paginate, sort_results, total_pages_for
from exhibits.query import search


logger = logging.getLogger(__name__)


class View(str, Enum):
    HOME = "home"
    RESULT = "result"
    ABOUT = "about"


# ---------------- Actions ----------------
@dataclass(frozen=True)
class Search:
    criteria: FilterCriteria


@dataclass(frozen=True)
class ChangeSort:
    sort_key: SortKey


@dataclass(frozen=True)
class NextPage:
    pass


@dataclass(frozen=True)
class PrevPage:
    pass


@dataclass(frozen=True)
class ToggleDetail:
    record_id: int


@dataclass(frozen=True)
class ShowView:
    view: View


Action = Union[Search, ChangeSort, NextPage, PrevPage, ToggleDetail, ShowView]


# ---------------- State ----------------
@dataclass(frozen=True, eq=False)
class AppState:
    records: pd.DataFrame = field(default_factory=empty_records)
    load_error: Optional[str] = None
    facets: PrefectureFacets = field(default_factory=list)
    year_bounds: Optional[Tuple[int, int]] = None
    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    results: pd.DataFrame = field(default_factory=empty_records)
    sort_key: SortKey = DEFAULT_SORT
    page: int = 1
    page_size: int = ITEMS_PER_PAGE
    expanded: FrozenSet[int] = frozenset()
    view: View = View.HOME

    @property
    def total_pages(self) -> int:
        return total_pages_for(len(self.results), self.page_size)


def initial_state(data_ctx: Dict[str, object], *, page_size: int = ITEMS_PER_PAGE) -> AppState:
    records: pd.DataFrame = data_ctx.get("records", pd.DataFrame())
    if records is None or records.empty:
        records = empty_records()
    return AppState(
        records=records,
        load_error=data_ctx.get("error"),
        facets=build_prefecture_facets(records),
        year_bounds=year_bounds(records),
        page_size=page_size,
    )


def update(state: AppState, action: Action) -> AppState:
    """Apply one action and return the next state."""
    if isinstance(action, Search):
        results = sort_results(search(state.records, action.criteria), state.sort_key)
        return replace(state, criteria=action.criteria, results=results, page=1, expanded=frozenset(), view=View.RESULT)

    if isinstance(action, ChangeSort):
        if action.sort_key is state.sort_key:
            return state
        results = sort_results(state.results, action.sort_key)
        return replace(state, sort_key=action.sort_key, results=results, expanded=frozenset())

    if isinstance(action, NextPage):
        if state.page >= state.total_pages:
            return state
        return replace(state, page=state.page + 1, expanded=frozenset())

    if isinstance(action, PrevPage):
        if state.page <= 1:
            return state
        return replace(state, page=state.page - 1, expanded=frozenset())

    if isinstance(action, ToggleDetail):
        return replace(state, expanded=state.expanded ^ {action.record_id})

    if isinstance(action, ShowView):
        return replace(state, view=action.view)

    raise TypeError(f"Unknown action: {action!r}")


class Controller:
    """Owns the application state; every UI event goes through :meth:`dispatch`."""

    def __init__(self, state: AppState):
        self.state = state
        self._about: Optional[Dict[str, Any]] = None

    @classmethod
    def from_data(cls, data_ctx: Dict[str, object], *, page_size: int = ITEMS_PER_PAGE) -> "Controller":
        return cls(initial_state(data_ctx, page_size=page_size))

    def dispatch(self, action: Action) -> AppState:
        logger.debug("dispatch %r", action)
        self.state = update(self.state, action)
        return self.state

    @property
    def page_view(self) -> PageView:
        return paginate(self.state.results, self.state.page, self.state.page_size)

    @property
    def about(self) -> Dict[str, Any]:
        # Computed once; records never change after load.
        if self._about is None:
            self._about = compute_about(self.state.records)
        return self._about
