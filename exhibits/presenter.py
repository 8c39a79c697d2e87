from __future__ import annotations

import math
import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import List

import pandas as pd

from exhibits.records import Record, iter_records


ITEMS_PER_PAGE = 50
MISSING_DATE_SENTINEL = "9999-12-31"


class SortKey(str, Enum):
    DATE_ASC = "date-asc"
    DATE_DESC = "date-desc"
    TITLE_ASC = "title-asc"


DEFAULT_SORT = SortKey.DATE_ASC

SORT_LABELS = {
    SortKey.DATE_ASC: "開催日が古い順",
    SortKey.DATE_DESC: "開催日が新しい順",
    SortKey.TITLE_ASC: "タイトル順",
}

KATA_TO_HIRA = str.maketrans({chr(k): chr(k - 0x60) for k in range(ord("ァ"), ord("ヶ") + 1)})
DAKUTEN = "\u3099"
HANDAKUTEN = "\u309A"


def _strip_voicing(text: str) -> str:
    nfd = unicodedata.normalize("NFD", text)
    return unicodedata.normalize("NFC", "".join(ch for ch in nfd if ch not in (DAKUTEN, HANDAKUTEN)))


def title_sort_key(title: str) -> str:
    """Collation key for Japanese titles.

    Levels, compared in order: kana-folded text without voicing marks,
    kana-folded text with voicing marks, then the raw title.
    """
    folded = unicodedata.normalize("NFKC", title or "").casefold().translate(KATA_TO_HIRA)
    return "\x00".join((_strip_voicing(folded), folded, title or ""))


def sort_results(results: pd.DataFrame, sort_key: SortKey = DEFAULT_SORT) -> pd.DataFrame:
    if results.empty:
        return results
    if sort_key is SortKey.TITLE_ASC:
        return results.sort_values("title", key=lambda s: s.map(title_sort_key), kind="stable")
    dates = results["start_date"].where(results["start_date"] != "", MISSING_DATE_SENTINEL)
    order = dates.sort_values(ascending=sort_key is not SortKey.DATE_DESC, kind="stable").index
    return results.loc[order]


@dataclass(frozen=True, eq=False)
class PageView:
    items: pd.DataFrame
    total_count: int
    page: int
    page_size: int
    total_pages: int
    range_start: int
    range_end: int

    @property
    def is_empty(self) -> bool:
        return self.total_count == 0

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def show_pagination(self) -> bool:
        return self.total_pages > 1

    def records(self) -> List[Record]:
        return list(iter_records(self.items))


def total_pages_for(total_count: int, page_size: int = ITEMS_PER_PAGE) -> int:
    return math.ceil(total_count / page_size) if total_count else 0


def clamp_page(page: int, total_pages: int) -> int:
    return max(1, min(int(page), max(1, total_pages)))


def paginate(results: pd.DataFrame, page: int = 1, page_size: int = ITEMS_PER_PAGE) -> PageView:
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    total_count = int(len(results))
    total_pages = total_pages_for(total_count, page_size)
    page = clamp_page(page, total_pages)
    if total_count == 0:
        return PageView(results.iloc[0:0], 0, page, page_size, 0, 0, 0)

    start = (page - 1) * page_size
    end = min(page * page_size, total_count)
    return PageView(
        items=results.iloc[start:end],
        total_count=total_count,
        page=page,
        page_size=page_size,
        total_pages=total_pages,
        range_start=start + 1,
        range_end=end,
    )


def present(
    results: pd.DataFrame,
    sort_key: SortKey = DEFAULT_SORT,
    page: int = 1,
    page_size: int = ITEMS_PER_PAGE,
) -> PageView:
    return paginate(sort_results(results, sort_key), page, page_size)
