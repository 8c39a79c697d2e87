from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List


YEAR_START_DEFAULT = 0
YEAR_END_DEFAULT = 9999


class MatchMode(str, Enum):
    AND = "and"
    OR = "or"


@dataclass(frozen=True)
class FilterCriteria:
    keyword: str = ""
    mode: MatchMode = MatchMode.AND
    prefecture: str = ""
    year_start: int = YEAR_START_DEFAULT
    year_end: int = YEAR_END_DEFAULT

    def tokens(self) -> List[str]:
        # str.split() also splits on the ideographic space.
        return self.keyword.strip().lower().split()


def _as_int(value: object, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        out = int(value)
    except (TypeError, ValueError):
        return default
    # 0 falls back like an unset select.
    return out or default


def _as_mode(value: object) -> MatchMode:
    if isinstance(value, MatchMode):
        return value
    try:
        return MatchMode(str(value or "").strip().lower())
    except ValueError:
        return MatchMode.AND


def normalize_criteria(raw: dict) -> FilterCriteria:
    keyword = str(raw.get("keyword") or "").strip()
    prefecture = str(raw.get("prefecture") or "").strip()
    return FilterCriteria(
        keyword=keyword,
        mode=_as_mode(raw.get("mode")),
        prefecture=prefecture,
        year_start=_as_int(raw.get("year_start"), YEAR_START_DEFAULT),
        year_end=_as_int(raw.get("year_end"), YEAR_END_DEFAULT),
    )


def describe_criteria(criteria: FilterCriteria) -> List[str]:
    """Short chips summarizing the active criteria for the results header."""
    mode_label = "すべて含む" if criteria.mode is MatchMode.AND else "いずれか含む"
    chips = [f"キーワード: {criteria.keyword}（{mode_label}）" if criteria.keyword else "キーワード: 指定なし"]
    chips.append(f"都道府県: {criteria.prefecture}" if criteria.prefecture else "都道府県: すべて")
    start = "" if criteria.year_start == YEAR_START_DEFAULT else f"{criteria.year_start}年"
    end = "" if criteria.year_end == YEAR_END_DEFAULT else f"{criteria.year_end}年"
    chips.append(f"開催年: {start}～{end}" if start or end else "開催年: すべて")
    return chips
