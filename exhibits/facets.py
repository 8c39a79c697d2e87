from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import pandas as pd


@dataclass(frozen=True)
class Region:
    name: str
    short_name: str
    prefectures: Tuple[str, ...]


# Standard region order, prefectures in JIS order within each region.
REGIONS: Tuple[Region, ...] = (
    Region("北海道地方", "北海道", ("北海道",)),
    Region("東北地方", "東北", ("青森県", "岩手県", "宮城県", "秋田県", "山形県", "福島県")),
    Region("関東地方", "関東", ("茨城県", "栃木県", "群馬県", "埼玉県", "千葉県", "東京都", "神奈川県")),
    Region(
        "中部地方",
        "中部",
        ("新潟県", "富山県", "石川県", "福井県", "山梨県", "長野県", "岐阜県", "静岡県", "愛知県"),
    ),
    Region("近畿地方", "近畿", ("三重県", "滋賀県", "京都府", "大阪府", "兵庫県", "奈良県", "和歌山県")),
    Region("中国地方", "中国", ("鳥取県", "島根県", "岡山県", "広島県", "山口県")),
    Region("四国地方", "四国", ("徳島県", "香川県", "愛媛県", "高知県")),
    Region(
        "九州・沖縄地方",
        "九州",
        ("福岡県", "佐賀県", "長崎県", "熊本県", "大分県", "宮崎県", "鹿児島県", "沖縄県"),
    ),
)

PrefectureFacets = List[Tuple[str, List[str]]]


def prefecture_to_region() -> Dict[str, Region]:
    return {pref: region for region in REGIONS for pref in region.prefectures}


def build_prefecture_facets(records: pd.DataFrame) -> PrefectureFacets:
    if records.empty or "prefecture" not in records.columns:
        return []
    existing = set(records["prefecture"].tolist()) - {""}
    facets: PrefectureFacets = []
    for region in REGIONS:
        matched = [p for p in region.prefectures if p in existing]
        if matched:
            facets.append((region.name, matched))
    return facets


def year_bounds(records: pd.DataFrame) -> Optional[Tuple[int, int]]:
    """(min, max) of the numeric years, or None when no record has one."""
    if records.empty or "year_num" not in records.columns:
        return None
    years = records["year_num"].dropna()
    if years.empty:
        return None
    return int(years.min()), int(years.max())


def year_options(bounds: Optional[Tuple[int, int]]) -> List[int]:
    if bounds is None:
        return []
    lo, hi = bounds
    return list(range(lo, hi + 1))
