from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional, Tuple

import pandas as pd

from exhibits.charts import period_chart, region_chart, to_vega_spec
from exhibits.facets import REGIONS, prefecture_to_region


@dataclass(frozen=True)
class Period:
    label: str
    start: int
    end: Optional[int]
    divisor: int


# 5-year spans from 1975, then everything from 2025 on counted per single year.
PERIODS: Tuple[Period, ...] = tuple(
    Period(f"{y}-{str(y + 4)[-2:]}", y, y + 4, 5) for y in range(1975, 2025, 5)
) + (Period("2025-", 2025, None, 1),)


def round_half_up(value: float, ndigits: int = 0) -> float:
    q = Decimal(10) ** -ndigits
    return float(Decimal(str(value)).quantize(q, rounding=ROUND_HALF_UP))


def start_years(records: pd.DataFrame) -> pd.Series:
    """Leading four-digit year of each start_date; NaN when absent."""
    if records.empty:
        return pd.Series(dtype=float)
    leading = records["start_date"].str.extract(r"^\s*(\d{4})", expand=False)
    return pd.to_numeric(leading, errors="coerce").astype(float)


def period_counts(records: pd.DataFrame) -> pd.DataFrame:
    years = start_years(records)
    rows = []
    for p in PERIODS:
        in_period = years >= p.start
        if p.end is not None:
            in_period &= years <= p.end
        count = int(in_period.sum())
        rows.append(
            {
                "label": p.label,
                "start": p.start,
                "end": p.end,
                "divisor": p.divisor,
                "count": count,
                "yearly_average": round_half_up(count / p.divisor, 1),
            }
        )
    columns = ["label", "start", "end", "divisor", "count", "yearly_average"]
    return pd.DataFrame(rows, columns=columns).astype({"end": "Int64"})


def mapped_regions(records: pd.DataFrame) -> pd.Series:
    """Short region label per record; NaN for prefectures outside the fixed mapping."""
    if records.empty:
        return pd.Series(dtype=object)
    lookup = {pref: region.short_name for pref, region in prefecture_to_region().items()}
    return records["prefecture"].map(lookup)


def region_counts(records: pd.DataFrame) -> pd.DataFrame:
    counts = mapped_regions(records).value_counts()
    return pd.DataFrame(
        {
            "region": [r.short_name for r in REGIONS],
            "count": [int(counts.get(r.short_name, 0)) for r in REGIONS],
        }
    )


def mapped_prefecture_count(records: pd.DataFrame) -> int:
    if records.empty:
        return 0
    prefs = records["prefecture"]
    return int(prefs[prefs.isin(list(prefecture_to_region()))].nunique())


def compute_about(records: pd.DataFrame) -> Dict[str, Any]:
    periods = period_counts(records)
    regions = region_counts(records)
    prefecture_count = mapped_prefecture_count(records)

    charts: Dict[str, Any] = {}
    if not records.empty:
        charts["period_trend"] = to_vega_spec(period_chart(periods[["label", "count", "yearly_average"]]))
        charts["region_share"] = to_vega_spec(region_chart(regions, prefecture_count))

    return {
        "total_count": int(len(records)),
        "prefecture_count": prefecture_count,
        "periods": periods.to_dict(orient="records"),
        "regions": regions.to_dict(orient="records"),
        "charts": charts,
    }
