from __future__ import annotations

import pandas as pd

from exhibits.filters import FilterCriteria, MatchMode
from exhibits.records import SEARCHABLE_COLUMNS


def searchable_text(records: pd.DataFrame) -> pd.Series:
    """Lowercased blob of the searchable fields, one per record."""
    first, *rest = SEARCHABLE_COLUMNS
    return records[first].str.cat([records[c] for c in rest], sep=" ").str.lower()


def search(records: pd.DataFrame, criteria: FilterCriteria) -> pd.DataFrame:
    """Records passing the year, prefecture and keyword checks, in their original order."""
    if records.empty:
        return records.copy()

    # NaN years compare False both ways, so they never pass.
    year = records["year_num"]
    mask = (year >= criteria.year_start) & (year <= criteria.year_end)

    if criteria.prefecture:
        mask &= records["prefecture"] == criteria.prefecture

    tokens = criteria.tokens()
    if tokens:
        blob = searchable_text(records)
        hits = pd.concat([blob.str.contains(t, regex=False) for t in tokens], axis=1)
        mask &= hits.all(axis=1) if criteria.mode is MatchMode.AND else hits.any(axis=1)

    return records[mask]
