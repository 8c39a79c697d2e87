from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

import pandas as pd


RECORD_COLUMNS = (
    "year",
    "title",
    "venue",
    "prefecture",
    "start_date",
    "date_range",
    "tour_simple",
    "tour_detailed",
    "organizers",
    "catalog_status",
    "catalog_detail",
    "remarks",
    "reference",
)

# Columns concatenated for keyword matching.
SEARCHABLE_COLUMNS = ("title", "venue", "organizers", "catalog_detail", "remarks")

NO_TOUR_LABEL = "巡回なし"
NO_REMARKS_LABEL = "特になし"
EMPTY_LABEL = "-"


def _or(value: str, fallback: str) -> str:
    return value if value else fallback


@dataclass(frozen=True)
class Record:
    """One exhibition row, with display fallbacks for the optional fields."""

    record_id: int
    year: str = ""
    title: str = ""
    venue: str = ""
    prefecture: str = ""
    start_date: str = ""
    date_range: str = ""
    tour_simple: str = ""
    tour_detailed: str = ""
    organizers: str = ""
    catalog_status: str = ""
    catalog_detail: str = ""
    remarks: str = ""
    reference: str = ""

    @classmethod
    def from_row(cls, record_id: int, row: pd.Series) -> "Record":
        values = {col: str(row.get(col, "") or "") for col in RECORD_COLUMNS}
        return cls(record_id=int(record_id), **values)

    @property
    def tour_simple_display(self) -> str:
        return _or(self.tour_simple, NO_TOUR_LABEL)

    @property
    def tour_detailed_display(self) -> str:
        return _or(self.tour_detailed, EMPTY_LABEL)

    @property
    def organizers_display(self) -> str:
        return _or(self.organizers, EMPTY_LABEL)

    @property
    def catalog_detail_display(self) -> str:
        return _or(self.catalog_detail, EMPTY_LABEL)

    @property
    def remarks_display(self) -> str:
        return _or(self.remarks, NO_REMARKS_LABEL)

    @property
    def reference_display(self) -> Optional[str]:
        # No reference block at all when empty.
        return self.reference or None


def iter_records(df: pd.DataFrame) -> Iterator[Record]:
    for record_id, row in df.iterrows():
        yield Record.from_row(record_id, row)
