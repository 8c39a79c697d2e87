"""Shared fixtures for the exhibition tests."""

from __future__ import annotations

from typing import Callable, Dict, List

import pandas as pd
import pytest

from exhibits.data import normalize_records


def build_records(rows: List[Dict[str, object]]) -> pd.DataFrame:
    """Record frame from partial rows, shaped the same way the loader shapes CSV input."""
    return normalize_records(pd.DataFrame(rows))


@pytest.fixture
def make_records() -> Callable[[List[Dict[str, object]]], pd.DataFrame]:
    return build_records


@pytest.fixture
def three_records() -> pd.DataFrame:
    """The 1980/1980/2000, 東京都/大阪府/東京都 dataset."""
    return build_records(
        [
            {"year": "1980", "title": "ミュシャ展", "venue": "東京会場", "prefecture": "東京都", "start_date": "1980-04-01"},
            {"year": "1980", "title": "アール・ヌーヴォー展", "venue": "大阪会場", "prefecture": "大阪府", "start_date": "1980-09-10"},
            {"year": "2000", "title": "ミュシャと日本", "venue": "東京美術館", "prefecture": "東京都", "start_date": "2000-01-15"},
        ]
    )


@pytest.fixture
def keyword_records() -> pd.DataFrame:
    return build_records(
        [
            {"year": "1990", "title": "猫と犬の展覧会", "prefecture": "東京都"},
            {"year": "1991", "title": "猫の展覧会", "prefecture": "東京都"},
            {"year": "1992", "title": "展覧会", "venue": "犬山市", "prefecture": "愛知県"},
            {"year": "1993", "title": "Mucha Retrospective", "organizers": "猫新聞社", "remarks": "犬", "prefecture": "京都府"},
            {"year": "1994", "title": "無関係", "prefecture": "北海道"},
        ]
    )


@pytest.fixture
def many_records() -> pd.DataFrame:
    """120 records in 1975..2024 with distinct start dates."""
    rows = []
    for i in range(120):
        year = 1975 + (i % 50)
        rows.append(
            {
                "year": str(year),
                "title": f"展覧会 {i:03d}",
                "prefecture": "東京都",
                "start_date": f"{year}-{1 + i // 50:02d}-{1 + i % 28:02d}",
            }
        )
    return build_records(rows)
