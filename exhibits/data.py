from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple, Union

import pandas as pd

from exhibits.records import RECORD_COLUMNS


logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1]
CSV_FILENAME = "mucha-database.csv"
CSV_ENCODING = "utf-8-sig"

LOAD_FAILED_LABEL = "データ読み込み失敗"

Source = Union[str, Path]


class LoadError(Exception):
    """Raised when the exhibition CSV cannot be fetched or parsed."""


def get_source_file() -> Path:
    return DATA_DIR / CSV_FILENAME


def source_signature(source: Source) -> Tuple[str, Optional[float]]:
    """Cache key for a source: local files change key when modified, URLs never do."""
    path = Path(source) if not _is_url(source) else None
    if path is not None and path.exists():
        return str(path), path.stat().st_mtime
    return str(source), None


def _is_url(source: Source) -> bool:
    return isinstance(source, str) and "://" in source


def coerce_str_safe(df: pd.DataFrame, cols: Iterable[str]) -> pd.DataFrame:
    for col in cols:
        if col in df.columns:
            df[col] = df[col].fillna("").astype(str).str.strip()
    return df


def drop_blank_rows(df: pd.DataFrame, cols: Iterable[str]) -> pd.DataFrame:
    if df.empty:
        return df
    cols = [c for c in cols if c in df.columns]
    return df[df[cols].ne("").any(axis=1)]


def parse_year(series: pd.Series) -> pd.Series:
    """Leading integer of each year cell (``"1980年"`` -> 1980); NaN when there is none."""
    leading = series.astype(str).str.extract(r"^\s*([+-]?\d+)", expand=False)
    return pd.to_numeric(leading, errors="coerce").astype(float)


def normalize_records(df: pd.DataFrame) -> pd.DataFrame:
    """Shape a raw frame into the record frame: known columns only, text cells, numeric year."""
    df = df.rename(columns=lambda c: str(c).strip())
    df = df.loc[:, ~df.columns.duplicated()]
    for col in RECORD_COLUMNS:
        if col not in df.columns:
            df[col] = ""
    df = df[list(RECORD_COLUMNS)].copy()
    df = coerce_str_safe(df, RECORD_COLUMNS)
    df = drop_blank_rows(df, RECORD_COLUMNS)
    df = df.reset_index(drop=True)
    df["year_num"] = parse_year(df["year"])
    return df


def empty_records() -> pd.DataFrame:
    return normalize_records(pd.DataFrame())


def load_exhibitions(source: Source) -> pd.DataFrame:
    try:
        raw = pd.read_csv(
            source,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding=CSV_ENCODING,
        )
    except (OSError, ValueError) as exc:
        # ParserError, EmptyDataError and UnicodeDecodeError are all ValueErrors.
        raise LoadError(f"Could not load exhibitions from {source}: {exc}") from exc
    return normalize_records(raw)


# ---------------- Public API ----------------
@lru_cache(maxsize=4)
def _load_exhibitions_cached(source_sig: Tuple[str, Optional[float]]) -> pd.DataFrame:
    source, _ = source_sig
    return load_exhibitions(source)


def load_app_data(source: Optional[Source] = None) -> Dict[str, object]:
    source = source if source is not None else get_source_file()
    try:
        records = _load_exhibitions_cached(source_signature(source)).copy()
    except LoadError as exc:
        logger.exception("loading %s failed", source)
        return {"source": str(source), "records": empty_records(), "total_count": 0, "error": str(exc)}

    logger.info("loaded %d exhibition records from %s", len(records), source)
    return {"source": str(source), "records": records, "total_count": int(len(records)), "error": None}


def total_count_label(data_ctx: Dict[str, object]) -> str:
    if data_ctx.get("error"):
        return LOAD_FAILED_LABEL
    return f"登録件数: {int(data_ctx.get('total_count', 0) or 0)} 件"
