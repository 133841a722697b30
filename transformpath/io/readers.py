# transformpath/io/readers.py
"""
Readers (CSV/TSV/PSV tables)

Intent
- Load the batch input table of TransformPath rows (one source id + JSON steps per row).

External calls
- pandas.read_csv

Primary functions
- read_input_table(path, fmt, encoding="utf-8") -> pandas.DataFrame
- validate_required_columns(df, required_columns) -> None (raise ValueError if missing)

Key behaviors / guarantees
- **File existence check**: raises FileNotFoundError if the input file path does not exist.
- **Strings only**: cells are read with dtype=str and keep_default_na=False, so a blank
  cell is "" and never NaN. Source ids like "00423" keep their leading zeros.
- **No cell-value trimming**: whitespace inside a source id or step is significant to
  the digest. Only column headers are trimmed.
- **Delimiter mapping**:
  - csv -> ","
  - tsv -> "\\t"
  - psv -> "|"
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Literal

import pandas as pd

from transformpath.utils.logging import get_logger

InputFormat = Literal["csv", "tsv", "psv"]


_DELIMS = {
    "csv": ",",
    "tsv": "\t",
    "psv": "|",
}


def validate_required_columns(df: pd.DataFrame, required_columns: Iterable[str]) -> None:
    """
    Raise ValueError if any required column is missing.
    """
    required = list(required_columns)
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}. Found columns: {list(df.columns)}")


def _trim_column_names(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = [str(c).strip() for c in df.columns]
    return df


def read_input_table(
    path: str | Path,
    fmt: InputFormat,
    encoding: str = "utf-8",
) -> pd.DataFrame:
    """
    Read an input table from csv/tsv/psv as strings.
    """
    logger = get_logger(__name__)

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Input file not found: {str(p)}")

    key = str(fmt).lower().strip()
    if key not in _DELIMS:
        raise ValueError(f"Unsupported input format: {fmt}. Expected one of: csv|tsv|psv")

    df = pd.read_csv(p, sep=_DELIMS[key], encoding=encoding, dtype=str, keep_default_na=False)
    df = _trim_column_names(df)

    logger.info("Read %s: %s (rows=%d, cols=%d)", key.upper(), str(p), int(df.shape[0]), int(df.shape[1]))
    return df


__all__ = ["InputFormat", "read_input_table", "validate_required_columns"]
