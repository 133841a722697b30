# transformpath/io/writers.py
"""
Writers (Deterministic Artifacts I/O)

Intent
- Provide a single, deterministic way to write batch outputs to disk:
  - JSON (summaries, failure artifacts)
  - DELIMITED tables (CSV/TSV/PSV) of rows with their digests

External calls
- json.dumps
- pandas.DataFrame.to_csv
- pathlib.Path
- transformpath.utils.logging.get_logger

Key behaviors / guarantees
- JSON: UTF-8, sort_keys=True, ensure_ascii=False, pretty indent.
- DELIMITED: UTF-8, index=False, column order exactly df.columns, "\\n" line endings.
- Parent directories are created recursively and idempotently.
- Every write emits an INFO-level log with the path and size/rows.

Design notes
- Writers are thin: no schema enforcement, no column mutation.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Mapping

import pandas as pd

from transformpath.utils.logging import get_logger


def ensure_parent_dir(path: str | Path) -> None:
    """
    Ensure parent directory exists for the given file path.
    """
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def write_json(
    path: str | Path,
    obj: Any,
    *,
    indent: int = 2,
    sort_keys: bool = True,
) -> None:
    """
    Write an object to JSON deterministically.

    Caller must ensure `obj` is JSON-serializable.
    """
    logger = get_logger(__name__)
    ensure_parent_dir(path)

    p = Path(path)
    text = json.dumps(obj, ensure_ascii=False, sort_keys=sort_keys, indent=indent) + "\n"
    p.write_text(text, encoding="utf-8")

    logger.info("Wrote JSON: %s (bytes=%d)", str(p), len(text.encode("utf-8")))


def write_delimited(path: str | Path, df: pd.DataFrame, *, sep: str = "|") -> None:
    """
    Write DataFrame to a delimited text file deterministically (e.g., PSV/TSV).

    escapechar + doublequote=False keeps JSON steps cells readable instead of
    turning them into ""..."".
    """
    logger = get_logger(__name__)
    ensure_parent_dir(path)

    p = Path(path)
    df.to_csv(
        p,
        index=False,
        encoding="utf-8",
        sep=sep,
        lineterminator="\n",
        quoting=csv.QUOTE_MINIMAL,
        escapechar="\\",
        doublequote=False,
    )

    logger.info(
        "Wrote DELIMITED: %s (sep=%r rows=%d, cols=%d)",
        str(p),
        sep,
        int(df.shape[0]),
        int(df.shape[1]),
    )


def write_csv(path: str | Path, df: pd.DataFrame) -> None:
    return write_delimited(path, df, sep=",")


def write_psv(path: str | Path, df: pd.DataFrame) -> None:
    return write_delimited(path, df, sep="|")


def write_tsv(path: str | Path, df: pd.DataFrame) -> None:
    return write_delimited(path, df, sep="\t")


def write_failure_json(
    failures_dir: str | Path,
    *,
    name: str,
    meta: Mapping[str, Any],
    err: Exception,
) -> Path:
    """
    Write a stable failure artifact:
      {failures_dir}/{name}.json
    """
    p = Path(failures_dir) / f"{name}.json"
    payload = {
        "meta": dict(meta),
        "error": {"type": type(err).__name__, "message": str(err)},
    }
    write_json(p, payload)
    return p


__all__ = [
    "ensure_parent_dir",
    "write_json",
    "write_delimited",
    "write_csv",
    "write_psv",
    "write_tsv",
    "write_failure_json",
]
