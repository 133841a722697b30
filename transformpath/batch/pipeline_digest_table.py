# transformpath/batch/pipeline_digest_table.py
"""
Batch Digest Pipeline — derive cache keys for a table of transform chains.

Intent
- Read the configured input table: one row per transformed artifact, with
  - a source id column (text, taken verbatim)
  - a steps column (JSON array of transform descriptions, in application order)
- Build a TransformPath per row and compute its digest + cache file path.
- Write the enriched table and a small JSON summary.

Design decisions
- Rows that fail validation get NO key. A default/empty key would make every bad
  row share one cache entry. Each failure is written as its own JSON artifact
  and logged at WARNING instead.
- Cells are read as strings (no NaN); the source id is never trimmed.

Output
- {outputs.path}: input columns + digest + cache_path (only rows that succeeded)
- {outputs.summary_json}: n_rows / n_ok / n_failed / digest_length
- {outputs.failures_dir}/row_{index}.json for each failed row

Return code
- 0 when every row succeeded, 1 when at least one row failed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from transformpath.core.cache_paths import digest_path
from transformpath.core.records import parse_steps_cell
from transformpath.core.transform_path import TransformPath, TransformPathError
from transformpath.io.readers import read_input_table, validate_required_columns
from transformpath.io.writers import write_csv, write_failure_json, write_json, write_psv, write_tsv
from transformpath.utils.config import ensure_dirs, load_parameters
from transformpath.utils.logging import configure_logging_from_params, get_logger

OUTPUT_COLUMNS = ("digest", "cache_path")

_WRITERS = {
    "csv": write_csv,
    "tsv": write_tsv,
    "psv": write_psv,
}


def digest_table(df: pd.DataFrame, params: Any) -> tuple[pd.DataFrame, List[Dict[str, Any]]]:
    """
    Compute digest + cache_path per row.

    Input columns named like the output columns (digest, cache_path) are
    rejected with ValueError instead of being overwritten.

    Returns (ok_rows_df, failures) where failures is a list of
    {"index", "row", "error"} dicts, error being the raised exception.
    """
    clashing = [c for c in OUTPUT_COLUMNS if c in df.columns]
    if clashing:
        raise ValueError(f"Input table already has output columns: {clashing}")

    sid_col = params.input.source_id_column
    steps_col = params.input.steps_column
    length = params.digest.length

    ok_rows: List[Dict[str, Any]] = []
    failures: List[Dict[str, Any]] = []

    for idx, row in df.iterrows():
        record = {str(k): v for k, v in row.items()}
        try:
            path = TransformPath(record[sid_col], parse_steps_cell(record[steps_col]))
            digest = path.digest(length)
            cache_path = digest_path(params.cache.dir, digest, suffix=params.cache.suffix)
        except TransformPathError as e:
            failures.append({"index": int(idx), "row": record, "error": e})
            continue

        out = dict(record)
        out["digest"] = digest
        out["cache_path"] = cache_path.as_posix()
        ok_rows.append(out)

    columns = [str(c) for c in df.columns] + list(OUTPUT_COLUMNS)
    return pd.DataFrame(ok_rows, columns=columns), failures


def main(parameters_path: str | Path = "configs/parameters.yaml") -> int:
    params = load_parameters(parameters_path)
    configure_logging_from_params(params)
    ensure_dirs(params)

    logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Read input
    # ------------------------------------------------------------------
    df = read_input_table(params.input.path, params.input.format, encoding=params.input.encoding)
    validate_required_columns(df, [params.input.source_id_column, params.input.steps_column])

    # ------------------------------------------------------------------
    # Derive keys (pure)
    # ------------------------------------------------------------------
    out_df, failures = digest_table(df, params)

    for f in failures:
        err = f["error"]
        logger.warning("Row %d rejected: %s: %s", f["index"], type(err).__name__, err)
        write_failure_json(
            params.outputs.failures_dir,
            name=f"row_{f['index']}",
            meta={"index": f["index"], "row": f["row"]},
            err=err,
        )

    # ------------------------------------------------------------------
    # Write outputs
    # ------------------------------------------------------------------
    _WRITERS[str(params.outputs.format).lower()](params.outputs.path, out_df)

    summary = {
        "n_rows": int(df.shape[0]),
        "n_ok": int(out_df.shape[0]),
        "n_failed": len(failures),
        "digest_length": params.digest.length,
        "input_path": str(params.input.path),
        "output_path": str(params.outputs.path),
    }
    write_json(params.outputs.summary_json, summary)

    logger.info(
        "Digest pipeline completed: rows=%d ok=%d failed=%d",
        summary["n_rows"],
        summary["n_ok"],
        summary["n_failed"],
    )
    return 0 if not failures else 1


if __name__ == "__main__":
    raise SystemExit(main())
