# scripts/run_digest_table.py
"""
Manual runner — Batch Digest Pipeline (REAL execution)

Usage:
    python scripts/run_digest_table.py
    python scripts/run_digest_table.py --parameters configs/parameters.yaml
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from transformpath.batch.pipeline_digest_table import main as digest_table_main
from transformpath.utils.logging import get_logger


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Compute TransformPath digests for an input table.")
    parser.add_argument(
        "--parameters",
        default=str(REPO_ROOT / "configs/parameters.yaml"),
        help="Path to parameters.yaml",
    )
    args = parser.parse_args(argv)

    logger = get_logger(__name__)

    logger.info("=" * 80)
    logger.info("RUNNING DIGEST PIPELINE — REAL EXECUTION")
    logger.info("Repo root: %s", REPO_ROOT)
    logger.info("Working directory: %s", Path.cwd())
    logger.info("Parameters: %s", args.parameters)
    logger.info("=" * 80)

    if not Path(args.parameters).exists():
        raise FileNotFoundError(f"Required file missing: {args.parameters}")

    rc = digest_table_main(args.parameters)

    logger.info("Digest pipeline finished with return code: %s", rc)
    logger.info("=" * 80)
    return rc


if __name__ == "__main__":
    raise SystemExit(main())
