# transformpath/utils/logging.py
"""
Logging Utilities — Consistent Logs for the Batch Layer

Intent
- Provide consistent logging across pipelines/scripts with a single configuration entrypoint.
- Support correlation via `run_id` (injected into LogRecord).
- Keep the TransformPath core silent: only readers, writers and pipelines log.

What this module guarantees
- **Idempotent root configuration:** `configure_logging()` avoids duplicating handlers across repeated calls.
- **Stable log format:** timestamps + level + logger name + message.
- **Optional log-to-file:** add a FileHandler without breaking stream logging.

Primary API
- `configure_logging(level="INFO", log_file=None) -> None`
- `configure_logging_from_params(params) -> None`
  Reads `params.logging.level` / `params.logging.log_file` (missing block -> defaults).
- `get_logger(name: str, run_id: str | None = None) -> logging.Logger`
  Lazily configures logging with defaults if not configured yet.

External dependencies
- Python stdlib: `logging`, `pathlib`
"""


from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Internal state to avoid duplicating handlers
_CONFIGURED = False


class RunIdFilter(logging.Filter):
    """Inject run_id into log records."""

    def __init__(self, run_id: Optional[str] = None) -> None:
        super().__init__()
        self.run_id = run_id

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = self.run_id
        return True


def _has_stream_handler(root: logging.Logger) -> bool:
    return any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        for h in root.handlers
    )


def _has_file_handler(root: logging.Logger, path: str) -> bool:
    target = Path(path).resolve()
    for h in root.handlers:
        if isinstance(h, logging.FileHandler):
            if Path(getattr(h, "baseFilename", "")).resolve() == target:
                return True
    return False


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure root logging (idempotent for handlers).
    - Avoids handler duplication across repeated imports / calls.
    - If log_file is provided, adds a FileHandler in addition to StreamHandler.
    """
    global _CONFIGURED

    root = logging.getLogger()
    root_level = getattr(logging, str(level).upper(), None)
    if not isinstance(root_level, int):
        raise ValueError(f"Invalid log level: {level}")
    root.setLevel(root_level)

    formatter = logging.Formatter(fmt=_DEFAULT_FORMAT, datefmt=_DEFAULT_DATEFMT)

    if not _has_stream_handler(root):
        sh = logging.StreamHandler()
        sh.setFormatter(formatter)
        root.addHandler(sh)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        if not _has_file_handler(root, log_file):
            fh = logging.FileHandler(log_file, encoding="utf-8")
            fh.setFormatter(formatter)
            root.addHandler(fh)

    _CONFIGURED = True


def configure_logging_from_params(params: Any) -> None:
    """
    Configure logging from a ParametersConfig-like object (duck-typed for tests).
    """
    block = getattr(params, "logging", None)
    level = getattr(block, "level", None) or "INFO"
    log_file = getattr(block, "log_file", None)
    configure_logging(level=level, log_file=log_file)


def get_logger(name: str, run_id: Optional[str] = None) -> logging.Logger:
    """
    Get a module logger with consistent configuration.

    Notes:
    - We configure logging lazily with INFO level by default, unless configured already.
    - We avoid adding per-logger handlers (handlers live on root).
    - If run_id is provided, attach a filter to this logger (idempotent per run_id).
    """
    if not _CONFIGURED:
        configure_logging(level="INFO", log_file=None)

    logger = logging.getLogger(name)

    if run_id is not None:
        already = any(isinstance(f, RunIdFilter) and f.run_id == run_id for f in logger.filters)
        if not already:
            logger.addFilter(RunIdFilter(run_id=run_id))

    return logger


__all__ = ["get_logger", "configure_logging", "configure_logging_from_params", "RunIdFilter"]
