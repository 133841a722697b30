# transformpath/utils/config.py
"""
Config Loader — Batch Digest Pipeline (Typed YAML Configs)

Intent
- Load + validate configs/parameters.yaml for the batch digest pipeline.
- Return a **typed** configuration object (Pydantic).
- Ensure output/failure/log directories exist.

What this module guarantees
- **Strict validation:** invalid configs fail fast with actionable Pydantic errors.
- **Unicode whitespace hardening:** NBSP/BOM/narrow NBSP are normalized before YAML parsing.
- **Deterministic defaults:** if a key is omitted, model defaults apply.

Config models (high level)
- InputConfig: path, format (csv|tsv|psv), encoding, source_id_column, steps_column
- DigestConfig: length (None = full 32 chars; accepts null / "full" / int in [1, 32])
- CacheConfig: dir, suffix (empty or ".ext", no path separators)
- OutputsConfig: path, format, summary_json, failures_dir
- LoggingConfig: level, log_file

External dependencies
- PyYAML: yaml.safe_load
- Pydantic v2: BaseModel, validators, model_validate
- Local: transformpath.utils.logging.get_logger
"""


from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from transformpath.core.cache_paths import validate_suffix
from transformpath.utils.hashing import MD5_HEX_LEN
from transformpath.utils.logging import get_logger

TableFormat = Literal["csv", "tsv", "psv"]


# -----------------------------
# Parameter models
# -----------------------------
class InputConfig(BaseModel):
    path: str = "raw_data/paths.csv"
    format: TableFormat = "csv"
    encoding: str = "utf-8"
    source_id_column: str = "source_id"
    steps_column: str = "steps"

    @field_validator("format", mode="before")
    @classmethod
    def _normalize_format(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v


class DigestConfig(BaseModel):
    # None means the full 32-char digest
    length: Optional[int] = None

    @field_validator("length", mode="before")
    @classmethod
    def _validate_length(cls, v: Any) -> Optional[int]:
        """
        Accept:
        - null / None -> None
        - "full" -> None
        - int in [1, 32]
        - numeric string in [1, 32]
        """
        if v is None:
            return None

        if isinstance(v, str):
            s = v.strip().lower()
            if s == "full":
                return None
            try:
                v = int(s)
            except ValueError as e:
                raise ValueError('digest.length must be "full", null, or an integer') from e

        if isinstance(v, bool) or not isinstance(v, int):
            raise ValueError('digest.length must be "full", null, or an integer')
        if v < 1 or v > MD5_HEX_LEN:
            raise ValueError(f"digest.length must be within [1, {MD5_HEX_LEN}]")
        return v


class CacheConfig(BaseModel):
    dir: str = "cache"
    suffix: str = ""

    @field_validator("suffix")
    @classmethod
    def _validate_suffix(cls, v: str) -> str:
        return validate_suffix(v)


class OutputsConfig(BaseModel):
    path: str = "artifacts/outputs/digests.csv"
    format: TableFormat = "csv"
    summary_json: str = "artifacts/outputs/digests_summary.json"
    failures_dir: str = "artifacts/failures"


class LoggingConfig(BaseModel):
    level: str = "INFO"
    log_file: Optional[str] = None

    @field_validator("level")
    @classmethod
    def _validate_level(cls, v: str) -> str:
        lv = v.strip().upper()
        if not isinstance(getattr(logging, lv, None), int):
            raise ValueError(f"logging.level is not a valid level name: {v}")
        return lv


class ParametersConfig(BaseModel):
    input: InputConfig = Field(default_factory=InputConfig)
    digest: DigestConfig = Field(default_factory=DigestConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    outputs: OutputsConfig = Field(default_factory=OutputsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# -----------------------------
# YAML helpers
# -----------------------------
def _load_yaml(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    with p.open("r", encoding="utf-8") as f:
        text = f.read()

    # sanitize BEFORE YAML parse (fix NBSP / BOM / narrow NBSP)
    for ch in ["\u00A0", "\u2007", "\u202F", "\uFEFF"]:
        text = text.replace(ch, " ")

    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"YAML root must be a mapping/object: {path}")
    return data


def load_parameters(path: str | Path = "configs/parameters.yaml") -> ParametersConfig:
    """
    Load and validate parameters.yaml into a typed ParametersConfig.
    """
    logger = get_logger(__name__)
    raw = _load_yaml(path)
    try:
        params = ParametersConfig.model_validate(raw)
    except ValidationError as e:
        logger.error("Invalid parameters.yaml: %s", e)
        raise
    return params


def ensure_dirs(params: ParametersConfig) -> None:
    """
    Ensure configured output directories exist.
    """
    dirs = [
        Path(params.outputs.path).parent,
        Path(params.outputs.summary_json).parent,
        Path(params.outputs.failures_dir),
    ]
    if params.logging.log_file:
        dirs.append(Path(params.logging.log_file).parent)
    for d in dirs:
        d.mkdir(parents=True, exist_ok=True)


__all__ = [
    "ParametersConfig",
    "InputConfig",
    "DigestConfig",
    "CacheConfig",
    "OutputsConfig",
    "LoggingConfig",
    "load_parameters",
    "ensure_dirs",
]
