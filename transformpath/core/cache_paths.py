# transformpath/core/cache_paths.py
"""
Cache file naming for TransformPath digests.

Intent
- Turn a TransformPath into a cache file location:
    {cache_dir}/{digest}{suffix}
  e.g. cropped/1f3870be274f6c4.jpg
- Pure path construction: no filesystem access, no existence checks.
  Storing, reading and evicting cache files is the caller's business.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from transformpath.core.transform_path import TransformPath


def validate_suffix(suffix: str) -> str:
    """
    Cache file suffix: empty, or ".ext" without path separators.
    """
    if not isinstance(suffix, str):
        raise ValueError(f"suffix must be a str; got {type(suffix).__name__}")
    if not suffix:
        return suffix
    if not suffix.startswith("."):
        raise ValueError(f"suffix must be empty or start with '.': {suffix!r}")
    if "/" in suffix or "\\" in suffix:
        raise ValueError(f"suffix must not contain path separators: {suffix!r}")
    return suffix


def digest_path(cache_dir: str | Path, digest: str, *, suffix: str = "") -> Path:
    """
    Cache file path for an already computed digest.
    """
    return Path(cache_dir) / (digest + validate_suffix(suffix))


def cache_key_path(
    cache_dir: str | Path,
    path: TransformPath,
    *,
    length: Optional[int] = None,
    suffix: str = "",
) -> Path:
    """
    Build the cache file path for a TransformPath.

    length is passed straight to TransformPath.digest (DigestLengthError if invalid).
    """
    return digest_path(cache_dir, path.digest(length), suffix=suffix)


__all__ = ["validate_suffix", "digest_path", "cache_key_path"]
