# transformpath/utils/hashing.py
"""
Hashing utilities (deterministic)

Intent
- Provide the MD5 helpers shared by TransformPath digests and content fingerprints.
- Keep all hashing logic in one place so digests never drift between call sites.

Notes
- MD5 hex digests are 32 lowercase hex chars ([0-9a-f]), safe in file names and URLs.
- Intended for cache fingerprinting, not security.
- Text is encoded strictly as UTF-8. Callers validate text before hashing, so an
  unencodable string raises instead of being silently replaced.
"""

from __future__ import annotations

from hashlib import md5
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]

MD5_HEX_LEN = 32

_CHUNK_SIZE = 65536


def md5_bytes(b: bytes) -> str:
    """
    MD5 hex digest of raw bytes.
    """
    return md5(b).hexdigest()


def md5_text(s: str) -> str:
    """
    MD5 hex digest of a text string (UTF-8).
    """
    return md5(s.encode("utf-8")).hexdigest()


def md5_file(path: PathLike) -> str:
    """
    MD5 hex digest of a file's raw bytes, read in chunks.
    """
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"File not found: {str(p)}")

    h = md5()
    with p.open("rb") as f:
        while chunk := f.read(_CHUNK_SIZE):
            h.update(chunk)
    return h.hexdigest()


__all__ = ["MD5_HEX_LEN", "md5_bytes", "md5_text", "md5_file"]
