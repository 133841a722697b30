# transformpath/core/transform_path.py
"""
TransformPath — deterministic cache key for a chain of sequential transforms.

Intent
- Describe "original source + ordered transforms applied to it" as a sequence of
  short text tokens:
    [source_id, step_1, step_2, ...]
- Derive a compact, stable cache key from that sequence:
    md5("\\n".join(steps)) -> 32 lowercase hex chars (optionally truncated)
- The key changes whenever the source id or any step (or the step order) changes.

Typical usage
    path = TransformPath("Image.423")
    constrain(image, 800, 600)
    path.add("constrain(800x600)")
    filename = Path("cropped") / (path.digest(15) + ".jpg")

When the source cannot cheaply be checked for changes, add a digest of its
content as the first step (see add_content_digest / for_file). The source id
then stays static while the key still follows the data.

What this module guarantees
- **Non-empty:** steps[0] is always the source id.
- **Append-only:** steps are only ever appended via add(); never reordered or removed.
- **Text only:** every token is a plain `str` encodable as UTF-8. Anything else
  (None, bytes, numbers, lists, ...) raises TransformPathValidationError.
- **All-or-nothing construction:** if any initial token is invalid, no object is produced.
- **Pure digest:** digest() never mutates the path; equal steps -> equal digest.

Serialization (fixed; changing it invalidates every existing cache key)
- Steps are joined with a single "\\n", hashed with MD5 over the UTF-8 bytes.
- Known limitation: tokens are NOT escaped, so ["a\\nb", "c"] and ["a", "b\\nc"]
  produce the same digest. Transform descriptions are expected to be short,
  single-line tags.

Concurrency
- Not internally synchronized. Callers sharing one instance must serialize add()
  against other add() and digest() calls. Concurrent read-only use is safe.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Iterator, Optional, Tuple, Union

from transformpath.utils.hashing import MD5_HEX_LEN, md5_bytes, md5_file, md5_text

STEP_SEPARATOR = "\n"


class TransformPathError(ValueError):
    """Base class for TransformPath input errors."""


class TransformPathValidationError(TransformPathError):
    """Raised when a source id or transform step is not a valid text value."""


class DigestLengthError(TransformPathError):
    """Raised when a digest truncation length is not an integer in [1, 32]."""


def _validate_token(value: Any, *, what: str) -> str:
    if not isinstance(value, str):
        raise TransformPathValidationError(
            f"{what} must be a str; got {type(value).__name__}"
        )
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise TransformPathValidationError(f"{what} is not valid UTF-8 text: {e}") from e
    return value


def _validate_length(length: Any) -> int:
    # bool is an int subclass; True must not mean "1 char"
    if isinstance(length, bool) or not isinstance(length, int):
        raise DigestLengthError(
            f"digest length must be an integer in [1, {MD5_HEX_LEN}]; got {length!r}"
        )
    if length < 1 or length > MD5_HEX_LEN:
        raise DigestLengthError(
            f"digest length must be within [1, {MD5_HEX_LEN}]; got {length}"
        )
    return length


class TransformPath:
    """
    Ordered, append-only sequence of text tokens: source id followed by
    transform descriptions.
    """

    __slots__ = ("_steps",)

    def __init__(self, source_id: str, steps: Iterable[str] = ()) -> None:
        if isinstance(steps, (str, bytes)):
            raise TransformPathValidationError(
                "steps must be a sequence of str, not a single string"
            )
        try:
            extra = list(steps)
        except TypeError as e:
            raise TransformPathValidationError(
                f"steps must be an iterable of str; got {type(steps).__name__}"
            ) from e

        tokens = [_validate_token(source_id, what="source_id")]
        for i, step in enumerate(extra):
            tokens.append(_validate_token(step, what=f"steps[{i}]"))
        self._steps = tokens

    # -----------------------------
    # Alternate constructors
    # -----------------------------
    @classmethod
    def for_file(cls, path: Union[str, Path], source_id: Optional[str] = None) -> "TransformPath":
        """
        Build a path whose first step is the MD5 of the file content.

        source_id defaults to the file path as given. The content digest makes the
        final key change whenever the file bytes change.
        """
        sid = str(path) if source_id is None else source_id
        return cls(sid, [md5_file(path)])

    def copy(self) -> "TransformPath":
        """
        Independent copy with the same steps, for branching one prefix into
        several transform chains.
        """
        return type(self)(self._steps[0], self._steps[1:])

    # -----------------------------
    # Mutation
    # -----------------------------
    def add(self, step: str) -> None:
        """
        Append one transform description. Invalid input leaves the path untouched.
        """
        self._steps.append(_validate_token(step, what="step"))

    def add_content_digest(self, data: bytes) -> None:
        """
        Append the MD5 hex digest of raw source data as a step.
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TransformPathValidationError(
                f"content must be bytes-like; got {type(data).__name__}"
            )
        self._steps.append(md5_bytes(bytes(data)))

    # -----------------------------
    # Observers
    # -----------------------------
    @property
    def source_id(self) -> str:
        return self._steps[0]

    @property
    def steps(self) -> Tuple[str, ...]:
        return tuple(self._steps)

    def serialize(self) -> str:
        return STEP_SEPARATOR.join(self._steps)

    def digest(self, length: Optional[int] = None) -> str:
        """
        MD5 hex digest of the serialized steps.

        If length is given it must be an integer in [1, 32]; the result is the
        first `length` chars of the full digest.
        """
        full = md5_text(self.serialize())
        if length is None:
            return full
        return full[: _validate_length(length)]

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._steps))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransformPath):
            return NotImplemented
        return self._steps == other._steps

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"TransformPath({self._steps[0]!r}, {self._steps[1:]!r})"


__all__ = [
    "STEP_SEPARATOR",
    "TransformPath",
    "TransformPathError",
    "TransformPathValidationError",
    "DigestLengthError",
]
