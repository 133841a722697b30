# transformpath/core/records.py
"""
TransformPath records — runtime validation for externally deserialized input.

Intent
- Build TransformPaths from JSON objects or table rows read from disk, where
  field types are not known ahead of time.
- Convert a TransformPath back into a plain JSON-serializable record.

Supported shapes
- Record (dict):
    {"source_id": "Image.423", "steps": ["constrain(800x600)", "grey()"]}
  `steps` is optional (missing or null -> no extra steps).
- Table cell (str): a JSON array of strings, e.g. '["constrain(800x600)"]'.
  An empty/blank cell means no extra steps.

Steps are kept as a JSON array rather than a newline-joined string so that
a step containing "\\n" stays distinguishable on the way in.

Every failure raises TransformPathValidationError; nothing falls back to a
partial path.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional

from transformpath.core.transform_path import TransformPath, TransformPathValidationError


def parse_steps_cell(value: Any) -> List[str]:
    """
    Parse a table cell holding a JSON array of step strings.
    """
    if value is None:
        return []
    if not isinstance(value, str):
        raise TransformPathValidationError(
            f"steps cell must be a JSON string; got {type(value).__name__}"
        )
    if not value.strip():
        return []

    try:
        obj = json.loads(value)
    except json.JSONDecodeError as e:
        raise TransformPathValidationError(f"steps cell is not valid JSON: {e}") from e

    if not isinstance(obj, list):
        raise TransformPathValidationError(
            f"steps cell must be a JSON array; got {type(obj).__name__}"
        )
    for i, step in enumerate(obj):
        if not isinstance(step, str):
            raise TransformPathValidationError(
                f"steps[{i}] must be a string; got {type(step).__name__}"
            )
    return obj


def path_from_record(record: Mapping[str, Any]) -> TransformPath:
    """
    Build a TransformPath from {"source_id": str, "steps": [str, ...]}.
    """
    if not isinstance(record, Mapping):
        raise TransformPathValidationError(
            f"record must be a mapping; got {type(record).__name__}"
        )
    if "source_id" not in record:
        raise TransformPathValidationError("record is missing required key 'source_id'")

    steps = record.get("steps")
    if steps is None:
        steps = []
    if not isinstance(steps, list):
        raise TransformPathValidationError(
            f"record 'steps' must be a list; got {type(steps).__name__}"
        )

    return TransformPath(record["source_id"], steps)


def path_to_record(path: TransformPath, *, length: Optional[int] = None) -> Dict[str, Any]:
    steps = path.steps
    return {
        "source_id": steps[0],
        "steps": list(steps[1:]),
        "digest": path.digest(length),
    }


__all__ = ["parse_steps_cell", "path_from_record", "path_to_record"]
