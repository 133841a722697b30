# tests/test_records.py
from __future__ import annotations

import pytest

from transformpath.core.records import parse_steps_cell, path_from_record, path_to_record
from transformpath.core.transform_path import TransformPath, TransformPathValidationError


def test_parse_steps_cell_json_array():
    assert parse_steps_cell('["constrain(800x600)", "grey()"]') == ["constrain(800x600)", "grey()"]


@pytest.mark.parametrize("cell", ["", "   ", None])
def test_parse_steps_cell_blank_means_no_steps(cell):
    assert parse_steps_cell(cell) == []


def test_parse_steps_cell_keeps_embedded_newline():
    assert parse_steps_cell('["a\\nb"]') == ["a\nb"]


@pytest.mark.parametrize(
    "cell",
    [
        "constrain(800x600)",  # not JSON
        '{"a": 1}',  # not an array
        '["ok", 3]',  # non-string item
        '[null]',
        '[["nested"]]',
    ],
)
def test_parse_steps_cell_rejects_malformed(cell):
    with pytest.raises(TransformPathValidationError):
        parse_steps_cell(cell)


def test_parse_steps_cell_rejects_non_string_cell():
    with pytest.raises(TransformPathValidationError):
        parse_steps_cell(12)


def test_path_from_record_ok():
    p = path_from_record({"source_id": "Image.423", "steps": ["constrain(800x600)"]})
    assert p == TransformPath("Image.423", ["constrain(800x600)"])


@pytest.mark.parametrize("rec", [{"source_id": "x"}, {"source_id": "x", "steps": None}])
def test_path_from_record_steps_optional(rec):
    assert path_from_record(rec).steps == ("x",)


@pytest.mark.parametrize(
    "rec",
    [
        {},
        {"steps": ["a"]},
        {"source_id": 423},
        {"source_id": None},
        {"source_id": "x", "steps": "a"},
        {"source_id": "x", "steps": [None]},
        {"source_id": "x", "steps": {"a": 1}},
    ],
)
def test_path_from_record_rejects_invalid(rec):
    with pytest.raises(TransformPathValidationError):
        path_from_record(rec)


def test_path_from_record_rejects_non_mapping():
    with pytest.raises(TransformPathValidationError):
        path_from_record(["source_id", "x"])  # type: ignore[arg-type]


def test_path_to_record_round_trip():
    p = TransformPath("Image.423", ["constrain(800x600)"])
    rec = path_to_record(p, length=15)
    assert rec == {
        "source_id": "Image.423",
        "steps": ["constrain(800x600)"],
        "digest": p.digest(15),
    }
    assert path_from_record(rec) == p
