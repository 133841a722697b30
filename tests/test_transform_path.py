# tests/test_transform_path.py
from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from transformpath.core.transform_path import (
    DigestLengthError,
    TransformPath,
    TransformPathError,
    TransformPathValidationError,
)


def _md5(s: str) -> str:
    return hashlib.md5(s.encode("utf-8")).hexdigest()


# -----------------------------
# Construction
# -----------------------------

def test_construct_with_source_id_only():
    p = TransformPath("Image.423")
    assert p.source_id == "Image.423"
    assert p.steps == ("Image.423",)
    assert len(p) == 1


def test_construct_with_extra_steps_preserves_order():
    p = TransformPath("id", ["x", "y", "z"])
    assert p.steps == ("id", "x", "y", "z")
    assert list(p) == ["id", "x", "y", "z"]


def test_construct_accepts_empty_string_source_id():
    p = TransformPath("")
    assert p.source_id == ""
    # md5 of empty input
    assert p.digest() == "d41d8cd98f00b204e9800998ecf8427e"


def test_construct_accepts_any_iterable_of_steps():
    p = TransformPath("id", (s for s in ["a", "b"]))
    assert p.steps == ("id", "a", "b")


@pytest.mark.parametrize("bad_id", [42, None, 1.5, b"bytes", ["list"], {"k": "v"}, True])
def test_construct_rejects_non_text_source_id(bad_id):
    with pytest.raises(TransformPathValidationError):
        TransformPath(bad_id)  # type: ignore[arg-type]


@pytest.mark.parametrize("bad_step", [None, 7, ["list"], b"x"])
def test_construct_rejects_non_text_extra_step(bad_step):
    with pytest.raises(TransformPathValidationError):
        TransformPath("id", ["ok", bad_step])  # type: ignore[list-item]


def test_construct_rejects_bare_string_as_steps():
    # "xy" would otherwise silently become ["x", "y"]
    with pytest.raises(TransformPathValidationError):
        TransformPath("id", "xy")  # type: ignore[arg-type]


def test_construct_rejects_non_iterable_steps():
    with pytest.raises(TransformPathValidationError):
        TransformPath("id", 5)  # type: ignore[arg-type]


def test_construct_rejects_unencodable_text():
    with pytest.raises(TransformPathValidationError):
        TransformPath("id\udcff")


def test_validation_errors_are_value_errors():
    assert issubclass(TransformPathValidationError, TransformPathError)
    assert issubclass(DigestLengthError, TransformPathError)
    assert issubclass(TransformPathError, ValueError)


# -----------------------------
# add()
# -----------------------------

def test_add_appends_one_step():
    p = TransformPath("id")
    p.add("crop(10,10,50,50)")
    assert p.steps == ("id", "crop(10,10,50,50)")
    assert len(p) == 2


@pytest.mark.parametrize("bad_step", [None, ["list"], {"a": 1}, 3, b"raw"])
def test_add_rejects_non_text_without_mutation(bad_step):
    p = TransformPath("id", ["x"])
    before = p.digest()
    with pytest.raises(TransformPathValidationError):
        p.add(bad_step)  # type: ignore[arg-type]
    assert p.steps == ("id", "x")
    assert p.digest() == before


def test_add_empty_string_still_appends_and_changes_digest():
    p = TransformPath("id")
    before = p.digest()
    p.add("")
    assert len(p) == 2
    # "id" vs "id\n"
    assert p.digest() != before


def test_append_keeps_source_id_and_changes_digest():
    p = TransformPath("Image.423")
    before = p.digest()
    p.add("grey()")
    assert p.source_id == "Image.423"
    assert p.digest() != before


def test_steps_snapshot_is_immutable():
    p = TransformPath("id", ["a"])
    snap = p.steps
    p.add("b")
    assert snap == ("id", "a")


# -----------------------------
# digest()
# -----------------------------

def test_concrete_vector():
    p = TransformPath("Image.423")
    p.add("constrain(800x600)")
    expected = _md5("Image.423\nconstrain(800x600)")
    assert p.digest() == expected
    assert p.digest(15) == expected[:15]
    assert len(p.digest(15)) == 15


def test_known_md5_single_token():
    assert TransformPath("a").digest() == "0cc175b9c0f1b6a831c399e269772661"
    assert TransformPath("hello").digest() == "5d41402abc4b2a76b9719d911017c592"


def test_digest_is_deterministic_and_lowercase_hex():
    p = TransformPath("id", ["x", "y"])
    results = {p.digest() for _ in range(5)}
    assert len(results) == 1
    d = results.pop()
    assert len(d) == 32
    assert set(d) <= set("0123456789abcdef")


def test_equal_sequences_equal_digest_across_instances():
    a = TransformPath("id", ["x"])
    b = TransformPath("id")
    b.add("x")
    assert a == b
    assert a.digest() == b.digest()


def test_digest_is_order_sensitive():
    assert TransformPath("id", ["x", "y"]).digest() != TransformPath("id", ["y", "x"]).digest()


def test_digest_depends_on_source_id():
    assert TransformPath("Image.1", ["x"]).digest() != TransformPath("Image.2", ["x"]).digest()


def test_digest_handles_unicode():
    p = TransformPath("ภาพ.1", ["ปรับขนาด(800x600)"])
    assert p.digest() == _md5("ภาพ.1\nปรับขนาด(800x600)")


@pytest.mark.parametrize("n", range(1, 33))
def test_truncation_is_prefix(n):
    p = TransformPath("id", ["x"])
    assert p.digest(n) == p.digest()[:n]


@pytest.mark.parametrize("bad", [0, 33, -1, 1.5, "15", True, False, 100])
def test_truncation_rejects_invalid_length(bad):
    p = TransformPath("id", ["x"])
    with pytest.raises(DigestLengthError):
        p.digest(bad)  # type: ignore[arg-type]


def test_digest_does_not_mutate():
    p = TransformPath("id", ["x"])
    p.digest()
    p.digest(8)
    with pytest.raises(DigestLengthError):
        p.digest(0)
    assert p.steps == ("id", "x")


def test_newline_delimiter_collision_is_accepted():
    # Tokens are joined with "\n" and not escaped.
    a = TransformPath("a\nb", ["c"])
    b = TransformPath("a", ["b\nc"])
    assert a != b
    assert a.serialize() == b.serialize() == "a\nb\nc"
    assert a.digest() == b.digest()


# -----------------------------
# Branching / content digests
# -----------------------------

def test_copy_is_independent():
    base = TransformPath("Image.423", ["autolevel()"])
    small = base.copy()
    large = base.copy()
    small.add("scale(0.5)")
    large.add("scale(2.0)")

    assert base.steps == ("Image.423", "autolevel()")
    assert small.digest() != large.digest()
    assert small.source_id == large.source_id == "Image.423"


def test_add_content_digest_appends_md5_of_bytes():
    p = TransformPath("Image.423")
    p.add_content_digest(b"\x89PNG...")
    assert p.steps[1] == hashlib.md5(b"\x89PNG...").hexdigest()


def test_add_content_digest_rejects_text():
    p = TransformPath("Image.423")
    with pytest.raises(TransformPathValidationError):
        p.add_content_digest("not bytes")  # type: ignore[arg-type]
    assert len(p) == 1


def test_for_file_follows_content(tmp_path: Path):
    f = tmp_path / "img.raw"
    f.write_bytes(b"v1")

    p1 = TransformPath.for_file(f, source_id="Image.423")
    assert p1.source_id == "Image.423"
    assert p1.steps[1] == hashlib.md5(b"v1").hexdigest()

    f.write_bytes(b"v2")
    p2 = TransformPath.for_file(f, source_id="Image.423")
    assert p2.source_id == p1.source_id
    assert p2.digest() != p1.digest()


def test_for_file_defaults_source_id_to_path(tmp_path: Path):
    f = tmp_path / "img.raw"
    f.write_bytes(b"data")
    p = TransformPath.for_file(f)
    assert p.source_id == str(f)


def test_for_file_missing_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        TransformPath.for_file(tmp_path / "missing.raw")


# -----------------------------
# Dunder behavior
# -----------------------------

def test_paths_are_unhashable():
    with pytest.raises(TypeError):
        hash(TransformPath("id"))


def test_equality_with_other_types_is_false():
    assert TransformPath("id") != ("id",)
    assert TransformPath("id") != "id"


def test_repr_round_trips_visually():
    assert repr(TransformPath("id", ["x"])) == "TransformPath('id', ['x'])"
