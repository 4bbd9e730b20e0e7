from __future__ import annotations

import json

import pytest

from docchat.document import Document, mode_for_path


def test_from_file_reads_default_sidecar(tmp_path):
    path = tmp_path / "chat.md"
    path.write_text("Hi\nHello\n", encoding="utf-8")
    (tmp_path / "chat.md.bounds.json").write_text(json.dumps({"response": [[3, 8]]}), encoding="utf-8")
    doc = Document.from_file(path)
    assert doc.mode == "markdown"  # nosec B101
    assert doc.response_spans == ((3, 8),)  # nosec B101
    assert doc.ignore_spans == ()  # nosec B101
    assert doc.base_dir == tmp_path.resolve()  # nosec B101


def test_from_file_without_sidecar(tmp_path):
    path = tmp_path / "notes.org"
    path.write_text("x", encoding="utf-8")
    doc = Document.from_file(path)
    assert doc.mode == "org" and doc.response_spans == ()  # nosec B101


def test_explicit_missing_sidecar_raises(tmp_path):
    path = tmp_path / "a.txt"
    path.write_text("x", encoding="utf-8")
    with pytest.raises(FileNotFoundError):
        Document.from_file(path, bounds_path=tmp_path / "nope.json")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"response_spans": ((0, 10),)},
        {"response_spans": ((2, 1),)},
        {"response_spans": ((0, 3),), "ignore_spans": ((2, 4),)},
    ],
)
def test_invalid_spans_rejected(kwargs):
    with pytest.raises(ValueError):
        Document("abcdef", **kwargs)


def test_spans_are_sorted_and_empty_ones_dropped():
    doc = Document("abcdef", response_spans=((4, 5), (0, 2), (3, 3)))
    assert doc.response_spans == ((0, 2), (4, 5))  # nosec B101


@pytest.mark.parametrize("name, mode", [("a.md", "markdown"), ("a.MARKDOWN", "markdown"), ("a.org", "org"), ("a", "text")])
def test_mode_for_path(tmp_path, name, mode):
    assert mode_for_path(tmp_path / name) == mode  # nosec B101
