from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from task_board.app.loader import load_task_directory, read_task_file
from task_board.app.storage import TaskStore


def _write(directory: Path, name: str, payload: object) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    text = payload if isinstance(payload, str) else json.dumps(payload)
    (directory / name).write_text(text, encoding="utf-8")


def test_loads_every_valid_file(tmp_path: Path) -> None:
    _write(tmp_path, "a.json", {"title": "Alpha", "priority": 2, "due-date": "2024-03-01"})
    _write(tmp_path, "b.json", {"title": "Beta", "pinned": True, "tags": ["x", "y"]})
    _write(tmp_path, "notes.txt", "ignored")
    store = TaskStore()

    report = load_task_directory(store, tmp_path, max_workers=2)

    assert report.loaded == 2
    assert report.failed == 0
    assert store.is_loaded
    assert sorted(task.title for task in store.snapshot()) == ["Alpha", "Beta"]


def test_bad_files_are_skipped_and_logged(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    _write(tmp_path, "good.json", {"title": "Good"})
    _write(tmp_path, "broken.json", "{not json")
    _write(tmp_path, "wrong_shape.json", ["a", "list"])
    store = TaskStore()

    with caplog.at_level(logging.WARNING, logger="task_board.app.loader"):
        report = load_task_directory(store, tmp_path)

    assert report.loaded == 1
    assert report.failed == 2
    assert sorted(report.failed_files) == ["broken.json", "wrong_shape.json"]
    assert [task.title for task in store.snapshot()] == ["Good"]
    assert "skip_file file=broken.json" in caplog.text
    assert store.is_loaded


def test_missing_directory_still_marks_loaded(tmp_path: Path) -> None:
    store = TaskStore()
    report = load_task_directory(store, tmp_path / "absent")
    assert report.loaded == 0
    assert store.is_loaded
    assert store.snapshot() == []


def test_read_task_file_parses_document(tmp_path: Path) -> None:
    _write(tmp_path, "t.json", {"title": "Solo", "priority": "4", "progress": 50})
    task = read_task_file(tmp_path / "t.json")
    assert task.title == "Solo"
    assert task.priority == 4
    assert task.progress == 50


def test_wrongly_typed_tags_skip_only_that_file(tmp_path: Path) -> None:
    for index in range(20):
        _write(tmp_path, f"good_{index:02d}.json", {"title": f"Good {index}"})
    _write(tmp_path, "a_bad.json", {"title": "bad", "tags": 5})
    store = TaskStore()

    report = load_task_directory(store, tmp_path, max_workers=1)

    assert report.loaded == 20
    assert report.failed_files == ["a_bad.json"]
    assert len(store) == 20
    assert store.is_loaded
