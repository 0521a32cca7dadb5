"""Startup loader: bulk-read persisted task documents into a TaskStore.

Each `*.json` file in the tasks directory holds one task document. Files are
read and parsed concurrently and appended to the store as they finish, so the
resulting store order follows completion order, not file name order. A file
that cannot be read or parsed is logged and skipped.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from .models import Task
from .storage import TaskStore

logger = logging.getLogger(__name__)


@dataclass
class LoadReport:
    """Outcome of one load_task_directory call."""

    loaded: int = 0
    failed: int = 0
    failed_files: list[str] = field(default_factory=list)


def read_task_file(path: Path) -> Task:
    """Read and validate one persisted task document."""
    return Task.model_validate_json(path.read_text(encoding="utf-8"))


def load_task_directory(store: TaskStore, directory: Path, *, max_workers: int = 8) -> LoadReport:
    """Load every task file in `directory` into `store`, then mark it loaded."""
    report = LoadReport()
    try:
        if not directory.is_dir():
            logger.warning("task_load event=missing_directory path=%s", directory)
            return report

        paths = sorted(path for path in directory.glob("*.json") if path.is_file())
        logger.info("task_load event=start path=%s files=%d", directory, len(paths))
        if paths:
            with ThreadPoolExecutor(max_workers=max(1, max_workers)) as pool:
                futures = {pool.submit(read_task_file, path): path for path in paths}
                for future in as_completed(futures):
                    path = futures[future]
                    try:
                        task = future.result()
                    except Exception as exc:  # noqa: BLE001
                        # One unreadable or invalid document never aborts the rest.
                        _record_failure(report, path, exc)
                        continue
                    store.extend([task])
                    report.loaded += 1

        logger.info(
            "task_load event=completed path=%s loaded=%d failed=%d",
            directory,
            report.loaded,
            report.failed,
        )
        return report
    finally:
        store.mark_loaded()


def _record_failure(report: LoadReport, path: Path, exc: Exception) -> None:
    report.failed += 1
    report.failed_files.append(path.name)
    reason = "invalid_task" if isinstance(exc, ValidationError) else type(exc).__name__
    logger.warning("task_load event=skip_file file=%s reason=%s error=%s", path.name, reason, exc)
