from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from task_board.app.storage import TaskStore
from task_board.config.settings import Settings
from task_board.main import create_app

from .fakes import sample_tasks


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(tasks_dir=tmp_path / "saved-tasks", wait_for_load=True, load_timeout_s=5.0)


@pytest.fixture
def store() -> TaskStore:
    return TaskStore(sample_tasks(), loaded=True)


@pytest.fixture
def client(store: TaskStore, settings: Settings) -> Iterator[TestClient]:
    app = create_app(store=store, settings_override=settings)
    with TestClient(app) as test_client:
        yield test_client
