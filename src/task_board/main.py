"""FastAPI application wiring for the task board service.

Beginner terms used in this file:
- FastAPI app: the main web application object.
- Lifespan: code that runs once when the server starts (here: kicking off
  the background load of saved tasks) and once when it stops.
- app.state: a place to store shared runtime objects (settings, task store).
- Query alias: lets a Python parameter named `sort_by` read `?sort-by=...`.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Form, Query, Request, Response
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from .app.forms import build_task_from_form
from .app.loader import load_task_directory
from .app.models import TaskListResponse, TaskQuery
from .app.pipeline import apply_query
from .app.storage import TaskStore
from .app.ui import render_add_page, render_task_list
from .config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(
    *,
    store: TaskStore | None = None,
    settings_override: Settings | None = None,
) -> FastAPI:
    """Application factory.

    Passing `store` skips the startup load, so tests can serve a store they
    filled themselves. Without it the app owns a fresh store and loads
    `settings.tasks_dir` into it when the server starts.
    """
    settings = settings_override or get_settings()
    logging.getLogger("task_board").setLevel(settings.log_level.upper())
    task_store = store if store is not None else TaskStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        loader = threading.Thread(
            target=_load_in_background,
            args=(task_store, settings),
            name="task-loader",
            daemon=True,
        )
        loader.start()
        if settings.wait_for_load:
            ready = await asyncio.to_thread(task_store.wait_until_loaded, settings.load_timeout_s)
            if not ready:
                logger.warning(
                    "startup event=load_timeout timeout_s=%s tasks=%d",
                    settings.load_timeout_s,
                    len(task_store),
                )
        else:
            # Requests may be served against a partially loaded store; see /ready.
            logger.info("startup event=serving_during_load path=%s", settings.tasks_dir)
        yield

    app_lifespan = lifespan if store is None else None
    app = FastAPI(title=settings.app_name, lifespan=app_lifespan)
    app.state.settings = settings
    app.state.store = task_store

    @app.middleware("http")
    async def log_requests(request: Request, call_next: Any) -> Response:
        logger.info(
            "request method=%s path=%s query=%s",
            request.method,
            request.url.path,
            dict(request.query_params),
        )
        return await call_next(request)

    # Multiple health endpoints map to the same function for compatibility with
    # different probes/load balancers.
    @app.get("/health")
    @app.get("/healthz")
    @app.get("/live")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/ready")
    def ready() -> JSONResponse:
        current: TaskStore = app.state.store
        if current.is_loaded:
            return JSONResponse({"status": "ready", "tasks": len(current)})
        return JSONResponse({"status": "loading", "tasks": len(current)}, status_code=503)

    @app.get("/", response_class=HTMLResponse)
    def home(
        tag: str | None = None,
        title: str | None = None,
        sort_by: str | None = Query(default=None, alias="sort-by"),
        sort_order: str | None = Query(default=None, alias="sort-order"),
    ) -> str:
        query = TaskQuery(tag=tag, title=title, sort_by=sort_by, sort_order=sort_order)
        current: TaskStore = app.state.store
        tasks = apply_query(current.snapshot(), query)
        return render_task_list(tasks, query, loaded=current.is_loaded)

    @app.get("/tasks", response_model=TaskListResponse)
    def list_tasks(
        tag: str | None = None,
        title: str | None = None,
        sort_by: str | None = Query(default=None, alias="sort-by"),
        sort_order: str | None = Query(default=None, alias="sort-order"),
    ) -> TaskListResponse:
        query = TaskQuery(tag=tag, title=title, sort_by=sort_by, sort_order=sort_order)
        current: TaskStore = app.state.store
        tasks = apply_query(current.snapshot(), query)
        return TaskListResponse(total=len(tasks), loaded=current.is_loaded, tasks=tasks)

    @app.get("/add", response_class=HTMLResponse)
    def add_form() -> str:
        return render_add_page()

    # Form values are coerced rather than rejected; see app.forms.
    @app.post("/add")
    def add_task(
        title: str = Form(""),
        description: str = Form(""),
        priority: str = Form(""),
        due_date: str = Form("", alias="dueDate"),
        pinned: str | None = Form(None),
        tags: str = Form(""),
        progress: str = Form(""),
    ) -> RedirectResponse:
        task = build_task_from_form(
            {
                "title": title,
                "description": description,
                "priority": priority,
                "dueDate": due_date,
                "pinned": pinned,
                "tags": tags,
                "progress": progress,
            }
        )
        app.state.store.add(task)
        logger.info("task_add event=created title=%s pinned=%s", task.title, task.pinned)
        return RedirectResponse(url="/", status_code=303)

    return app


def _load_in_background(store: TaskStore, settings: Settings) -> None:
    """Thread target for the startup load; failures go to the module logger."""
    try:
        load_task_directory(store, settings.tasks_dir, max_workers=settings.load_workers)
    except Exception:  # noqa: BLE001
        logger.exception(
            "task_load event=failed path=%s tasks=%d", settings.tasks_dir, len(store)
        )


# Module-level app for `uvicorn task_board.main:app`.
app = create_app()
