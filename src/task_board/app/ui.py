from __future__ import annotations

from collections.abc import Sequence
from html import escape

from .models import SORT_ASC, SORT_BY_DUE_DATE, SORT_BY_PRIORITY, SORT_DESC, Task, TaskQuery

_STYLE = """
  <style>
    :root {
      --bg: #f3efe6;
      --panel: #fffaf0;
      --ink: #112433;
      --muted: #5c6b74;
      --accent: #0f8b8d;
      --line: #d7d1c3;
      --pin: #b36b00;
    }
    * { box-sizing: border-box; }
    body {
      margin: 0;
      min-height: 100vh;
      font-family: "Space Grotesk", sans-serif;
      color: var(--ink);
      background: var(--bg);
    }
    .wrap {
      max-width: 960px;
      margin: 24px auto;
      padding: 0 16px 24px;
      display: grid;
      gap: 16px;
    }
    .hero, .card {
      background: var(--panel);
      border: 1px solid var(--line);
      border-radius: 16px;
      padding: 16px;
    }
    .hero { display: flex; justify-content: space-between; align-items: center; }
    .title { margin: 0; font-size: 1.6rem; }
    .sub { margin: 6px 0 0; color: var(--muted); }
    .row { display: flex; gap: 10px; flex-wrap: wrap; align-items: end; }
    label { display: block; margin-bottom: 6px; font-weight: 700; font-size: 0.9rem; }
    input, select, textarea {
      border: 1px solid var(--line);
      border-radius: 10px;
      padding: 8px 10px;
      font-size: 0.9rem;
      background: #fff;
      color: var(--ink);
    }
    button, .button {
      border: none;
      border-radius: 10px;
      padding: 9px 14px;
      font-weight: 700;
      background: var(--accent);
      color: #fff;
      text-decoration: none;
      cursor: pointer;
    }
    .task { border-top: 1px solid var(--line); padding: 12px 0; }
    .task h2 { margin: 0 0 4px; font-size: 1.1rem; }
    .pinned h2::before { content: "\\1F4CC  "; color: var(--pin); }
    .meta { color: var(--muted); font-size: 0.85rem; }
    .tag {
      display: inline-block;
      border: 1px solid var(--line);
      border-radius: 999px;
      padding: 2px 8px;
      margin-right: 4px;
      font-size: 0.78rem;
    }
    .notice { color: var(--pin); }
  </style>
"""


def _page(title: str, body: str) -> str:
    return f"""
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{escape(title)}</title>
{_STYLE}
</head>
<body>
  <main class="wrap">
{body}
  </main>
</body>
</html>
"""


def _option(value: str, label: str, selected: str | None) -> str:
    marker = " selected" if value == (selected or "") else ""
    return f'<option value="{escape(value)}"{marker}>{escape(label)}</option>'


def _render_task(task: Task) -> str:
    css = "task pinned" if task.pinned else "task"
    due = task.due_date.strftime("%Y-%m-%d %H:%M UTC") if task.due_date else "none"
    priority = "none" if task.priority is None else str(task.priority)
    tags = "".join(f'<span class="tag">{escape(tag)}</span>' for tag in task.tags)
    progress = "" if task.progress is None else escape(str(task.progress))
    return f"""
      <article class="{css}">
        <h2>{escape(task.title)}</h2>
        <p>{escape(task.description)}</p>
        <p class="meta">Priority: {priority} &middot; Due: {due} &middot; Progress: {progress}</p>
        <div>{tags}</div>
      </article>"""


def render_task_list(tasks: Sequence[Task], query: TaskQuery, *, loaded: bool = True) -> str:
    """HTML page with filter/sort controls and the ordered task list."""
    items = "".join(_render_task(task) for task in tasks) or '<p class="sub">No tasks.</p>'
    notice = "" if loaded else '<p class="notice">Still loading saved tasks; list may be partial.</p>'
    sort_by_options = "".join(
        [
            _option("", "(none)", query.sort_by),
            _option(SORT_BY_DUE_DATE, "Due date", query.sort_by),
            _option(SORT_BY_PRIORITY, "Priority", query.sort_by),
        ]
    )
    sort_order_options = "".join(
        [
            _option("", "(none)", query.sort_order),
            _option(SORT_ASC, "Ascending", query.sort_order),
            _option(SORT_DESC, "Descending", query.sort_order),
        ]
    )
    body = f"""
    <section class="hero">
      <div>
        <h1 class="title">Task Board</h1>
        <p class="sub">Pinned tasks always stay on top.</p>
      </div>
      <a class="button" href="/add">Add Task</a>
    </section>

    <section class="card">
      <form method="get" action="/" class="row">
        <div>
          <label for="title">Title</label>
          <input id="title" name="title" value="{escape(query.title or '')}">
        </div>
        <div>
          <label for="tag">Tag</label>
          <input id="tag" name="tag" value="{escape(query.tag or '')}">
        </div>
        <div>
          <label for="sort-by">Sort by</label>
          <select id="sort-by" name="sort-by">{sort_by_options}</select>
        </div>
        <div>
          <label for="sort-order">Order</label>
          <select id="sort-order" name="sort-order">{sort_order_options}</select>
        </div>
        <button type="submit">Apply</button>
      </form>
    </section>

    <section class="card">
      {notice}{items}
    </section>"""
    return _page("Task Board", body)


def render_add_page() -> str:
    """HTML form posting to /add."""
    body = """
    <section class="hero">
      <div>
        <h1 class="title">Add Task</h1>
        <p class="sub">Pinned tasks are placed at the top of the list.</p>
      </div>
      <a class="button" href="/">Back</a>
    </section>

    <section class="card">
      <form method="post" action="/add">
        <p><label for="title">Title</label><input id="title" name="title" required></p>
        <p>
          <label for="description">Description</label>
          <textarea id="description" name="description"></textarea>
        </p>
        <p><label for="priority">Priority</label><input id="priority" name="priority" type="number"></p>
        <p><label for="dueDate">Due date</label><input id="dueDate" name="dueDate" type="date"></p>
        <p><label for="tags">Tags (comma separated)</label><input id="tags" name="tags"></p>
        <p><label for="progress">Progress</label><input id="progress" name="progress"></p>
        <p><label><input name="pinned" type="checkbox" value="true"> Pinned</label></p>
        <button type="submit">Save</button>
      </form>
    </section>"""
    return _page("Add Task", body)
