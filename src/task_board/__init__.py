"""Task board service: filtered, pinned-first task list over FastAPI."""
