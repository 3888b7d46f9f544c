# src/todolist/api/__init__.py
"""
Web mode for the todo list (FastAPI).

- app: FastAPI factory + lifecycle hooks
- routes: REST endpoints
- deps: dependency injection helpers
"""

from .app import create_app

__all__ = ["create_app"]
