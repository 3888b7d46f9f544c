"""Minimal todo list manager: SQLite-backed task CRUD with web and cli modes."""
