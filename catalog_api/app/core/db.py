"""
SQLite database integration.

This module provides functions for opening a connection
(``get_connection``), creating the schema on application start
(``init_db``) and the ``get_db`` dependency that hands each request
its own connection.  Services receive that connection as a parameter;
nothing here keeps a process‑wide handle.

Uniqueness of user emails and category names, and the link from
products to categories, are enforced by table constraints so that a
single write either succeeds or fails with ``sqlite3.IntegrityError``.
``is_unique_violation`` and ``is_foreign_key_violation`` tell the two
failures apart.
"""

import os
import sqlite3
from pathlib import Path
from typing import Iterator

from fastapi import Request

from .config import Settings

SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    email TEXT NOT NULL UNIQUE,
    pass TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS categories (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE
);

CREATE TABLE IF NOT EXISTS products (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    price REAL NOT NULL CHECK (price > 0),
    category_id INTEGER NOT NULL,
    FOREIGN KEY(category_id) REFERENCES categories(id)
);

CREATE INDEX IF NOT EXISTS idx_products_category_id ON products(category_id);
"""


def get_database_path(settings: Settings) -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path (or ``:memory:``),
    use it directly.  Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if db_url == ":memory:" or os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection(db_path: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be read by name.
    Foreign key enforcement is off by default in SQLite and has to be
    switched on for every connection.  The connection may be closed
    from a different worker thread than the one that opened it, hence
    ``check_same_thread=False``; it is still used by one request only.
    """
    conn = sqlite3.connect(db_path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_db(db_path: str) -> None:
    """Create the ``users``, ``categories`` and ``products`` tables."""
    conn = get_connection(db_path)
    try:
        conn.executescript(SCHEMA)
        conn.commit()
    finally:
        conn.close()


def get_db(request: Request) -> Iterator[sqlite3.Connection]:
    """FastAPI dependency yielding a per‑request connection."""
    conn = get_connection(request.app.state.database_path)
    try:
        yield conn
    finally:
        conn.close()


def is_unique_violation(exc: sqlite3.IntegrityError) -> bool:
    return "UNIQUE constraint failed" in str(exc)


def is_foreign_key_violation(exc: sqlite3.IntegrityError) -> bool:
    return "FOREIGN KEY constraint failed" in str(exc)
