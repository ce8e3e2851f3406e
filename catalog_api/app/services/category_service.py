"""
Service layer for categories.

Category names are unique.  The ``UNIQUE`` constraint on
``categories.name`` does the check, so creating or renaming a category
is one write that either succeeds or raises ``ConflictError``; there is
no window between checking and inserting.

A category that is still referenced by products cannot be deleted.
The foreign key on ``products.category_id`` rejects the delete and the
service reports it as ``ReferentialError``.

All queries use parameterized statements.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List

from catalog_api.app.core.db import is_foreign_key_violation, is_unique_violation
from catalog_api.app.core.errors import ConflictError, NotFoundError, ReferentialError, ValidationError
from catalog_api.app.schemas.category import CategoryRead
from catalog_api.app.services.validation import is_non_empty_string, parse_id

logger = logging.getLogger(__name__)

NAME_REQUIRED = "Category name is required and must be a non-empty string."


class CategoryService:
    """Service class for managing categories."""

    @classmethod
    async def list_categories(cls, conn: sqlite3.Connection) -> List[CategoryRead]:
        rows = conn.execute("SELECT id, name FROM categories ORDER BY id").fetchall()
        return [cls._row_to_category(row) for row in rows]

    @classmethod
    async def get_category(cls, conn: sqlite3.Connection, raw_id: str) -> CategoryRead:
        """Return the category with the given path id.

        Raises ``ValidationError`` for a malformed id and
        ``NotFoundError`` if no such category exists.
        """
        category_id = parse_id(raw_id, "category")
        row = conn.execute("SELECT id, name FROM categories WHERE id = ?", (category_id,)).fetchone()
        if not row:
            raise NotFoundError("Category not found")
        return cls._row_to_category(row)

    @classmethod
    async def create_category(cls, conn: sqlite3.Connection, name) -> CategoryRead:
        """Insert a new category and return it with its assigned id."""
        if not is_non_empty_string(name):
            raise ValidationError(NAME_REQUIRED)
        try:
            cursor = conn.execute("INSERT INTO categories (name) VALUES (?)", (name,))
            conn.commit()
        except sqlite3.IntegrityError as exc:
            conn.rollback()
            if is_unique_violation(exc):
                raise ConflictError("Category already exists") from exc
            raise
        logger.info("Created category %s (%s)", cursor.lastrowid, name)
        return CategoryRead(id=cursor.lastrowid, name=name)

    @classmethod
    async def update_category(cls, conn: sqlite3.Connection, raw_id: str, name) -> CategoryRead:
        """Rename a category.

        Renaming a category to the name of another category raises
        ``ConflictError``; renaming it to its current name succeeds.
        """
        category_id = parse_id(raw_id, "category")
        if not is_non_empty_string(name):
            raise ValidationError(NAME_REQUIRED)
        try:
            cursor = conn.execute("UPDATE categories SET name = ? WHERE id = ?", (name, category_id))
            conn.commit()
        except sqlite3.IntegrityError as exc:
            conn.rollback()
            if is_unique_violation(exc):
                raise ConflictError("Category already exists") from exc
            raise
        if cursor.rowcount == 0:
            raise NotFoundError("Category not found")
        logger.info("Updated category %s (%s)", category_id, name)
        return CategoryRead(id=category_id, name=name)

    @classmethod
    async def delete_category(cls, conn: sqlite3.Connection, raw_id: str) -> None:
        category_id = parse_id(raw_id, "category")
        try:
            cursor = conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))
            conn.commit()
        except sqlite3.IntegrityError as exc:
            conn.rollback()
            if is_foreign_key_violation(exc):
                raise ReferentialError("Category is referenced by existing products") from exc
            raise
        if cursor.rowcount == 0:
            raise NotFoundError("Category not found")
        logger.info("Deleted category %s", category_id)

    @staticmethod
    def _row_to_category(row: sqlite3.Row) -> CategoryRead:
        return CategoryRead(id=row["id"], name=row["name"])
