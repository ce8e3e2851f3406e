"""
Service layer for products.

Every product belongs to a category.  The foreign key on
``products.category_id`` is what guarantees the category exists: an
insert or update naming a missing category fails inside the database
and is reported as ``ReferentialError("Category does not exist")``.

Updates are partial.  Only the fields present in the request body are
validated; they are then merged over the stored row and the merged row
is written back, so omitted fields keep their current values.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict, List

from catalog_api.app.core.db import is_foreign_key_violation
from catalog_api.app.core.errors import NotFoundError, ReferentialError, ValidationError
from catalog_api.app.schemas.product import ProductCreate, ProductRead, ProductUpdate
from catalog_api.app.services.validation import (
    is_non_empty_string,
    parse_category_id,
    parse_id,
    parse_price,
)

logger = logging.getLogger(__name__)


class ProductService:
    """Service class for managing products."""

    @classmethod
    async def list_products(cls, conn: sqlite3.Connection) -> List[ProductRead]:
        rows = conn.execute("SELECT id, name, price, category_id FROM products ORDER BY id").fetchall()
        return [cls._row_to_product(row) for row in rows]

    @classmethod
    async def get_product(cls, conn: sqlite3.Connection, raw_id: str) -> ProductRead:
        product_id = parse_id(raw_id, "product")
        row = cls._fetch(conn, product_id)
        if not row:
            raise NotFoundError("Product not found")
        return cls._row_to_product(row)

    @classmethod
    async def create_product(cls, conn: sqlite3.Connection, data: ProductCreate) -> ProductRead:
        """Validate and insert a product.

        Fields are checked in the order name, price, category id and the
        first failure is reported.
        """
        if not is_non_empty_string(data.name):
            raise ValidationError("Product name is required and must be a non-empty string.")
        price = parse_price(data.price)
        category_id = parse_category_id(data.category_id)

        try:
            cursor = conn.execute(
                "INSERT INTO products (name, price, category_id) VALUES (?, ?, ?)",
                (data.name, price, category_id),
            )
            conn.commit()
        except sqlite3.IntegrityError as exc:
            conn.rollback()
            if is_foreign_key_violation(exc):
                raise ReferentialError("Category does not exist") from exc
            raise
        logger.info("Created product %s in category %s", cursor.lastrowid, category_id)
        return ProductRead(id=cursor.lastrowid, name=data.name, price=price, category_id=category_id)

    @classmethod
    async def update_product(cls, conn: sqlite3.Connection, raw_id: str, data: ProductUpdate) -> ProductRead:
        """Apply the supplied fields of ``data`` to an existing product.

        Raises ``ValidationError`` for a malformed id or field,
        ``NotFoundError`` if the product does not exist and
        ``ReferentialError`` if a new category id does not resolve.
        """
        product_id = parse_id(raw_id, "product")
        changes = cls._validate_changes(data.supplied())

        row = cls._fetch(conn, product_id)
        if not row:
            raise NotFoundError("Product not found")
        merged = {
            "name": row["name"],
            "price": row["price"],
            "category_id": row["category_id"],
        }
        merged.update(changes)

        try:
            cursor = conn.execute(
                "UPDATE products SET name = ?, price = ?, category_id = ? WHERE id = ?",
                (merged["name"], merged["price"], merged["category_id"], product_id),
            )
            conn.commit()
        except sqlite3.IntegrityError as exc:
            conn.rollback()
            if is_foreign_key_violation(exc):
                raise ReferentialError("Category does not exist") from exc
            raise
        if cursor.rowcount == 0:
            # Deleted between the read and the write.
            raise NotFoundError("Product not found")
        logger.info("Updated product %s (%s)", product_id, ", ".join(sorted(changes)) or "no changes")
        return ProductRead(id=product_id, **merged)

    @classmethod
    async def delete_product(cls, conn: sqlite3.Connection, raw_id: str) -> None:
        product_id = parse_id(raw_id, "product")
        cursor = conn.execute("DELETE FROM products WHERE id = ?", (product_id,))
        conn.commit()
        if cursor.rowcount == 0:
            raise NotFoundError("Product not found")
        logger.info("Deleted product %s", product_id)

    @staticmethod
    def _validate_changes(supplied: Dict[str, Any]) -> Dict[str, Any]:
        changes: Dict[str, Any] = {}
        if "name" in supplied:
            if not is_non_empty_string(supplied["name"]):
                raise ValidationError("Product name must be a non-empty string.")
            changes["name"] = supplied["name"]
        if "price" in supplied:
            changes["price"] = parse_price(supplied["price"])
        if "category_id" in supplied:
            changes["category_id"] = parse_category_id(supplied["category_id"])
        return changes

    @staticmethod
    def _fetch(conn: sqlite3.Connection, product_id: int):
        return conn.execute(
            "SELECT id, name, price, category_id FROM products WHERE id = ?",
            (product_id,),
        ).fetchone()

    @staticmethod
    def _row_to_product(row: sqlite3.Row) -> ProductRead:
        return ProductRead(
            id=row["id"],
            name=row["name"],
            price=row["price"],
            category_id=row["category_id"],
        )
