"""
Category endpoints.

Reads are public.  Create, update and delete pass through
``require_auth``, which only demands a token when ``AUTH_REQUIRED`` is
set.  Path ids are taken as strings so that malformed ids are answered
with ``{"error": "Invalid category ID"}`` instead of a generic
validation error.  Request bodies are optional: a request without
one is checked like an empty object, so the client still gets the
field message.
"""

import sqlite3
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from catalog_api.app.core.db import get_db
from catalog_api.app.core.security import require_auth
from catalog_api.app.schemas.category import CategoryIn, CategoryRead
from catalog_api.app.services.category_service import CategoryService

router = APIRouter()


@router.get("", response_model=List[CategoryRead])
async def list_categories(conn: sqlite3.Connection = Depends(get_db)) -> List[CategoryRead]:
    return await CategoryService.list_categories(conn)


@router.get("/{category_id}", response_model=CategoryRead)
async def get_category(category_id: str, conn: sqlite3.Connection = Depends(get_db)) -> CategoryRead:
    return await CategoryService.get_category(conn, category_id)


@router.post(
    "",
    response_model=CategoryRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_auth)],
)
async def create_category(
    category: Optional[CategoryIn] = None,
    conn: sqlite3.Connection = Depends(get_db),
) -> CategoryRead:
    """Create a category.  Names must be unique."""
    return await CategoryService.create_category(conn, (category or CategoryIn()).name)


@router.put("/{category_id}", response_model=CategoryRead, dependencies=[Depends(require_auth)])
async def update_category(
    category_id: str,
    category: Optional[CategoryIn] = None,
    conn: sqlite3.Connection = Depends(get_db),
) -> CategoryRead:
    return await CategoryService.update_category(conn, category_id, (category or CategoryIn()).name)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[Depends(require_auth)],
)
async def delete_category(category_id: str, conn: sqlite3.Connection = Depends(get_db)) -> Response:
    """Delete a category.

    Returns 400 while products still reference the category.
    """
    await CategoryService.delete_category(conn, category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
