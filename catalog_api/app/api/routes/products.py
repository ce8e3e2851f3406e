"""
Product endpoints.

Reads are public; writes are guarded by ``require_auth``.  ``PUT``
performs a partial update: fields left out of the body keep their
stored values.
"""

import sqlite3
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from catalog_api.app.core.db import get_db
from catalog_api.app.core.security import require_auth
from catalog_api.app.schemas.product import ProductCreate, ProductRead, ProductUpdate
from catalog_api.app.services.product_service import ProductService

router = APIRouter()


@router.get("", response_model=List[ProductRead])
async def list_products(conn: sqlite3.Connection = Depends(get_db)) -> List[ProductRead]:
    return await ProductService.list_products(conn)


@router.get("/{product_id}", response_model=ProductRead)
async def get_product(product_id: str, conn: sqlite3.Connection = Depends(get_db)) -> ProductRead:
    return await ProductService.get_product(conn, product_id)


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_auth)],
)
async def create_product(
    product: Optional[ProductCreate] = None,
    conn: sqlite3.Connection = Depends(get_db),
) -> ProductRead:
    """Create a product in an existing category.

    Returns 400 with ``Category does not exist`` if ``category_id``
    does not name a stored category.
    """
    return await ProductService.create_product(conn, product or ProductCreate())


@router.put("/{product_id}", response_model=ProductRead, dependencies=[Depends(require_auth)])
async def update_product(
    product_id: str,
    product: Optional[ProductUpdate] = None,
    conn: sqlite3.Connection = Depends(get_db),
) -> ProductRead:
    return await ProductService.update_product(conn, product_id, product or ProductUpdate())


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[Depends(require_auth)],
)
async def delete_product(product_id: str, conn: sqlite3.Connection = Depends(get_db)) -> Response:
    await ProductService.delete_product(conn, product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
