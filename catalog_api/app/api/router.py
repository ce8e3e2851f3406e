"""
Top‑level router.

Aggregates the resource routers under their path prefixes.  When a new
resource is added, include its router here.
"""

from fastapi import APIRouter

from .routes import auth, categories, products

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(categories.router, prefix="/categories", tags=["categories"])
router.include_router(products.router, prefix="/products", tags=["products"])
