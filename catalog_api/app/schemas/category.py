"""
Pydantic schemas for categories.

A category is just a unique name.  The request model accepts any JSON
value for ``name`` so that ``CategoryService`` can reject non-strings
with the same message as empty strings.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CategoryIn(BaseModel):
    """Body of ``POST /categories`` and ``PUT /categories/{id}``."""

    name: Any = Field(None, description="Category name, unique across categories", examples=["Shoes"])


class CategoryRead(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)
