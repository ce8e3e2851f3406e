"""
Pydantic schemas for products.

``ProductCreate`` and ``ProductUpdate`` accept raw JSON values and
leave validation to ``ProductService``.  On update, Pydantic's
``model_fields_set`` records which fields were actually sent, so an
explicit ``0`` or ``""`` is validated (and rejected) rather than
mistaken for an omitted field.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductCreate(BaseModel):
    """Body of ``POST /products``."""

    name: Any = Field(None, examples=["Runner"])
    price: Any = Field(None, description="Strictly positive price", examples=[49.99])
    category_id: Any = Field(None, description="Identifier of an existing category", examples=[1])


class ProductUpdate(BaseModel):
    """Body of ``PUT /products/{id}``.

    All fields are optional; only the fields present in the request are
    validated and written.
    """

    name: Any = Field(None, examples=["Runner v2"])
    price: Any = Field(None, examples=[59.99])
    category_id: Any = Field(None, examples=[1])

    def supplied(self) -> Dict[str, Any]:
        """Return the fields present in the request body."""
        return {field: getattr(self, field) for field in self.model_fields_set}


class ProductRead(BaseModel):
    id: int
    name: str
    price: float
    category_id: Optional[int]

    model_config = ConfigDict(from_attributes=True)
