"""
Product Domain Model

Represents a product entity in the catalog.
This is the single source of truth for product data structure.

Author: TM3
Date: 2025-10-17
"""
from pydantic import Field
from typing import Optional
from datetime import datetime
from decimal import Decimal

from orderdesk.domain.base import DomainModel


class Product(DomainModel):
    """
    Product domain model - represents a product in our catalog

    Fields:
        id: Product ID (opaque string)
        name: Product name
        description: Product description
        price: Current unit price
        stock: Units available; never negative
        created_at: When product was created
        updated_at: When product was last updated (stock decrements included)
    """

    id: str = Field(..., description="Product ID")
    name: str = Field(..., description="Product name")
    description: str = Field(..., description="Product description")
    price: Decimal = Field(..., description="Unit price", ge=0)
    stock: int = Field(..., description="Units in stock", ge=0)
    created_at: Optional[datetime] = Field(None, alias="createdAt", description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt", description="Last update timestamp")

    @property
    def is_out_of_stock(self) -> bool:
        """Check if product has no units left"""
        return self.stock == 0

    def has_stock_for(self, quantity: int) -> bool:
        return self.stock >= quantity


class ProductSummary(DomainModel):
    """Product fields shown inline in the expanded order listing (current values)"""

    name: str
    description: str
    price: Decimal
    stock: int
