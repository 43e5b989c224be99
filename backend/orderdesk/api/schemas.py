"""
Request models for the HTTP API

Fields are optional at this level so that a missing field reaches the
service and gets the same 400 message a direct caller would get. Wrong
types (e.g. a non-numeric price) are rejected here.
"""
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CustomerCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    first_name: Optional[str] = Field(None, alias="firstName", examples=["Nathan"])
    last_name: Optional[str] = Field(None, alias="lastName", examples=["Englert"])
    email: Optional[str] = Field(None, examples=["nke5100@psu.edu"])


class ProductCreate(BaseModel):
    name: Optional[str] = Field(None, examples=["Jellybean"])
    description: Optional[str] = Field(None, examples=["Tasty Jellybean"])
    price: Optional[Decimal] = Field(None, examples=[1.00])
    stock: Optional[int] = Field(None, examples=[100])


class OrderItemRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: Optional[str] = Field(None, alias="productID", description="Product ID")
    quantity: Optional[int] = Field(None, examples=[2])


class OrderCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    customer_id: Optional[str] = Field(None, alias="customerID", description="Customer placing the order")
    items: Optional[List[OrderItemRequest]] = None

    def item_dicts(self) -> list:
        return [item.model_dump(by_alias=True) for item in self.items or []]
