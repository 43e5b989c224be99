"""
Order Domain Models

Represents order-related entities.
These are the single source of truth for order data structure.

Author: TM3
Date: 2025-10-17
"""
from enum import Enum
from pydantic import Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from orderdesk.domain.base import DomainModel
from orderdesk.domain.customer import CustomerSummary
from orderdesk.domain.product import ProductSummary


class OrderStatus(str, Enum):
    """Pending -> Completed | Cancelled"""

    PENDING = "Pending"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not OrderStatus.PENDING


class PaymentStatus(str, Enum):
    """Pending -> Paid"""

    PENDING = "Pending"
    PAID = "Paid"


class OrderItem(DomainModel):
    """
    Order Item domain model - a line item in an order

    Fields:
        product_id: Reference to product catalog
        quantity: Number of units ordered (at least 1)
    """

    product_id: str = Field(..., alias="productID", description="Product ID")
    quantity: int = Field(..., description="Quantity ordered", ge=1)


class Order(DomainModel):
    """
    Order domain model - represents a customer order

    total_price is fixed when the order is placed, from the prices at that
    moment. Pruning line items after a product deletion does not change it.

    Fields:
        id: Order ID
        customer_id: Reference to customer
        items: Ordered line items
        total_price: Sum of price x quantity at placement time
        status: Pending, Completed or Cancelled
        payment_status: Pending or Paid
        created_at: When order was created
        updated_at: When order was last updated
    """

    id: str = Field(..., description="Order ID")
    customer_id: str = Field(..., alias="customerID", description="Customer ID")
    items: List[OrderItem] = Field(default_factory=list, description="Order items")
    total_price: Decimal = Field(..., alias="totalPrice", description="Total order amount", ge=0)
    status: OrderStatus = Field(OrderStatus.PENDING, description="Order status")
    payment_status: PaymentStatus = Field(
        PaymentStatus.PENDING, alias="paymentStatus", description="Payment status"
    )
    created_at: Optional[datetime] = Field(None, alias="createdAt", description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt", description="Last update timestamp")

    @property
    def item_count(self) -> int:
        """Number of line items"""
        return len(self.items)

    @property
    def total_quantity(self) -> int:
        """Total quantity of all items"""
        return sum(item.quantity for item in self.items)


class OrderItemDetail(OrderItem):
    """Line item with the referenced product's current fields (None if deleted)"""

    product: Optional[ProductSummary] = Field(None, description="Product (from JOIN)")


class OrderDetail(Order):
    """
    Order with customer and products expanded at read time

    The expanded fields reflect current customer/product state, so the
    product price shown may differ from what total_price was computed with.
    """

    customer: Optional[CustomerSummary] = Field(None, description="Customer (from JOIN)")
    items: List[OrderItemDetail] = Field(default_factory=list, description="Order items")
