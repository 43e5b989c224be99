"""
Domain Layer - Business Entities

This layer contains Pydantic models representing business entities.
These models enforce type safety and validation across the application.

Author: TM3
Date: 2025-10-17
"""
from orderdesk.domain.customer import Customer, CustomerSummary
from orderdesk.domain.product import Product, ProductSummary
from orderdesk.domain.order import (
    Order,
    OrderDetail,
    OrderItem,
    OrderItemDetail,
    OrderStatus,
    PaymentStatus,
)

__all__ = [
    'Customer',
    'CustomerSummary',
    'Product',
    'ProductSummary',
    'Order',
    'OrderDetail',
    'OrderItem',
    'OrderItemDetail',
    'OrderStatus',
    'PaymentStatus',
]
