"""
Domain errors for the order workflow

Every error carries the message returned to API clients as {"message": ...}
and the HTTP status code the API layer maps it to.

Author: TM3
Date: 2025-10-17
"""
from typing import Optional


class OrderDeskError(Exception):
    """Base class for errors surfaced to callers"""

    status_code: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(OrderDeskError):
    """Missing or malformed input fields"""

    status_code = 400


class NotFoundError(OrderDeskError):
    """An id does not resolve to a stored entity"""

    status_code = 404


class CustomerNotFoundError(NotFoundError):
    def __init__(self, customer_id: Optional[str] = None):
        super().__init__("Customer not found")
        self.customer_id = customer_id


class ProductNotFoundError(NotFoundError):
    def __init__(self, product_id: str, message: Optional[str] = None):
        super().__init__(message or f"Product not found: {product_id}")
        self.product_id = product_id


class OrderNotFoundError(NotFoundError):
    def __init__(self, order_id: Optional[str] = None):
        super().__init__("Order not found")
        self.order_id = order_id


class DuplicateEmailError(OrderDeskError):
    """A customer with the same email is already registered"""

    status_code = 400

    def __init__(self, email: str):
        super().__init__("Customer with this email already exists")
        self.email = email


class InsufficientStockError(OrderDeskError):
    """Requested quantity exceeds the product's available stock"""

    status_code = 400

    def __init__(self, product_id: str, product_name: str, requested: int, available: int):
        super().__init__(f"Insufficient stock for product: {product_name}")
        self.product_id = product_id
        self.product_name = product_name
        self.requested = requested
        self.available = available


class InvalidStatusTransitionError(OrderDeskError):
    """Raised only when terminal order statuses are enforced"""

    status_code = 409

    def __init__(self, order_id: str, current_status: str, action: str):
        super().__init__(f"Cannot {action} order in status {current_status}")
        self.order_id = order_id
        self.current_status = current_status
        self.action = action
