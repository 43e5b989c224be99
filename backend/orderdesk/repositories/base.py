"""
Repository interfaces

Services program against these; the storage backend (PostgreSQL or
in-memory) is picked by configuration. Lookups return None when the row
does not exist.
"""
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional, Sequence

from orderdesk.domain.customer import Customer
from orderdesk.domain.order import Order, OrderDetail, OrderItem, OrderStatus, PaymentStatus
from orderdesk.domain.product import Product


class CustomerRepositoryBase(ABC):

    @abstractmethod
    def find_by_id(self, customer_id: str) -> Optional[Customer]:
        ...

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[Customer]:
        ...

    @abstractmethod
    def create(self, first_name: str, last_name: str, email: str) -> Customer:
        """Insert a customer; raises DuplicateEmailError if the email is taken"""
        ...


class ProductRepositoryBase(ABC):

    @abstractmethod
    def find_by_id(self, product_id: str) -> Optional[Product]:
        ...

    @abstractmethod
    def create(self, name: str, description: str, price: Decimal, stock: int) -> Product:
        ...

    @abstractmethod
    def decrement_stock(self, product_id: str, quantity: int) -> Optional[Product]:
        """
        Subtract quantity from stock if, and only if, enough is available

        The check and the subtraction are one indivisible operation.

        Returns:
            The updated product, or None if the product does not exist

        Raises:
            InsufficientStockError: stock < quantity (nothing is changed)
        """
        ...

    @abstractmethod
    def delete(self, product_id: str) -> bool:
        """Delete a product. Returns False if it did not exist"""
        ...


class OrderRepositoryBase(ABC):

    @abstractmethod
    def create(self, customer_id: str, items: Sequence[OrderItem], total_price: Decimal) -> Order:
        """Insert an order (status Pending, payment Pending) with its items"""
        ...

    @abstractmethod
    def find_by_id(self, order_id: str) -> Optional[Order]:
        ...

    @abstractmethod
    def find_all_detailed(self) -> List[OrderDetail]:
        """All orders with customer and product fields joined at read time"""
        ...

    @abstractmethod
    def set_status(self, order_id: str, status: OrderStatus) -> Optional[Order]:
        ...

    @abstractmethod
    def set_payment_status(self, order_id: str, payment_status: PaymentStatus) -> Optional[Order]:
        ...

    @abstractmethod
    def mark_paid(self, order_id: str) -> Optional[Order]:
        """Set status Completed and payment status Paid as one write"""
        ...

    @abstractmethod
    def remove_line_items_referencing(self, product_id: str) -> int:
        """
        Remove every line item for product_id across all orders

        Order status is ignored and total_price is left unchanged.

        Returns:
            Number of line items removed
        """
        ...
