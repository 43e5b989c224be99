"""
In-memory repositories

Same interfaces as the PostgreSQL repositories, backed by dicts in one
InMemoryStore. Every read-modify-write runs under the store lock, so
decrement_stock and the email uniqueness check are atomic here too.
Used with STORAGE_BACKEND=memory (local runs, tests).
"""
import threading
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Sequence
from uuid import uuid4

from orderdesk.core.exceptions import DuplicateEmailError, InsufficientStockError
from orderdesk.domain.customer import Customer, CustomerSummary
from orderdesk.domain.order import (
    Order,
    OrderDetail,
    OrderItem,
    OrderItemDetail,
    OrderStatus,
    PaymentStatus,
)
from orderdesk.domain.product import Product, ProductSummary
from orderdesk.repositories.base import (
    CustomerRepositoryBase,
    OrderRepositoryBase,
    ProductRepositoryBase,
)


class InMemoryStore:
    """Tables shared by the in-memory repositories"""

    def __init__(self):
        self.lock = threading.RLock()
        self.customers: Dict[str, Customer] = {}
        self.products: Dict[str, Product] = {}
        self.orders: Dict[str, Order] = {}


class InMemoryCustomerRepository(CustomerRepositoryBase):

    def __init__(self, store: InMemoryStore):
        self.store = store

    def find_by_id(self, customer_id: str) -> Optional[Customer]:
        return self.store.customers.get(customer_id)

    def find_by_email(self, email: str) -> Optional[Customer]:
        with self.store.lock:
            for customer in self.store.customers.values():
                if customer.email == email:
                    return customer
        return None

    def create(self, first_name: str, last_name: str, email: str) -> Customer:
        with self.store.lock:
            if self.find_by_email(email):
                raise DuplicateEmailError(email)

            customer = Customer(
                id=uuid4().hex,
                first_name=first_name,
                last_name=last_name,
                email=email,
                created_at=datetime.now()
            )
            self.store.customers[customer.id] = customer
            return customer


class InMemoryProductRepository(ProductRepositoryBase):

    def __init__(self, store: InMemoryStore):
        self.store = store

    def find_by_id(self, product_id: str) -> Optional[Product]:
        return self.store.products.get(product_id)

    def create(self, name: str, description: str, price: Decimal, stock: int) -> Product:
        product = Product(
            id=uuid4().hex,
            name=name,
            description=description,
            price=price,
            stock=stock,
            created_at=datetime.now()
        )
        with self.store.lock:
            self.store.products[product.id] = product
        return product

    def decrement_stock(self, product_id: str, quantity: int) -> Optional[Product]:
        with self.store.lock:
            product = self.store.products.get(product_id)
            if product is None:
                return None

            if not product.has_stock_for(quantity):
                raise InsufficientStockError(
                    product_id=product_id,
                    product_name=product.name,
                    requested=quantity,
                    available=product.stock
                )

            updated = product.model_copy(update={
                'stock': product.stock - quantity,
                'updated_at': datetime.now()
            })
            self.store.products[product_id] = updated
            return updated

    def delete(self, product_id: str) -> bool:
        with self.store.lock:
            return self.store.products.pop(product_id, None) is not None


class InMemoryOrderRepository(OrderRepositoryBase):

    def __init__(self, store: InMemoryStore):
        self.store = store

    def create(self, customer_id: str, items: Sequence[OrderItem], total_price: Decimal) -> Order:
        order = Order(
            id=uuid4().hex,
            customer_id=customer_id,
            items=list(items),
            total_price=total_price,
            status=OrderStatus.PENDING,
            payment_status=PaymentStatus.PENDING,
            created_at=datetime.now()
        )
        with self.store.lock:
            self.store.orders[order.id] = order
        return order

    def find_by_id(self, order_id: str) -> Optional[Order]:
        return self.store.orders.get(order_id)

    def find_all_detailed(self) -> List[OrderDetail]:
        with self.store.lock:
            orders = list(self.store.orders.values())
            customers = dict(self.store.customers)
            products = dict(self.store.products)

        details = []
        for order in orders:
            customer = customers.get(order.customer_id)
            items = []
            for item in order.items:
                product = products.get(item.product_id)
                items.append(OrderItemDetail(
                    product_id=item.product_id,
                    quantity=item.quantity,
                    product=ProductSummary(
                        name=product.name,
                        description=product.description,
                        price=product.price,
                        stock=product.stock
                    ) if product else None
                ))
            details.append(OrderDetail(
                id=order.id,
                customer_id=order.customer_id,
                customer=CustomerSummary(
                    first_name=customer.first_name,
                    last_name=customer.last_name,
                    email=customer.email
                ) if customer else None,
                items=items,
                total_price=order.total_price,
                status=order.status,
                payment_status=order.payment_status,
                created_at=order.created_at,
                updated_at=order.updated_at
            ))
        return details

    def _update(self, order_id: str, **changes) -> Optional[Order]:
        with self.store.lock:
            order = self.store.orders.get(order_id)
            if order is None:
                return None

            changes['updated_at'] = datetime.now()
            updated = order.model_copy(update=changes)
            self.store.orders[order_id] = updated
            return updated

    def set_status(self, order_id: str, status: OrderStatus) -> Optional[Order]:
        return self._update(order_id, status=OrderStatus(status))

    def set_payment_status(self, order_id: str, payment_status: PaymentStatus) -> Optional[Order]:
        return self._update(order_id, payment_status=PaymentStatus(payment_status))

    def mark_paid(self, order_id: str) -> Optional[Order]:
        return self._update(
            order_id,
            status=OrderStatus.COMPLETED,
            payment_status=PaymentStatus.PAID
        )

    def remove_line_items_referencing(self, product_id: str) -> int:
        removed = 0
        with self.store.lock:
            for order_id, order in list(self.store.orders.items()):
                kept = [item for item in order.items if item.product_id != product_id]
                if len(kept) != len(order.items):
                    removed += len(order.items) - len(kept)
                    self.store.orders[order_id] = order.model_copy(update={
                        'items': kept,
                        'updated_at': datetime.now()
                    })
        return removed
