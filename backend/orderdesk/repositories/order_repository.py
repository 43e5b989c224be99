"""
Order Repository - Data Access Layer for Orders

Handles all database queries for orders and returns Order domain models.

Author: TM3
Date: 2025-10-17
"""
from decimal import Decimal
from typing import Dict, List, Optional, Sequence
from uuid import uuid4

from orderdesk.core.database import get_db_connection_dict_with_retry
from orderdesk.domain.customer import CustomerSummary
from orderdesk.domain.order import (
    Order,
    OrderDetail,
    OrderItem,
    OrderItemDetail,
    OrderStatus,
    PaymentStatus,
)
from orderdesk.domain.product import ProductSummary
from orderdesk.repositories.base import OrderRepositoryBase

ORDER_COLUMNS = "id, customer_id, total_price, status, payment_status, created_at, updated_at"


class OrderRepository(OrderRepositoryBase):
    """
    Repository for Order data access

    All SQL queries for orders are centralized here.
    Line items live in order_items, ordered by position.
    """

    @staticmethod
    def _map_row_to_order(row: dict, items: List[OrderItem]) -> Order:
        return Order(
            id=row['id'],
            customer_id=row['customer_id'],
            items=items,
            total_price=row['total_price'],
            status=row['status'],
            payment_status=row['payment_status'],
            created_at=row['created_at'],
            updated_at=row.get('updated_at')
        )

    @staticmethod
    def _fetch_items(cursor, order_id: str) -> List[OrderItem]:
        cursor.execute("""
            SELECT product_id, quantity
            FROM order_items
            WHERE order_id = %s
            ORDER BY position
        """, (order_id,))

        return [
            OrderItem(product_id=item['product_id'], quantity=item['quantity'])
            for item in cursor.fetchall()
        ]

    def create(self, customer_id: str, items: Sequence[OrderItem], total_price: Decimal) -> Order:
        """
        Insert an order and its line items in a single transaction

        Args:
            customer_id: Customer placing the order
            items: Line items, in request order
            total_price: Total computed at placement time

        Returns:
            The stored Order (status Pending, payment Pending)
        """
        conn = get_db_connection_dict_with_retry()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                INSERT INTO orders (id, customer_id, total_price, status, payment_status, created_at)
                VALUES (%s, %s, %s, %s, %s, NOW())
                RETURNING {ORDER_COLUMNS}
            """, (
                uuid4().hex,
                customer_id,
                total_price,
                OrderStatus.PENDING.value,
                PaymentStatus.PENDING.value
            ))
            row = cursor.fetchone()

            for position, item in enumerate(items):
                cursor.execute("""
                    INSERT INTO order_items (order_id, position, product_id, quantity)
                    VALUES (%s, %s, %s, %s)
                """, (row['id'], position, item.product_id, item.quantity))

            conn.commit()
            return self._map_row_to_order(row, list(items))

        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()

    def find_by_id(self, order_id: str) -> Optional[Order]:
        """
        Find order by ID with its line items

        Returns:
            Order or None if not found
        """
        conn = get_db_connection_dict_with_retry()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                SELECT {ORDER_COLUMNS}
                FROM orders
                WHERE id = %s
            """, (order_id,))

            row = cursor.fetchone()
            if not row:
                return None

            return self._map_row_to_order(row, self._fetch_items(cursor, order_id))

        finally:
            cursor.close()
            conn.close()

    def find_all_detailed(self) -> List[OrderDetail]:
        """
        Get all orders with customer and product details

        Customer and product fields come from the current rows (LEFT JOIN),
        not from the time the order was placed.

        Returns:
            List of OrderDetail in creation order
        """
        conn = get_db_connection_dict_with_retry()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT
                    o.id, o.customer_id, o.total_price, o.status, o.payment_status,
                    o.created_at, o.updated_at,
                    c.first_name as customer_first_name,
                    c.last_name as customer_last_name,
                    c.email as customer_email
                FROM orders o
                LEFT JOIN customers c ON o.customer_id = c.id
                ORDER BY o.created_at, o.id
            """)

            order_rows = cursor.fetchall()

            if not order_rows:
                return []

            # Get ALL order items for these orders in ONE QUERY
            order_ids = [order['id'] for order in order_rows]

            cursor.execute("""
                SELECT
                    oi.order_id, oi.product_id, oi.quantity,
                    p.id as catalog_product_id,
                    p.name as product_name,
                    p.description as product_description,
                    p.price as product_price,
                    p.stock as product_stock
                FROM order_items oi
                LEFT JOIN products p ON oi.product_id = p.id
                WHERE oi.order_id = ANY(%s)
                ORDER BY oi.order_id, oi.position
            """, (order_ids,))

            # Group items by order_id
            items_by_order: Dict[str, List[OrderItemDetail]] = {}
            for item in cursor.fetchall():
                product = None
                if item['catalog_product_id'] is not None:
                    product = ProductSummary(
                        name=item['product_name'],
                        description=item['product_description'],
                        price=item['product_price'],
                        stock=item['product_stock']
                    )
                items_by_order.setdefault(item['order_id'], []).append(
                    OrderItemDetail(
                        product_id=item['product_id'],
                        quantity=item['quantity'],
                        product=product
                    )
                )

            orders = []
            for row in order_rows:
                customer = None
                if row['customer_email'] is not None:
                    customer = CustomerSummary(
                        first_name=row['customer_first_name'],
                        last_name=row['customer_last_name'],
                        email=row['customer_email']
                    )
                orders.append(OrderDetail(
                    id=row['id'],
                    customer_id=row['customer_id'],
                    customer=customer,
                    items=items_by_order.get(row['id'], []),
                    total_price=row['total_price'],
                    status=row['status'],
                    payment_status=row['payment_status'],
                    created_at=row['created_at'],
                    updated_at=row.get('updated_at')
                ))

            return orders

        finally:
            cursor.close()
            conn.close()

    def _update_columns(self, order_id: str, **values: str) -> Optional[Order]:
        conn = get_db_connection_dict_with_retry()
        cursor = conn.cursor()

        assignments = ", ".join(f"{column} = %s" for column in values)

        try:
            cursor.execute(f"""
                UPDATE orders
                SET {assignments}, updated_at = NOW()
                WHERE id = %s
                RETURNING {ORDER_COLUMNS}
            """, (*values.values(), order_id))

            row = cursor.fetchone()
            conn.commit()
            if not row:
                return None

            return self._map_row_to_order(row, self._fetch_items(cursor, order_id))

        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()

    def set_status(self, order_id: str, status: OrderStatus) -> Optional[Order]:
        """Overwrite order status (last writer wins)"""
        return self._update_columns(order_id, status=OrderStatus(status).value)

    def set_payment_status(self, order_id: str, payment_status: PaymentStatus) -> Optional[Order]:
        """Overwrite payment status (last writer wins)"""
        return self._update_columns(order_id, payment_status=PaymentStatus(payment_status).value)

    def mark_paid(self, order_id: str) -> Optional[Order]:
        """Set status Completed and payment Paid in one UPDATE"""
        return self._update_columns(
            order_id,
            status=OrderStatus.COMPLETED.value,
            payment_status=PaymentStatus.PAID.value
        )

    def remove_line_items_referencing(self, product_id: str) -> int:
        """
        Delete line items for a product from every order

        total_price is not recomputed.

        Returns:
            Number of line items removed
        """
        conn = get_db_connection_dict_with_retry()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                DELETE FROM order_items
                WHERE product_id = %s
            """, (product_id,))

            removed = cursor.rowcount
            conn.commit()
            return removed

        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()
