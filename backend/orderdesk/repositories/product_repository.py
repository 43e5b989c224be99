"""
Product Repository - Data Access Layer for Products

Handles all database queries for products and returns Product domain models.

Author: TM3
Date: 2025-10-17
"""
from decimal import Decimal
from typing import Optional
from uuid import uuid4

from orderdesk.core.database import get_db_connection_dict_with_retry
from orderdesk.core.exceptions import InsufficientStockError
from orderdesk.domain.product import Product
from orderdesk.repositories.base import ProductRepositoryBase

PRODUCT_COLUMNS = "id, name, description, price, stock, created_at, updated_at"


class ProductRepository(ProductRepositoryBase):
    """
    Repository for Product data access

    All SQL queries for products are centralized here.
    Returns Product domain models, not raw dictionaries.
    """

    @staticmethod
    def _map_row_to_product(row: dict) -> Product:
        """Helper method to map database row to Product domain model"""
        return Product(
            id=row['id'],
            name=row['name'],
            description=row['description'],
            price=row['price'],
            stock=row['stock'],
            created_at=row['created_at'],
            updated_at=row.get('updated_at')
        )

    def find_by_id(self, product_id: str) -> Optional[Product]:
        """
        Find product by ID

        Args:
            product_id: Product ID

        Returns:
            Product or None if not found
        """
        conn = get_db_connection_dict_with_retry()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                SELECT {PRODUCT_COLUMNS}
                FROM products
                WHERE id = %s
            """, (product_id,))

            row = cursor.fetchone()
            if not row:
                return None

            return self._map_row_to_product(row)

        finally:
            cursor.close()
            conn.close()

    def create(self, name: str, description: str, price: Decimal, stock: int) -> Product:
        """
        Insert a new product

        Returns:
            The stored Product
        """
        conn = get_db_connection_dict_with_retry()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                INSERT INTO products (id, name, description, price, stock, created_at)
                VALUES (%s, %s, %s, %s, %s, NOW())
                RETURNING {PRODUCT_COLUMNS}
            """, (uuid4().hex, name, description, price, stock))

            row = cursor.fetchone()
            conn.commit()
            return self._map_row_to_product(row)

        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()

    def decrement_stock(self, product_id: str, quantity: int) -> Optional[Product]:
        """
        Atomically take quantity units out of stock

        The availability check is part of the UPDATE's WHERE clause, so two
        concurrent orders can never both pass it for the same last units.

        Args:
            product_id: Product ID
            quantity: Units to subtract

        Returns:
            Updated Product, or None if the product does not exist

        Raises:
            InsufficientStockError: if stock < quantity (stock is unchanged)
        """
        conn = get_db_connection_dict_with_retry()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                UPDATE products
                SET stock = stock - %s, updated_at = NOW()
                WHERE id = %s AND stock >= %s
                RETURNING {PRODUCT_COLUMNS}
            """, (quantity, product_id, quantity))

            row = cursor.fetchone()
            conn.commit()

            if row:
                return self._map_row_to_product(row)

            # Nothing updated: either the product is gone or stock is short
            cursor.execute("""
                SELECT id, name, stock
                FROM products
                WHERE id = %s
            """, (product_id,))

            current = cursor.fetchone()
            if not current:
                return None

            raise InsufficientStockError(
                product_id=product_id,
                product_name=current['name'],
                requested=quantity,
                available=current['stock']
            )

        except InsufficientStockError:
            raise
        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()

    def delete(self, product_id: str) -> bool:
        """
        Delete a product by ID

        Returns:
            True if a row was deleted, False if it did not exist
        """
        conn = get_db_connection_dict_with_retry()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                DELETE FROM products
                WHERE id = %s
            """, (product_id,))

            deleted = cursor.rowcount > 0
            conn.commit()
            return deleted

        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()
