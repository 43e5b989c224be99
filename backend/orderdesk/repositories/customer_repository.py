"""
Customer Repository - Data Access Layer for Customers

Email uniqueness is checked before inserting and backed by the UNIQUE
constraint on customers.email, which also covers the concurrent case.

Author: TM3
Date: 2025-10-17
"""
from typing import Optional
from uuid import uuid4

from psycopg2 import errors

from orderdesk.core.database import get_db_connection_dict_with_retry
from orderdesk.core.exceptions import DuplicateEmailError
from orderdesk.domain.customer import Customer
from orderdesk.repositories.base import CustomerRepositoryBase

CUSTOMER_COLUMNS = "id, first_name, last_name, email, created_at, updated_at"


class CustomerRepository(CustomerRepositoryBase):
    """Repository for Customer data access"""

    @staticmethod
    def _map_row_to_customer(row: dict) -> Customer:
        return Customer(
            id=row['id'],
            first_name=row['first_name'],
            last_name=row['last_name'],
            email=row['email'],
            created_at=row['created_at'],
            updated_at=row.get('updated_at')
        )

    def find_by_id(self, customer_id: str) -> Optional[Customer]:
        conn = get_db_connection_dict_with_retry()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                SELECT {CUSTOMER_COLUMNS}
                FROM customers
                WHERE id = %s
            """, (customer_id,))

            row = cursor.fetchone()
            return self._map_row_to_customer(row) if row else None

        finally:
            cursor.close()
            conn.close()

    def find_by_email(self, email: str) -> Optional[Customer]:
        conn = get_db_connection_dict_with_retry()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                SELECT {CUSTOMER_COLUMNS}
                FROM customers
                WHERE email = %s
            """, (email,))

            row = cursor.fetchone()
            return self._map_row_to_customer(row) if row else None

        finally:
            cursor.close()
            conn.close()

    def create(self, first_name: str, last_name: str, email: str) -> Customer:
        """
        Insert a new customer

        Raises:
            DuplicateEmailError: if a customer with this email exists
        """
        if self.find_by_email(email):
            raise DuplicateEmailError(email)

        conn = get_db_connection_dict_with_retry()
        cursor = conn.cursor()

        try:
            cursor.execute(f"""
                INSERT INTO customers (id, first_name, last_name, email, created_at)
                VALUES (%s, %s, %s, %s, NOW())
                RETURNING {CUSTOMER_COLUMNS}
            """, (uuid4().hex, first_name, last_name, email))

            row = cursor.fetchone()
            conn.commit()
            return self._map_row_to_customer(row)

        except errors.UniqueViolation:
            # Lost the race against a concurrent registration
            conn.rollback()
            raise DuplicateEmailError(email)
        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()
