"""
Customer Service
Registration and lookup of customers
"""
import logging
from typing import Optional

from orderdesk.core.exceptions import CustomerNotFoundError, ValidationError
from orderdesk.domain.customer import Customer
from orderdesk.repositories.base import CustomerRepositoryBase

logger = logging.getLogger(__name__)


class CustomerService:
    """Service for customer business logic"""

    def __init__(self, customers: CustomerRepositoryBase):
        self.customers = customers

    def register_customer(
        self,
        first_name: Optional[str],
        last_name: Optional[str],
        email: Optional[str]
    ) -> Customer:
        """
        Register a new customer

        Raises:
            ValidationError: a field is missing or empty
            DuplicateEmailError: the email is already registered
        """
        if not first_name or not last_name or not email:
            raise ValidationError("First name, last name, and email are required")

        customer = self.customers.create(first_name, last_name, email)
        logger.info(f"Registered customer {customer.id}")
        return customer

    def get_customer(self, customer_id: str) -> Customer:
        customer = self.customers.find_by_id(customer_id)
        if customer is None:
            raise CustomerNotFoundError(customer_id)
        return customer
