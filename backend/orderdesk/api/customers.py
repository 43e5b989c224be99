"""
Customers API Endpoints
Customer registration and lookup

Author: TM3
Date: 2025-10-17
"""
from fastapi import APIRouter, Depends

from orderdesk.api.dependencies import get_customer_service
from orderdesk.api.schemas import CustomerCreate
from orderdesk.services.customer_service import CustomerService

router = APIRouter()


@router.post("", status_code=201, summary="Create a new customer")
def create_customer(
    body: CustomerCreate,
    service: CustomerService = Depends(get_customer_service)
):
    """
    Register a customer

    Returns 400 if a field is missing or the email is already registered.
    """
    customer = service.register_customer(body.first_name, body.last_name, body.email)
    return customer.to_dict()


@router.get("/{customer_id}", summary="Get a customer by ID")
def get_customer(
    customer_id: str,
    service: CustomerService = Depends(get_customer_service)
):
    return service.get_customer(customer_id).to_dict()
