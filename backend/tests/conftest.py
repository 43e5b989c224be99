"""
Pytest fixtures and configuration for OrderDesk backend tests

Services and API tests run against the in-memory repositories, which keep
the same semantics as the PostgreSQL ones (atomic decrement, unique email).
Repository SQL tests mock the psycopg2 connection instead.

Author: TM3
Date: 2025-10-17
"""
import os

# Never reach for a real database from the test suite
os.environ.setdefault("STORAGE_BACKEND", "memory")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from orderdesk.api import dependencies
from orderdesk.main import app
from orderdesk.repositories.memory import (
    InMemoryCustomerRepository,
    InMemoryOrderRepository,
    InMemoryProductRepository,
    InMemoryStore,
)
from orderdesk.services.catalog_service import CatalogService
from orderdesk.services.customer_service import CustomerService
from orderdesk.services.order_workflow_service import OrderWorkflowService
from orderdesk.services.payment_gateway import SimulatedPaymentGateway


@pytest.fixture
def store():
    """Fresh in-memory tables for each test"""
    return InMemoryStore()


@pytest.fixture
def customer_repo(store):
    return InMemoryCustomerRepository(store)


@pytest.fixture
def product_repo(store):
    return InMemoryProductRepository(store)


@pytest.fixture
def order_repo(store):
    return InMemoryOrderRepository(store)


@pytest.fixture
def instant_gateway():
    """Payment gateway that acknowledges immediately"""
    return SimulatedPaymentGateway(delay_seconds=0)


@pytest.fixture
def workflow(customer_repo, product_repo, order_repo, instant_gateway):
    return OrderWorkflowService(customer_repo, product_repo, order_repo, instant_gateway)


@pytest.fixture
def catalog(product_repo, order_repo):
    return CatalogService(product_repo, order_repo)


@pytest.fixture
def customer_service(customer_repo):
    return CustomerService(customer_repo)


@pytest.fixture
def customer(customer_repo):
    return customer_repo.create("Nathan", "Englert", "nke5100@psu.edu")


@pytest.fixture
def jellybean(product_repo):
    """Price 1.00, 100 in stock"""
    return product_repo.create("Jellybean", "Tasty Jellybean", Decimal("1.00"), 100)


@pytest.fixture
def licorice(product_repo):
    """Price 2.50, 5 in stock"""
    return product_repo.create("Licorice", "Black licorice rope", Decimal("2.50"), 5)


@pytest.fixture
def client(customer_repo, product_repo, order_repo, instant_gateway):
    """
    TestClient wired to the in-memory repositories of this test

    Unhandled errors are rendered as 500 responses instead of re-raised.
    """
    app.dependency_overrides[dependencies.get_customer_repository] = lambda: customer_repo
    app.dependency_overrides[dependencies.get_product_repository] = lambda: product_repo
    app.dependency_overrides[dependencies.get_order_repository] = lambda: order_repo
    app.dependency_overrides[dependencies.get_payment_gateway] = lambda: instant_gateway

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def sample_customer_data():
    return {
        "firstName": "Nathan",
        "lastName": "Englert",
        "email": "nke5100@psu.edu"
    }


@pytest.fixture
def sample_product_data():
    return {
        "name": "Jellybean",
        "description": "Tasty Jellybean",
        "price": 1.00,
        "stock": 100
    }
