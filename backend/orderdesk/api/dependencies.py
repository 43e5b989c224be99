"""
FastAPI dependencies

Repositories are built once per process for the configured
STORAGE_BACKEND. Tests replace any of these through
app.dependency_overrides.
"""
from functools import lru_cache

from fastapi import Depends

from orderdesk.core.config import settings
from orderdesk.repositories.base import (
    CustomerRepositoryBase,
    OrderRepositoryBase,
    ProductRepositoryBase,
)
from orderdesk.repositories.customer_repository import CustomerRepository
from orderdesk.repositories.memory import (
    InMemoryCustomerRepository,
    InMemoryOrderRepository,
    InMemoryProductRepository,
    InMemoryStore,
)
from orderdesk.repositories.order_repository import OrderRepository
from orderdesk.repositories.product_repository import ProductRepository
from orderdesk.services.catalog_service import CatalogService
from orderdesk.services.customer_service import CustomerService
from orderdesk.services.order_workflow_service import OrderWorkflowService
from orderdesk.services.payment_gateway import PaymentGateway, SimulatedPaymentGateway

STORAGE_BACKENDS = ("postgres", "memory")


def _backend() -> str:
    backend = settings.STORAGE_BACKEND.lower()
    if backend not in STORAGE_BACKENDS:
        raise ValueError(f"Unknown storage backend: {settings.STORAGE_BACKEND}")
    return backend


@lru_cache(maxsize=None)
def get_memory_store() -> InMemoryStore:
    return InMemoryStore()


@lru_cache(maxsize=None)
def get_customer_repository() -> CustomerRepositoryBase:
    if _backend() == "memory":
        return InMemoryCustomerRepository(get_memory_store())
    return CustomerRepository()


@lru_cache(maxsize=None)
def get_product_repository() -> ProductRepositoryBase:
    if _backend() == "memory":
        return InMemoryProductRepository(get_memory_store())
    return ProductRepository()


@lru_cache(maxsize=None)
def get_order_repository() -> OrderRepositoryBase:
    if _backend() == "memory":
        return InMemoryOrderRepository(get_memory_store())
    return OrderRepository()


@lru_cache(maxsize=None)
def get_payment_gateway() -> PaymentGateway:
    return SimulatedPaymentGateway(delay_seconds=settings.PAYMENT_DELAY_SECONDS)


def get_customer_service(
    customers: CustomerRepositoryBase = Depends(get_customer_repository)
) -> CustomerService:
    return CustomerService(customers)


def get_catalog_service(
    products: ProductRepositoryBase = Depends(get_product_repository),
    orders: OrderRepositoryBase = Depends(get_order_repository)
) -> CatalogService:
    return CatalogService(products, orders)


def get_order_workflow_service(
    customers: CustomerRepositoryBase = Depends(get_customer_repository),
    products: ProductRepositoryBase = Depends(get_product_repository),
    orders: OrderRepositoryBase = Depends(get_order_repository),
    payment_gateway: PaymentGateway = Depends(get_payment_gateway)
) -> OrderWorkflowService:
    return OrderWorkflowService(
        customers,
        products,
        orders,
        payment_gateway,
        enforce_terminal_status=settings.ENFORCE_TERMINAL_STATUS
    )
