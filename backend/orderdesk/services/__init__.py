"""
Service Layer - Business Logic

Author: TM3
Date: 2025-10-17
"""
from orderdesk.services.catalog_service import CatalogService
from orderdesk.services.customer_service import CustomerService
from orderdesk.services.order_workflow_service import OrderWorkflowService
from orderdesk.services.payment_gateway import PaymentGateway, SimulatedPaymentGateway

__all__ = [
    'CatalogService',
    'CustomerService',
    'OrderWorkflowService',
    'PaymentGateway',
    'SimulatedPaymentGateway',
]
