"""
Orders API Endpoints
Order placement, cancellation, payment and listing

Author: TM3
Date: 2025-10-17
"""
from fastapi import APIRouter, Depends

from orderdesk.api.dependencies import get_order_workflow_service
from orderdesk.api.schemas import OrderCreate
from orderdesk.services.order_workflow_service import OrderWorkflowService

router = APIRouter()


@router.post("", status_code=201, summary="Create a new order")
def create_order(
    body: OrderCreate,
    service: OrderWorkflowService = Depends(get_order_workflow_service)
):
    """
    Place an order, taking each item's quantity out of stock

    Returns:
    - 201 with the order
    - 400 on missing fields or insufficient stock
    - 404 if the customer or a product does not exist
    """
    items = body.item_dicts() if body.items is not None else None
    order = service.place_order(body.customer_id, items)
    return order.to_dict()


@router.get("", summary="Get all current orders with customer and product details")
def get_orders(
    service: OrderWorkflowService = Depends(get_order_workflow_service)
):
    """
    Get all orders

    Customer and product details are the current values, not the ones at
    order time; totalPrice is what was charged.
    """
    return [order.to_dict() for order in service.list_orders()]


@router.get("/{order_id}", summary="Get an order by ID")
def get_order(
    order_id: str,
    service: OrderWorkflowService = Depends(get_order_workflow_service)
):
    return service.get_order(order_id).to_dict()


@router.put("/{order_id}/cancel", summary="Cancel an order by ID")
def cancel_order(
    order_id: str,
    service: OrderWorkflowService = Depends(get_order_workflow_service)
):
    return service.cancel_order(order_id).to_dict()


@router.post("/{order_id}/pay", summary="Submit payment for an order by ID")
async def pay_order(
    order_id: str,
    service: OrderWorkflowService = Depends(get_order_workflow_service)
):
    """
    Pay an order

    Responds after the payment gateway acknowledges (a fixed delay with the
    simulated gateway), with status Completed and paymentStatus Paid.
    """
    order = await service.pay_order(order_id)
    return order.to_dict()
