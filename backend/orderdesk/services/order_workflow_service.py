"""
Order Workflow Service
Places, cancels and pays orders

Placement walks the line items in request order. For each one it looks the
product up, takes the quantity out of stock with the repository's atomic
conditional decrement, and adds price x quantity to the total using the
price returned by that decrement. The order is stored only after every
item succeeded.

There is no rollback across line items: if item 3 of 5 fails, items 1-2
stay decremented and no order is created. The decrements already applied
are logged so they can be reconciled by hand.

Status updates are last-writer-wins. By default cancel and pay overwrite
whatever status the order has; with enforce_terminal_status=True,
Completed and Cancelled become final.

Author: TM3
Date: 2025-10-17
"""
import logging
from decimal import Decimal
from typing import Any, List, Optional, Sequence

from fastapi.concurrency import run_in_threadpool

from orderdesk.core.exceptions import (
    CustomerNotFoundError,
    InvalidStatusTransitionError,
    OrderNotFoundError,
    ProductNotFoundError,
    ValidationError,
)
from orderdesk.domain.base import MAX_AMOUNT, MAX_INTEGER
from orderdesk.domain.order import Order, OrderDetail, OrderItem, OrderStatus
from orderdesk.repositories.base import (
    CustomerRepositoryBase,
    OrderRepositoryBase,
    ProductRepositoryBase,
)
from orderdesk.services.payment_gateway import PaymentGateway

logger = logging.getLogger(__name__)


def _to_line_item(item: Any) -> OrderItem:
    """Accept an OrderItem or a {productID, quantity} mapping"""
    if isinstance(item, OrderItem):
        return item

    if not isinstance(item, dict):
        raise ValidationError("Each item requires productID and quantity")

    product_id = item.get('productID', item.get('product_id'))
    quantity = item.get('quantity')
    if not product_id or quantity is None:
        raise ValidationError("Each item requires productID and quantity")
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError("Quantity must be a positive integer")
    if quantity > MAX_INTEGER:
        raise ValidationError(f"Quantity must not exceed {MAX_INTEGER}")

    return OrderItem(product_id=str(product_id), quantity=quantity)


class OrderWorkflowService:
    """Service for the order lifecycle"""

    def __init__(
        self,
        customers: CustomerRepositoryBase,
        products: ProductRepositoryBase,
        orders: OrderRepositoryBase,
        payment_gateway: PaymentGateway,
        enforce_terminal_status: bool = False
    ):
        self.customers = customers
        self.products = products
        self.orders = orders
        self.payment_gateway = payment_gateway
        self.enforce_terminal_status = enforce_terminal_status

    def place_order(self, customer_id: Optional[str], items: Optional[Sequence[Any]]) -> Order:
        """
        Reserve stock for each line item and create the order

        Steps:
        1. Validate customer_id and items are present
        2. Resolve the customer
        3. For each item, in order: resolve product, decrement stock,
           accumulate price x quantity
        4. Create the order (status Pending, payment Pending)

        Args:
            customer_id: Customer placing the order
            items: Sequence of OrderItem or {productID, quantity}

        Returns:
            The created Order

        Raises:
            ValidationError: customer_id or items missing, a malformed item,
                or a total above the stored range
            CustomerNotFoundError: customer does not exist
            ProductNotFoundError: an item's product does not exist
            InsufficientStockError: an item asks for more than is in stock
        """
        if not customer_id or not items:
            raise ValidationError("CustomerID and items are required")

        line_items = [_to_line_item(item) for item in items]

        if self.customers.find_by_id(customer_id) is None:
            raise CustomerNotFoundError(customer_id)

        total_price = Decimal('0')
        applied: List[OrderItem] = []

        try:
            for item in line_items:
                product = self.products.find_by_id(item.product_id)
                if product is None:
                    raise ProductNotFoundError(item.product_id)

                updated = self.products.decrement_stock(item.product_id, item.quantity)
                if updated is None:
                    # Deleted between lookup and decrement
                    raise ProductNotFoundError(item.product_id)

                applied.append(item)
                total_price += updated.price * item.quantity

            if total_price > MAX_AMOUNT:
                raise ValidationError(f"Order total must not exceed {MAX_AMOUNT}")

            order = self.orders.create(customer_id, line_items, total_price)

        except Exception as e:
            if applied:
                logger.warning(
                    f"Order for customer {customer_id} failed after stock was decremented "
                    f"for {len(applied)} item(s); decrements are not reverted: "
                    + ", ".join(f"{item.product_id} x{item.quantity}" for item in applied)
                    + f" ({type(e).__name__}: {e})"
                )
            raise

        logger.info(
            f"Placed order {order.id} for customer {customer_id}: "
            f"{order.item_count} item(s), {order.total_quantity} unit(s), total {order.total_price}"
        )
        return order

    def get_order(self, order_id: str) -> Order:
        order = self.orders.find_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    def list_orders(self) -> List[OrderDetail]:
        """All orders with customer and product details expanded at read time"""
        return self.orders.find_all_detailed()

    def cancel_order(self, order_id: str) -> Order:
        """
        Set an order's status to Cancelled

        Stock is not restored and payment status is not touched.

        Raises:
            OrderNotFoundError: order does not exist
            InvalidStatusTransitionError: order is Completed and terminal
                statuses are enforced
        """
        order = self.get_order(order_id)

        if self.enforce_terminal_status and order.status == OrderStatus.COMPLETED:
            raise InvalidStatusTransitionError(order_id, OrderStatus(order.status).value, "cancel")

        updated = self.orders.set_status(order_id, OrderStatus.CANCELLED)
        if updated is None:
            raise OrderNotFoundError(order_id)

        logger.info(f"Cancelled order {order_id} (was {OrderStatus(order.status).value})")
        return updated

    def _check_can_pay(self, order: Order) -> None:
        if self.enforce_terminal_status and OrderStatus(order.status).is_terminal:
            raise InvalidStatusTransitionError(order.id, OrderStatus(order.status).value, "pay")

    async def pay_order(self, order_id: str) -> Order:
        """
        Run the payment, then mark the order Completed and Paid

        Store calls run in the threadpool so only the gateway wait happens
        on the event loop. Status and payment status are written together.
        The order is not locked while the gateway call is in flight; a
        concurrent cancel can land during it and is then overwritten.

        Raises:
            OrderNotFoundError: order does not exist
            InvalidStatusTransitionError: order is not Pending and terminal
                statuses are enforced
        """
        order = await run_in_threadpool(self.get_order, order_id)
        self._check_can_pay(order)

        await self.payment_gateway.process_payment(order)

        if self.enforce_terminal_status:
            current = await run_in_threadpool(self.get_order, order_id)
            if current.status != OrderStatus.PENDING:
                logger.warning(
                    f"Payment acknowledged for order {order_id} but it became "
                    f"{OrderStatus(current.status).value} meanwhile"
                )
            self._check_can_pay(current)

        updated = await run_in_threadpool(self.orders.mark_paid, order_id)
        if updated is None:
            raise OrderNotFoundError(order_id)

        logger.info(f"Order {order_id} paid ({updated.total_price})")
        return updated
