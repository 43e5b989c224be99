"""
Payment gateway port

The order workflow talks to payments only through PaymentGateway.
SimulatedPaymentGateway stands in for an external provider by waiting a
fixed delay; tests build it with delay_seconds=0.
"""
import asyncio
import logging
from abc import ABC, abstractmethod

from orderdesk.domain.order import Order

logger = logging.getLogger(__name__)


class PaymentGateway(ABC):
    """Abstract interface for payment processing"""

    @abstractmethod
    async def process_payment(self, order: Order) -> None:
        """
        Charge the order's total

        Returns once the provider has acknowledged the payment.
        """
        ...


class SimulatedPaymentGateway(PaymentGateway):
    """Acknowledges every payment after a fixed delay"""

    def __init__(self, delay_seconds: float = 2.0):
        self.delay_seconds = delay_seconds

    async def process_payment(self, order: Order) -> None:
        logger.debug(
            f"Processing payment of {order.total_price} for order {order.id} "
            f"({self.delay_seconds:.2f}s)"
        )
        await asyncio.sleep(self.delay_seconds)
