"""
Catalog Service
Product creation, lookup and deletion

Deleting a product also prunes its line items from every order. The prune
runs after the delete and is not atomic with it.
"""
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from orderdesk.core.exceptions import ProductNotFoundError, ValidationError
from orderdesk.domain.base import MAX_AMOUNT, MAX_INTEGER, MONEY_PLACES
from orderdesk.domain.product import Product
from orderdesk.repositories.base import OrderRepositoryBase, ProductRepositoryBase

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Name, description, price, and stock are required"


def _parse_price(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError("Price must be a non-negative number")
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError("Price must be a non-negative number")
    if not price.is_finite() or price < 0:
        raise ValidationError("Price must be a non-negative number")
    if price > MAX_AMOUNT:
        raise ValidationError(f"Price must not exceed {MAX_AMOUNT}")
    if price != price.quantize(MONEY_PLACES):
        raise ValidationError("Price must have at most 2 decimal places")
    return price.quantize(MONEY_PLACES)


def _parse_stock(value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError("Stock must be a non-negative integer")
    try:
        stock = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError("Stock must be a non-negative integer")
    if not stock.is_finite() or stock < 0 or stock != stock.to_integral_value():
        raise ValidationError("Stock must be a non-negative integer")
    if stock > MAX_INTEGER:
        raise ValidationError(f"Stock must not exceed {MAX_INTEGER}")
    return int(stock)


class CatalogService:
    """Service for catalog business logic"""

    def __init__(self, products: ProductRepositoryBase, orders: OrderRepositoryBase):
        self.products = products
        self.orders = orders

    def create_product(
        self,
        name: Optional[str],
        description: Optional[str],
        price: Any,
        stock: Any
    ) -> Product:
        """
        Add a product to the catalog

        Zero is a valid price and a valid stock level.

        Raises:
            ValidationError: a field is missing, price/stock are not
                non-negative numbers (stock must be whole), price has more
                than 2 decimal places, or either is out of the stored range
        """
        if not name or not description or price is None or stock is None:
            raise ValidationError(REQUIRED_FIELDS_MESSAGE)

        product = self.products.create(name, description, _parse_price(price), _parse_stock(stock))
        logger.info(f"Created product {product.id} ({product.name}) with stock {product.stock}")
        return product

    def get_product(self, product_id: str) -> Product:
        product = self.products.find_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id, message="Product not found")
        return product

    def delete_product(self, product_id: str) -> int:
        """
        Delete a product and prune it from all orders

        Order totals are left as they were charged.

        Returns:
            Number of line items removed from orders

        Raises:
            ProductNotFoundError: product does not exist
        """
        if not self.products.delete(product_id):
            raise ProductNotFoundError(product_id, message="Product not found")

        removed = self.orders.remove_line_items_referencing(product_id)
        logger.info(f"Deleted product {product_id}; removed {removed} line item(s) from orders")
        return removed
