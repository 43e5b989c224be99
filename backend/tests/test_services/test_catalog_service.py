"""
Tests for CatalogService
"""
from decimal import Decimal

import pytest

from orderdesk.core.exceptions import ProductNotFoundError, ValidationError


class TestCreateProduct:

    def test_creates_product(self, catalog, product_repo):
        product = catalog.create_product('Jellybean', 'Tasty Jellybean', 1.00, 100)

        assert product.price == Decimal('1.0')
        assert product.stock == 100
        assert product_repo.find_by_id(product.id) == product

    def test_zero_price_and_stock_are_valid(self, catalog):
        product = catalog.create_product('Sample', 'Free sample', 0, 0)

        assert product.price == 0
        assert product.is_out_of_stock

    @pytest.mark.parametrize("name,description,price,stock", [
        (None, 'desc', 1, 1),
        ('', 'desc', 1, 1),
        ('name', None, 1, 1),
        ('name', 'desc', None, 1),
        ('name', 'desc', 1, None),
    ])
    def test_missing_fields(self, catalog, name, description, price, stock):
        with pytest.raises(ValidationError) as exc_info:
            catalog.create_product(name, description, price, stock)

        assert exc_info.value.message == 'Name, description, price, and stock are required'

    @pytest.mark.parametrize("price,stock", [
        (-1, 10),
        ('abc', 10),
        (True, 10),
        (1, -1),
        (1, 2.5),
        (1, 'many'),
    ])
    def test_invalid_numbers(self, catalog, price, stock):
        with pytest.raises(ValidationError):
            catalog.create_product('name', 'desc', price, stock)

    @pytest.mark.parametrize("price,stock,message", [
        (1.005, 10, "Price must have at most 2 decimal places"),
        ("0.001", 10, "Price must have at most 2 decimal places"),
        (1e11, 10, "Price must not exceed 9999999999.99"),
        ("10000000000", 10, "Price must not exceed 9999999999.99"),
        (1, 2 ** 31, "Stock must not exceed 2147483647"),
    ])
    def test_out_of_stored_range(self, catalog, store, price, stock, message):
        with pytest.raises(ValidationError) as exc_info:
            catalog.create_product("name", "desc", price, stock)

        assert exc_info.value.message == message
        assert store.products == {}

    def test_stored_range_limits_are_accepted(self, catalog):
        product = catalog.create_product("Bulk", "Largest allowed", "9999999999.99", 2 ** 31 - 1)

        assert product.price == Decimal("9999999999.99")
        assert product.stock == 2147483647

    def test_price_is_stored_with_two_decimals(self, catalog):
        product = catalog.create_product("Gum", "Chewing gum", 1.5, 1)

        assert product.price.as_tuple().exponent == -2
        assert str(product.price) == "1.50"


class TestDeleteProduct:

    def test_delete_missing_product(self, catalog):
        with pytest.raises(ProductNotFoundError) as exc_info:
            catalog.delete_product('missing')

        assert exc_info.value.message == 'Product not found'

    def test_delete_prunes_line_items_from_two_orders(
        self, catalog, workflow, product_repo, order_repo, customer, jellybean, licorice
    ):
        first = workflow.place_order(customer.id, [
            {'productID': jellybean.id, 'quantity': 2},
            {'productID': licorice.id, 'quantity': 1},
        ])
        second = workflow.place_order(customer.id, [
            {'productID': licorice.id, 'quantity': 2},
        ])

        removed = catalog.delete_product(licorice.id)

        assert removed == 2
        assert product_repo.find_by_id(licorice.id) is None
        first_after = order_repo.find_by_id(first.id)
        second_after = order_repo.find_by_id(second.id)
        assert [item.product_id for item in first_after.items] == [jellybean.id]
        assert second_after.items == []
        assert first_after.total_price == Decimal('4.50')
        assert second_after.total_price == Decimal('5.00')

    def test_delete_prunes_regardless_of_status(self, catalog, workflow, order_repo, customer, jellybean):
        order = workflow.place_order(customer.id, [{'productID': jellybean.id, 'quantity': 1}])
        workflow.cancel_order(order.id)

        catalog.delete_product(jellybean.id)

        assert order_repo.find_by_id(order.id).items == []
