"""
Tests for the in-memory repositories

They must keep the guarantees of the PostgreSQL ones: decrements never
oversell and email stays unique under concurrent callers.
"""
import pytest
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

from orderdesk.core.exceptions import DuplicateEmailError, InsufficientStockError
from orderdesk.domain.order import OrderItem, OrderStatus, PaymentStatus


class TestInMemoryProductRepository:

    def test_decrement_insufficient_leaves_stock_unchanged(self, product_repo, licorice):
        with pytest.raises(InsufficientStockError):
            product_repo.decrement_stock(licorice.id, 6)

        assert product_repo.find_by_id(licorice.id).stock == 5

    def test_decrement_to_exactly_zero(self, product_repo, licorice):
        updated = product_repo.decrement_stock(licorice.id, 5)

        assert updated.stock == 0
        assert updated.is_out_of_stock

    def test_decrement_missing_returns_none(self, product_repo):
        assert product_repo.decrement_stock('missing', 1) is None

    def test_concurrent_decrements_never_oversell(self, product_repo, jellybean):
        """100 units, 50 callers asking for 3 each: exactly 33 succeed"""

        def take_three():
            try:
                product_repo.decrement_stock(jellybean.id, 3)
                return True
            except InsufficientStockError:
                return False

        with ThreadPoolExecutor(max_workers=16) as pool:
            results = list(pool.map(lambda _: take_three(), range(50)))

        assert sum(results) == 33
        assert product_repo.find_by_id(jellybean.id).stock == 1


class TestInMemoryCustomerRepository:

    def test_duplicate_email_keeps_only_first(self, customer_repo, store):
        first = customer_repo.create('Nathan', 'Englert', 'nke5100@psu.edu')

        with pytest.raises(DuplicateEmailError):
            customer_repo.create('Someone', 'Else', 'nke5100@psu.edu')

        assert list(store.customers) == [first.id]

    def test_concurrent_registration_same_email(self, customer_repo, store):
        def register(index):
            try:
                customer_repo.create('User', str(index), 'same@example.com')
                return True
            except DuplicateEmailError:
                return False

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(register, range(20)))

        assert sum(results) == 1
        assert len(store.customers) == 1


class TestInMemoryOrderRepository:

    def test_remove_line_items_across_orders_keeps_totals(self, order_repo, customer, jellybean, licorice):
        first = order_repo.create(customer.id, [
            OrderItem(product_id=jellybean.id, quantity=2),
            OrderItem(product_id=licorice.id, quantity=1),
        ], Decimal('4.50'))
        second = order_repo.create(customer.id, [
            OrderItem(product_id=licorice.id, quantity=2),
        ], Decimal('5.00'))

        removed = order_repo.remove_line_items_referencing(licorice.id)

        assert removed == 2
        assert [item.product_id for item in order_repo.find_by_id(first.id).items] == [jellybean.id]
        assert order_repo.find_by_id(second.id).items == []
        assert order_repo.find_by_id(first.id).total_price == Decimal('4.50')
        assert order_repo.find_by_id(second.id).total_price == Decimal('5.00')

    def test_mark_paid_sets_status_and_payment_together(self, order_repo, customer, jellybean):
        order = order_repo.create(customer.id, [OrderItem(product_id=jellybean.id, quantity=1)], Decimal('1.00'))

        paid = order_repo.mark_paid(order.id)

        assert paid.status == OrderStatus.COMPLETED
        assert paid.payment_status == PaymentStatus.PAID
        assert order_repo.find_by_id(order.id) == paid
        assert order_repo.mark_paid('missing') is None

    def test_find_all_detailed_uses_current_product_state(self, order_repo, product_repo, customer, jellybean):
        order_repo.create(customer.id, [OrderItem(product_id=jellybean.id, quantity=2)], Decimal('2.00'))
        product_repo.decrement_stock(jellybean.id, 10)

        [detail] = order_repo.find_all_detailed()

        assert detail.customer.email == 'nke5100@psu.edu'
        assert detail.items[0].product.stock == 90
        assert detail.total_price == Decimal('2.00')
