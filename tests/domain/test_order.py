"""Unit tests for the Order aggregate."""

import re

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.order import Order, OrderLine, OrderStatus, new_order_id
from storefront.domain.model.value_objects import Money
from tests.fakes import make_product


def _make_line(name: str = "Widget", qty: int = 1, price: str = "15.00") -> OrderLine:
    return OrderLine(
        product_id="1",
        product_name=name,
        unit_price=Money.of(price),
        quantity=qty,
    )


class TestOrderPlacement:

    def test_happy_path(self):
        order = Order.place((_make_line(qty=2, price="10.00"),), Money.of("20.00"))
        assert order.status == OrderStatus.PROCESSING
        assert order.total == Money.of("20.00")
        assert order.item_count == 2
        assert order.placed_at.tzinfo is not None

    def test_empty_order_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            Order.place((), Money.zero())

    def test_id_format(self):
        assert re.fullmatch(r"ORD-[0-9A-F]{8}", new_order_id())

    def test_ids_are_distinct(self):
        ids = {Order.place((_make_line(),), Money.of("15")).id for _ in range(20)}
        assert len(ids) == 20


class TestOrderImmutability:

    def test_lines_cannot_be_replaced(self):
        order = Order.place((_make_line(),), Money.of("15.00"))
        with pytest.raises(ValidationError, match="immutable"):
            order.lines = ()

    def test_total_cannot_be_replaced(self):
        order = Order.place((_make_line(),), Money.of("15.00"))
        with pytest.raises(ValidationError, match="immutable"):
            order.total = Money.zero()

    def test_status_may_advance(self):
        order = Order.place((_make_line(),), Money.of("15.00"))
        order.status = OrderStatus.SHIPPED
        assert order.status == OrderStatus.SHIPPED

    def test_lines_are_a_tuple(self):
        order = Order.place([_make_line()], Money.of("15.00"))
        assert isinstance(order.lines, tuple)


class TestOrderLine:

    def test_line_total(self):
        assert _make_line(qty=3, price="2.50").line_total == Money.of("7.50")

    def test_from_cart_line_copies_product_data(self):
        product = make_product(name="Lamp", price="40.00", category="Home")
        line = OrderLine.from_cart_line(CartLine(product, 2))
        product.name = "Renamed"
        assert line.product_name == "Lamp"
        assert line.unit_price == Money.of("40.00")
        assert line.category == "Home"
        assert line.quantity == 2
