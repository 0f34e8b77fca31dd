"""Unit tests for the Cart aggregate: stock limits and quantity clamping."""

import pytest

from storefront.domain.exceptions import (
    EntityNotFoundError,
    StockExceededError,
    ValidationError,
)
from storefront.domain.model.cart import Cart
from storefront.domain.model.value_objects import Money
from tests.fakes import make_product


class TestAddItem:

    def test_sold_out_product_cannot_be_added(self):
        cart = Cart()
        with pytest.raises(StockExceededError, match="stock limit reached"):
            cart.add_item(make_product(id="3", stock=0), 1)
        assert cart.is_empty

    def test_adds_up_to_stock_then_rejects(self):
        product = make_product(id="1", stock=2)
        cart = Cart()
        cart.add_item(product, 1)
        assert cart.find_line("1").quantity == 1
        cart.add_item(product, 1)
        assert cart.find_line("1").quantity == 2
        with pytest.raises(StockExceededError):
            cart.add_item(product, 1)
        assert cart.find_line("1").quantity == 2

    def test_over_stock_request_is_rejected_in_full(self):
        cart = Cart()
        cart.add_item(make_product(stock=5), 2)
        with pytest.raises(StockExceededError) as exc_info:
            cart.add_item(make_product(stock=5), 4)
        assert cart.find_line("1").quantity == 2
        assert exc_info.value.requested == 6
        assert exc_info.value.stock == 5

    def test_one_line_per_product(self):
        cart = Cart()
        cart.add_item(make_product(), 1)
        cart.add_item(make_product(), 2)
        assert len(cart.lines) == 1
        assert cart.item_count == 3

    def test_non_positive_quantity_rejected(self):
        cart = Cart()
        with pytest.raises(ValidationError):
            cart.add_item(make_product(), 0)
        assert cart.is_empty

    def test_line_holds_a_snapshot(self):
        product = make_product(price="10.00")
        cart = Cart()
        cart.add_item(product, 1)
        product.price = Money.of("99.00")
        assert cart.total() == Money.of("10.00")

    def test_re_adding_refreshes_snapshot(self):
        cart = Cart()
        cart.add_item(make_product(price="10.00"), 1)
        cart.add_item(make_product(price="12.00"), 1)
        assert cart.total() == Money.of("24.00")


class TestSetQuantity:

    def _cart(self, qty: int = 2, stock: int = 5) -> Cart:
        cart = Cart()
        cart.add_item(make_product(stock=stock), qty)
        return cart

    def test_increment(self):
        cart = self._cart()
        cart.set_quantity("1", 1)
        assert cart.find_line("1").quantity == 3

    def test_clamped_to_stock(self):
        cart = self._cart(qty=4, stock=5)
        cart.set_quantity("1", 10)
        assert cart.find_line("1").quantity == 5

    def test_going_below_one_is_a_no_op(self):
        cart = self._cart(qty=1)
        cart.set_quantity("1", -1)
        assert cart.find_line("1").quantity == 1

    def test_large_decrement_is_a_no_op(self):
        cart = self._cart(qty=3)
        cart.set_quantity("1", -5)
        assert cart.find_line("1").quantity == 3

    def test_decrement_to_one(self):
        cart = self._cart(qty=3)
        cart.set_quantity("1", -2)
        assert cart.find_line("1").quantity == 1

    def test_missing_line(self):
        with pytest.raises(EntityNotFoundError, match="not in the cart"):
            Cart().set_quantity("nope", 1)


class TestRemoveAndClear:

    def test_remove(self):
        cart = Cart()
        cart.add_item(make_product(id="1"), 1)
        cart.add_item(make_product(id="2", name="Gadget"), 1)
        cart.remove_item("1")
        assert [line.product_id for line in cart.lines] == ["2"]

    def test_remove_missing(self):
        with pytest.raises(EntityNotFoundError):
            Cart().remove_item("1")

    def test_clear(self):
        cart = Cart()
        cart.add_item(make_product(), 2)
        cart.clear()
        assert cart.is_empty
        assert cart.total() == Money.zero()

    def test_retain_returns_dropped_lines(self):
        cart = Cart()
        cart.add_item(make_product(id="1"), 1)
        cart.add_item(make_product(id="2", name="Gadget"), 1)
        dropped = cart.retain({"2"})
        assert [line.product_id for line in dropped] == ["1"]
        assert [line.product_id for line in cart.lines] == ["2"]


class TestTotal:

    def test_sum_of_lines(self):
        cart = Cart()
        cart.add_item(make_product(id="1", price="10.00", stock=9), 3)
        cart.add_item(make_product(id="2", name="Gadget", price="2.50"), 2)
        assert cart.total() == Money.of("35.00")

    def test_empty_cart_total_is_zero(self):
        assert Cart().total() == Money.zero()
