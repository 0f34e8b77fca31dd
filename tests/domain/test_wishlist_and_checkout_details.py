"""Unit tests for the wishlist, checkout details and the state table."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import Cart
from storefront.domain.model.checkout import (
    TRANSITIONS,
    CheckoutDraft,
    CheckoutState,
    PaymentDetails,
    ShippingDetails,
)
from storefront.domain.model.value_objects import Money
from storefront.domain.model.wishlist import Wishlist
from tests.fakes import make_product


class TestWishlist:

    def test_toggle_twice_restores_state(self):
        wishlist = Wishlist()
        assert wishlist.toggle("5") is True
        assert "5" in wishlist
        assert wishlist.toggle("5") is False
        assert wishlist.product_ids == []

    def test_duplicates_collapsed_keeping_order(self):
        assert Wishlist(["2", "1", "2"]).product_ids == ["2", "1"]

    def test_len(self):
        assert len(Wishlist(["1", "2"])) == 2


class TestCheckoutDetails:

    def test_valid_details(self):
        shipping = ShippingDetails(full_name="Ada Lovelace", address="12 Analytical St")
        assert shipping.full_name == "Ada Lovelace"

    @pytest.mark.parametrize("full_name, address", [("", "x"), ("Ada", "   ")])
    def test_blank_shipping_rejected(self, full_name, address):
        with pytest.raises(ValidationError, match="is required"):
            ShippingDetails(full_name=full_name, address=address)

    def test_blank_card_field_rejected(self):
        with pytest.raises(ValidationError, match="CVC is required"):
            PaymentDetails(card_number="4242424242424242", expiry="12/29", cvc="")

    def test_repr_masks_card_number(self):
        payment = PaymentDetails(card_number="4242424242424242", expiry="12/29", cvc="123")
        assert "4242424242424242" not in repr(payment)
        assert "123" not in repr(payment)


class TestCheckoutStateTable:

    def test_committed_is_terminal(self):
        assert TRANSITIONS[CheckoutState.COMMITTED] == frozenset()

    def test_cart_change_during_payment_returns_to_assembling(self):
        assert CheckoutState.ASSEMBLING in TRANSITIONS[CheckoutState.AWAITING_PAYMENT]

    def test_rejected_only_returns_to_assembling(self):
        assert TRANSITIONS[CheckoutState.REJECTED] == {CheckoutState.ASSEMBLING}

    def test_every_state_has_an_entry(self):
        assert set(TRANSITIONS) == set(CheckoutState)


class TestCheckoutDraft:

    def test_freeze_copies_lines_and_total(self):
        cart = Cart()
        cart.add_item(make_product(id="1", price="10.00"), 2)
        draft = CheckoutDraft.freeze(cart)
        cart.clear()
        assert draft.quantities == {"1": 2}
        assert draft.total == Money.of("20.00")
