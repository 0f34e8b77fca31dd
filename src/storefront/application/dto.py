"""Data Transfer Objects: plain, display-ready containers.

The CLI prints these; it never reaches into domain objects directly.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.cart import Cart
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    description: str
    price: str  # formatted, e.g. "$15.00"
    stock: int
    category: str
    rating: str
    review_count: int

    @staticmethod
    def of(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            description=product.description,
            price=str(product.price),
            stock=product.stock,
            category=product.category,
            rating=f"{product.rating:.1f}",
            review_count=product.review_count,
        )


@dataclass(frozen=True)
class LineDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    lines: list[LineDTO]
    item_count: int
    total: str

    @staticmethod
    def of(cart: Cart) -> CartDTO:
        return CartDTO(
            lines=[
                LineDTO(
                    product_id=line.product_id,
                    product_name=line.product.name,
                    quantity=line.quantity,
                    unit_price=str(line.product.price),
                    line_total=str(line.line_total),
                )
                for line in cart.lines
            ],
            item_count=cart.item_count,
            total=str(cart.total()),
        )


@dataclass(frozen=True)
class OrderDTO:
    id: str
    placed_at: str
    status: str
    lines: list[LineDTO]
    total: str

    @staticmethod
    def of(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,
            placed_at=order.placed_at.strftime("%Y-%m-%d %H:%M UTC"),
            status=order.status.value,
            lines=[
                LineDTO(
                    product_id=line.product_id,
                    product_name=line.product_name,
                    quantity=line.quantity,
                    unit_price=str(line.unit_price),
                    line_total=str(line.line_total),
                )
                for line in order.lines
            ],
            total=str(order.total),
        )
