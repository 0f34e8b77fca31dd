"""CLI commands for the signed-in user's cart.

The cart is restored from the store at the start of each command and
written back afterwards, since every invocation is a new process.
"""

from __future__ import annotations

import click

from storefront.application.dto import CartDTO
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import Container


def display_cart(dto: CartDTO) -> None:
    """Shared formatting for a cart or checkout summary."""
    if not dto.lines:
        click.echo("Your cart is empty.")
        return
    click.echo(f"  {'ID':<14} {'Product':<24} {'Qty':>5} {'Price':>10} {'Total':>12}")
    click.echo(f"  {'-'*69}")
    for line in dto.lines:
        click.echo(
            f"  {line.product_id:<14} {line.product_name:<24} {line.quantity:>5} "
            f"{line.unit_price:>10} {line.line_total:>12}"
        )
    click.echo(f"  {'-'*69}")
    click.echo(f"  {'Total (' + str(dto.item_count) + ' items)':<45} {dto.total:>24}")


@click.command("show")
@click.pass_obj
def cart_show(container: Container) -> None:
    """Show the cart."""
    try:
        session = container.restore_session()
        session.require_identity()
        dto = CartDTO.of(session.cart_engine.cart)
        container.persist_session(session)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_cart(dto)


@click.command("add")
@click.argument("product_id")
@click.option("--qty", "quantity", default=1, show_default=True, type=int, help="Units to add.")
@click.pass_obj
def cart_add(container: Container, product_id: str, quantity: int) -> None:
    """Add a product to the cart."""
    try:
        session = container.restore_session()
        session.require_identity()
        cart = session.cart_engine.add_item(product_id, quantity)
        container.persist_session(session)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    line = cart.find_line(product_id)
    click.echo(f"Added to cart: {line.product.name} (now {line.quantity})")


@click.command("adjust")
@click.argument("product_id")
@click.option("--delta", required=True, type=int, help="Change in quantity, e.g. 1 or -1.")
@click.pass_obj
def cart_adjust(container: Container, product_id: str, delta: int) -> None:
    """Change a line's quantity, kept between 1 and the product's stock."""
    try:
        session = container.restore_session()
        session.require_identity()
        cart = session.cart_engine.set_quantity(product_id, delta)
        container.persist_session(session)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_cart(CartDTO.of(cart))


@click.command("remove")
@click.argument("product_id")
@click.pass_obj
def cart_remove(container: Container, product_id: str) -> None:
    """Remove a line from the cart."""
    try:
        session = container.restore_session()
        session.require_identity()
        cart = session.cart_engine.remove_item(product_id)
        container.persist_session(session)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_cart(CartDTO.of(cart))


@click.command("clear")
@click.pass_obj
def cart_clear(container: Container) -> None:
    """Empty the cart."""
    try:
        session = container.restore_session()
        session.require_identity()
        session.cart_engine.clear()
        container.persist_session(session)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Cart cleared.")
