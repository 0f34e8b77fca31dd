"""CLI commands for the per-user wishlist and order history."""

from __future__ import annotations

import click

from storefront.application.dto import OrderDTO, ProductDTO
from storefront.application.order_history import OrderHistoryHandler
from storefront.application.wishlist import WishlistHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import Container


def _display_order(dto: OrderDTO) -> None:
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Placed:  {dto.placed_at}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>10} {'Total':>12}")
    click.echo(f"  {'-'*54}")
    for line in dto.lines:
        click.echo(
            f"  {line.product_name:<24} {line.quantity:>5} "
            f"{line.unit_price:>10} {line.line_total:>12}"
        )
    click.echo(f"  {'-'*54}")
    click.echo(f"  {'Order Total':<30} {dto.total:>23}")


@click.command("show")
@click.pass_obj
def wishlist_show(container: Container) -> None:
    """List wishlisted products."""
    handler = WishlistHandler(container.ledger, container.catalog)
    try:
        username = container.restore_session().require_identity().username
        products = [ProductDTO.of(p) for p in handler.products(username)]
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("Your wishlist is empty.")
        return
    for p in products:
        click.echo(f"  {p.id:<14} {p.name:<24} {p.price:>10}")


@click.command("toggle")
@click.argument("product_id")
@click.pass_obj
def wishlist_toggle(container: Container, product_id: str) -> None:
    """Add a product to the wishlist, or remove it if already there."""
    handler = WishlistHandler(container.ledger, container.catalog)
    try:
        username = container.restore_session().require_identity().username
        added = handler.toggle(username, product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if added:
        click.echo(f"Added {product_id} to wishlist.")
    else:
        click.echo(f"Removed {product_id} from wishlist.")


@click.command("list")
@click.pass_obj
def orders_list(container: Container) -> None:
    """List your orders, newest first."""
    handler = OrderHistoryHandler(container.ledger)
    try:
        username = container.restore_session().require_identity().username
        orders = handler.handle(username)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders yet.")
        return

    click.echo(f"  {'ID':<14} {'Placed':<22} {'Status':<12} {'Items':>5} {'Total':>12}")
    click.echo(f"  {'-'*69}")
    for o in orders:
        items = sum(line.quantity for line in o.lines)
        click.echo(f"  {o.id:<14} {o.placed_at:<22} {o.status:<12} {items:>5} {o.total:>12}")


@click.command("show")
@click.argument("order_id")
@click.pass_obj
def orders_show(container: Container, order_id: str) -> None:
    """Show one order in detail."""
    handler = OrderHistoryHandler(container.ledger)
    try:
        username = container.restore_session().require_identity().username
        dto = handler.show(username, order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)
