"""CLI command that runs a checkout from start to finish."""

from __future__ import annotations

import asyncio

import click

from storefront.application.dto import CartDTO, OrderDTO
from storefront.domain.exceptions import DomainException, InsufficientStockError
from storefront.domain.model.checkout import PaymentDetails, ShippingDetails
from storefront.infrastructure.bootstrap import Container
from storefront.infrastructure.cli.cart_commands import display_cart


@click.command("checkout")
@click.option("--name", "full_name", required=True, help="Full name for shipping.")
@click.option("--address", required=True, help="Shipping address.")
@click.option("--card", "card_number", required=True, help="Card number.")
@click.option("--expiry", required=True, help="Card expiry, e.g. 12/29.")
@click.option("--cvc", required=True, help="Card security code.")
@click.pass_obj
def checkout(
    container: Container,
    full_name: str,
    address: str,
    card_number: str,
    expiry: str,
    cvc: str,
) -> None:
    """Pay for the cart and place the order."""
    settings = container.settings
    try:
        session = container.restore_session()
        process = session.begin_checkout(container.payment, settings.payment_timeout)
        display_cart(CartDTO.of(session.cart_engine.cart))
        process.submit_details(
            ShippingDetails(full_name=full_name, address=address),
            PaymentDetails(card_number=card_number, expiry=expiry, cvc=cvc),
        )
        click.echo("Processing payment...")
        order = asyncio.run(process.commit())
    except InsufficientStockError as exc:
        click.echo("Some items are no longer available:", err=True)
        for product_id, (need, have) in exc.shortages.items():
            click.echo(f"  {product_id}: requested {need}, only {have} left", err=True)
        raise click.ClickException("Adjust your cart and check out again.")
    except DomainException as exc:
        raise click.ClickException(str(exc))

    container.persist_session(session)

    dto = OrderDTO.of(order)
    click.echo()
    click.echo("Order Confirmed!")
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Shipping to {full_name}, {address}")
    click.echo(f"Total charged: {dto.total}")
