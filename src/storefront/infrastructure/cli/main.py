import logging
from pathlib import Path

import click

from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import Container, Settings
from storefront.infrastructure.cli.account_commands import (
    account_login,
    account_logout,
    account_register,
    account_whoami,
)
from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_adjust,
    cart_clear,
    cart_remove,
    cart_show,
)
from storefront.infrastructure.cli.catalog_commands import (
    catalog_add,
    catalog_categories,
    catalog_delete,
    catalog_list,
    catalog_show,
    catalog_update,
)
from storefront.infrastructure.cli.checkout_commands import checkout
from storefront.infrastructure.cli.history_commands import (
    orders_list,
    orders_show,
    wishlist_show,
    wishlist_toggle,
)


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="STOREFRONT_DATA_DIR",
    default=None,
    help="Directory holding the store's JSON files (default: ./data).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output.")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, verbose: bool) -> None:
    """Storefront: catalog, cart and order simulator"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        settings = Settings.from_env(data_dir)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    ctx.obj = Container(settings)


@cli.group()
def account() -> None:
    """Sign up, sign in and out."""


@cli.group()
def catalog() -> None:
    """Browse and manage products."""


@cli.group()
def cart() -> None:
    """Manage your cart."""


@cli.group()
def wishlist() -> None:
    """Manage your wishlist."""


@cli.group()
def orders() -> None:
    """View your order history."""


# Register subcommands
account.add_command(account_register)
account.add_command(account_login)
account.add_command(account_logout)
account.add_command(account_whoami)
catalog.add_command(catalog_list)
catalog.add_command(catalog_show)
catalog.add_command(catalog_categories)
catalog.add_command(catalog_add)
catalog.add_command(catalog_update)
catalog.add_command(catalog_delete)
cart.add_command(cart_show)
cart.add_command(cart_add)
cart.add_command(cart_adjust)
cart.add_command(cart_remove)
cart.add_command(cart_clear)
wishlist.add_command(wishlist_show)
wishlist.add_command(wishlist_toggle)
orders.add_command(orders_list)
orders.add_command(orders_show)
cli.add_command(checkout)
