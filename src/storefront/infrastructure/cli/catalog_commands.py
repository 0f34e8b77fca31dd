"""CLI commands for browsing and administering the catalog."""

from __future__ import annotations

import click

from storefront.application.admin_catalog import AdminCatalogHandler
from storefront.application.browse_catalog import ALL_CATEGORIES, BrowseCatalogHandler
from storefront.application.dto import ProductDTO
from storefront.domain.exceptions import DomainException
from storefront.domain.repository.catalog_repository import ProductDraft
from storefront.infrastructure.bootstrap import Container


def _stock_label(stock: int) -> str:
    return f"{stock} left" if stock > 0 else "Out of Stock"


def _display_table(products: list[ProductDTO]) -> None:
    click.echo(
        f"  {'ID':<14} {'Name':<24} {'Category':<12} {'Price':>10} {'Rating':>6} {'Stock':>14}"
    )
    click.echo(f"  {'-'*85}")
    for p in products:
        click.echo(
            f"  {p.id:<14} {p.name:<24} {p.category:<12} {p.price:>10} "
            f"{p.rating:>6} {_stock_label(p.stock):>14}"
        )


@click.command("list")
@click.option("--query", "-q", default="", help="Match name or description.")
@click.option("--category", default=ALL_CATEGORIES, show_default=True, help="Category filter.")
@click.option("--in-stock", is_flag=True, default=False, help="Hide sold-out products.")
@click.pass_obj
def catalog_list(container: Container, query: str, category: str, in_stock: bool) -> None:
    """List products."""
    handler = BrowseCatalogHandler(container.catalog)
    try:
        products = handler.search(query=query, category=category, in_stock_only=in_stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return
    _display_table([ProductDTO.of(p) for p in products])


@click.command("show")
@click.argument("product_id")
@click.pass_obj
def catalog_show(container: Container, product_id: str) -> None:
    """Show one product and others like it."""
    handler = BrowseCatalogHandler(container.catalog)
    try:
        dto = ProductDTO.of(handler.get(product_id))
        related = [ProductDTO.of(p) for p in handler.related(product_id)]
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{dto.name}  ({dto.category})")
    click.echo(f"ID:      {dto.id}")
    click.echo(f"Price:   {dto.price}")
    click.echo(f"Rating:  {dto.rating} ({dto.review_count} reviews)")
    click.echo(f"Stock:   {_stock_label(dto.stock)}")
    if dto.description:
        click.echo()
        click.echo(f"  {dto.description}")
    if related:
        click.echo()
        click.echo("You might also like:")
        for p in related:
            click.echo(f"  {p.id:<14} {p.name:<24} {p.price:>10}")


@click.command("categories")
@click.pass_obj
def catalog_categories(container: Container) -> None:
    """List the categories to filter by."""
    for category in BrowseCatalogHandler(container.catalog).categories():
        click.echo(category)


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Unit price, e.g. 19.99.")
@click.option("--stock", required=True, type=int, help="Units in stock.")
@click.option("--description", default="", help="Description.")
@click.option("--category", default="General", show_default=True, help="Category.")
@click.option("--image", "image_ref", default=None, help="Image URL or path.")
@click.pass_obj
def catalog_add(
    container: Container,
    name: str,
    price: str,
    stock: int,
    description: str,
    category: str,
    image_ref: str | None,
) -> None:
    """Add a product (admin only)."""
    draft = ProductDraft(
        name=name,
        price=price,
        stock=stock,
        description=description,
        category=category,
        image_ref=image_ref,
    )
    try:
        handler = AdminCatalogHandler(container.catalog, container.restore_session().identity)
        product = handler.add(draft)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} created: {product.name} at {product.price}")


@click.command("update")
@click.argument("product_id")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New unit price.")
@click.option("--stock", default=None, type=int, help="New stock level.")
@click.option("--description", default=None, help="New description.")
@click.option("--category", default=None, help="New category.")
@click.option("--image", "image_ref", default=None, help="New image URL or path.")
@click.pass_obj
def catalog_update(container: Container, product_id: str, **fields: object) -> None:
    """Edit a product (admin only). Unspecified fields keep their values."""
    patch = {key: value for key, value in fields.items() if value is not None}
    if not patch:
        raise click.UsageError("Nothing to update; pass at least one field option.")
    try:
        handler = AdminCatalogHandler(container.catalog, container.restore_session().identity)
        product = handler.update(product_id, patch)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} updated.")


@click.command("delete")
@click.argument("product_id")
@click.confirmation_option(prompt="Are you sure you want to delete this product?")
@click.pass_obj
def catalog_delete(container: Container, product_id: str) -> None:
    """Delete a product (admin only). Past orders are unaffected."""
    try:
        handler = AdminCatalogHandler(container.catalog, container.restore_session().identity)
        handler.delete(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deleted.")
