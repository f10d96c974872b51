"""CLI commands for the catalog."""

from __future__ import annotations

import click

from storefront.application.list_products import ListProductsHandler
from storefront.application.set_variant_stock import SetVariantStockHandler
from storefront.domain.exceptions import DomainException, StoreError
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.bootstrap import services


@click.command("list")
def product_list() -> None:
    """List all products and their variant stock."""
    try:
        products = ListProductsHandler(product_repo=services().product_repo).handle()
    except StoreError as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<28} {'Price':>10}")
    click.echo("-" * 46)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<28} {str(Money(p.price)):>10}")
        for v in p.variants:
            click.echo(f"{'':<6}   {v.size:<6} {v.color:<12} stock={v.stock}")


@click.command("set-stock")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--size", required=True, help="Variant size.")
@click.option("--color", required=True, help="Variant color.")
@click.option("--stock", required=True, type=int, help="New stock level.")
def product_set_stock(product_id: int, size: str, color: str, stock: int) -> None:
    """Overwrite the stock of one variant."""
    try:
        handler = SetVariantStockHandler(product_repo=services().product_repo)
        variant = handler.handle(product_id=product_id, size=size, color=color, stock=stock)
    except (DomainException, StoreError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} {variant.size}/{variant.color} stock set to {variant.stock}")
