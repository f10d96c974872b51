import click
import uvicorn

from storefront.application.seed_catalog import SeedCatalogHandler
from storefront.domain.exceptions import StoreError
from storefront.infrastructure.bootstrap import services
from storefront.infrastructure.cli.order_commands import order_list, order_place
from storefront.infrastructure.cli.product_commands import product_list, product_set_stock
from storefront.infrastructure.config import get_settings
from storefront.infrastructure.logging_setup import setup_logging


@click.group()
def cli() -> None:
    """Storefront: internal employee ordering."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)


@cli.group()
def order() -> None:
    """Place and review orders."""


@cli.group()
def product() -> None:
    """Browse the catalog and adjust stock."""


@cli.command("serve")
@click.option("--host", default=None, help="Bind address (default: HOST setting).")
@click.option("--port", default=None, type=int, help="Port (default: PORT setting).")
def serve(host: str | None, port: int | None) -> None:
    """Run the HTTP API."""
    from storefront.infrastructure.web.app import create_app

    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=host or settings.host,
        port=port or settings.port,
        log_config=None,
    )


@cli.command("seed")
def seed() -> None:
    """Load the default catalog if the catalog is empty."""
    try:
        added = SeedCatalogHandler(services().product_repo).handle()
    except StoreError as exc:
        raise click.ClickException(str(exc))

    if added:
        click.echo(f"Seeded {added} products.")
    else:
        click.echo("Catalog already populated; nothing to seed.")


# Register subcommands
order.add_command(order_list)
order.add_command(order_place)
product.add_command(product_list)
product.add_command(product_set_stock)
