"""CLI commands for placing and reviewing orders."""

from __future__ import annotations

import click

from storefront.application.dto import OrderRequest
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.place_order import PlaceOrderHandler
from storefront.domain.exceptions import DomainException, StoreError
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.bootstrap import services


@click.command("place")
@click.option("--product-id", required=True, type=int, help="Product ID.")
@click.option("--size", required=True, help="Variant size.")
@click.option("--color", required=True, help="Variant color.")
@click.option("--quantity", required=True, type=int, help="Units to order.")
@click.option("--employee-code", required=True, help="Employee code.")
@click.option("--name", required=True, help="Employee name.")
@click.option("--email", required=True, help="Employee email.")
@click.option("--phone", required=True, help="Employee phone.")
def order_place(
    product_id: int,
    size: str,
    color: str,
    quantity: int,
    employee_code: str,
    name: str,
    email: str,
    phone: str,
) -> None:
    """Place an order (deducts stock and sends the notification)."""
    request = OrderRequest(
        product_id=product_id,
        size=size,
        color=color,
        quantity=quantity,
        employee_code=employee_code,
        name=name,
        email=email,
        phone=phone,
    )

    try:
        active = services()
        handler = PlaceOrderHandler(
            product_repo=active.product_repo,
            order_repo=active.order_repo,
            notifier=active.notifier,
        )
        placed = handler.handle(request)
    except (DomainException, StoreError) as exc:
        raise click.ClickException(str(exc))

    label = f"Order #{placed.order_id}" if placed.recorded else "Order (not recorded)"
    click.echo(f"{label} placed: {placed.quantity} x {placed.size}/{placed.color}")
    click.echo(f"Total: {Money(placed.total)}")
    click.echo(f"Remaining stock: {placed.new_stock}")
    click.echo(f"Email sent: {'yes' if placed.email_sent else 'no'}")


@click.command("list")
def order_list() -> None:
    """List recorded orders, newest first."""
    try:
        orders = ListOrdersHandler(order_repo=services().order_repo).handle()
    except StoreError as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Product':<28} {'Variant':<14} {'Qty':>4} {'Total':>12}  Employee")
    click.echo("-" * 80)
    for o in orders:
        variant = f"{o.size}/{o.color}"
        click.echo(
            f"{o.id:<6} {o.product_name:<28} {variant:<14} {o.quantity:>4} "
            f"{str(Money(o.total)):>12}  {o.employee_code}"
        )
