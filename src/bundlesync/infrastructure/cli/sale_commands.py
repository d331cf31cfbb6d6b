"""CLI commands for simulating sales and replaying orders."""

from __future__ import annotations

import click

from bundlesync.application.preview_sale import PreviewSaleHandler
from bundlesync.application.process_order import ProcessOrderHandler
from bundlesync.application.simulate_sale import SimulateSaleHandler
from bundlesync.domain.exceptions import BundleSyncError
from bundlesync.infrastructure.bootstrap import (
    bundle_registry,
    order_line_source,
    stock_ledger,
)
from bundlesync.infrastructure.config import StoreConfig


@click.command("simulate")
@click.option("--product-id", required=True, type=int, help="Product sold.")
@click.option("--quantity", default=1, type=int, show_default=True, help="Units sold.")
@click.option("--dry-run", is_flag=True, default=False, help="Show the writes without making them.")
@click.pass_obj
def sale_simulate(config: StoreConfig, product_id: int, quantity: int, dry_run: bool) -> None:
    """Simulate a sale and reconcile bundle stock."""
    if dry_run:
        try:
            config.require_credentials()
            preview = PreviewSaleHandler(stock_ledger(config), bundle_registry(config))
            planned = preview.handle(product_id, quantity)
        except BundleSyncError as exc:
            raise click.ClickException(str(exc))

        click.echo(f"{'Product':>8} {'Kind':<12} {'Current':>8} {'New':>8}")
        click.echo("-" * 39)
        for write in planned:
            current = "-" if write.current_level is None else write.current_level
            click.echo(
                f"{write.product_id:>8} {write.kind:<12} {current:>8} {write.new_level:>8}"
            )
        return

    try:
        config.require_credentials()
        handler = SimulateSaleHandler(stock_ledger(config), bundle_registry(config))
        dto = handler.handle(product_id, quantity)
    except BundleSyncError as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sale simulated: product #{dto.product_id} x {dto.quantity}")


@click.command("order")
@click.option("--order-id", required=True, type=int, help="Storefront order ID.")
@click.pass_obj
def sale_order(config: StoreConfig, order_id: int) -> None:
    """Reconcile stock for a stored storefront order."""
    try:
        config.require_credentials()
        handler = ProcessOrderHandler(
            order_lines=order_line_source(config),
            stock_ledger=stock_ledger(config),
            bundle_registry=bundle_registry(config),
        )
        dto = handler.handle(order_id)
    except BundleSyncError as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.order_id} reconciled ({len(dto.items)} line items)")
    for item in dto.items:
        click.echo(f"  product #{item.product_id} x {item.quantity}")
