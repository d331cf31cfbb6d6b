"""CLI commands for product stock levels."""

from __future__ import annotations

import click

from bundlesync.domain.exceptions import BundleSyncError
from bundlesync.infrastructure.bootstrap import stock_ledger
from bundlesync.infrastructure.config import StoreConfig


@click.command("show")
@click.pass_obj
def stock_show(config: StoreConfig) -> None:
    """Show current stock levels."""
    try:
        products = stock_ledger(config).list_all()
    except BundleSyncError as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Stock':>8}")
    click.echo("-" * 36)
    for p in products:
        click.echo(f"{p.id:<6} {p.name or '':<20} {p.inventory_level:>8}")


@click.command("set")
@click.option("--product-id", required=True, type=int, help="Product ID.")
@click.option("--level", required=True, type=click.IntRange(min=0), help="New stock level.")
@click.pass_obj
def stock_set(config: StoreConfig, product_id: int, level: int) -> None:
    """Overwrite a product's stock level."""
    try:
        stock_ledger(config).write_level(product_id, level)
    except BundleSyncError as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for product #{product_id} set to {level}")
