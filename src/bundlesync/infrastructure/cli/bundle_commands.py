"""CLI commands for bundle definitions."""

from __future__ import annotations

import click

from bundlesync.application.check_bundle import CheckBundleHandler
from bundlesync.application.show_bundles import ShowBundlesHandler
from bundlesync.domain.exceptions import BundleSyncError
from bundlesync.domain.model.bundle import BundleDefinition
from bundlesync.infrastructure.bootstrap import bundle_registry, stock_ledger
from bundlesync.infrastructure.config import StoreConfig


def _parse_items(raw: str) -> tuple[list[int], dict[int, int]]:
    """Parse '1:2,2:1' into linked ids and a quantity mapping."""
    linked: list[int] = []
    quantities: dict[int, int] = {}
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        pid_str, _, qty_str = pair.partition(":")
        try:
            pid = int(pid_str)
            qty = int(qty_str) if qty_str else 1
        except ValueError:
            raise click.BadParameter(
                f"Invalid item '{pair}'. Expected 'ProductId:Quantity'."
            )
        linked.append(pid)
        quantities[pid] = qty
    return linked, quantities


@click.command("list")
@click.pass_obj
def bundle_list(config: StoreConfig) -> None:
    """List bundles with their constituents and achievable stock."""
    handler = ShowBundlesHandler(stock_ledger(config), bundle_registry(config))

    try:
        bundles = handler.handle()
    except BundleSyncError as exc:
        raise click.ClickException(str(exc))

    if not bundles:
        click.echo("No bundles found.")
        return

    for dto in bundles:
        recorded = "-" if dto.recorded_stock is None else dto.recorded_stock
        click.echo(
            f"Bundle #{dto.bundle_id}  achievable={dto.achievable_stock}  recorded={recorded}"
        )
        for c in dto.constituents:
            level = "missing" if c.inventory_level is None else c.inventory_level
            click.echo(f"  product #{c.product_id:<6} x{c.required_quantity:<4} stock={level}")


@click.command("check")
@click.option("--id", "bundle_id", required=True, type=int, help="Bundle product ID.")
@click.option("--items", default="", help="Constituents as 'ProductId:Qty,ProductId:Qty'.")
@click.option("--save", is_flag=True, default=False, help="Store the definition if it is valid.")
@click.pass_obj
def bundle_check(config: StoreConfig, bundle_id: int, items: str, save: bool) -> None:
    """Validate a bundle definition, optionally saving it."""
    linked, quantities = _parse_items(items)
    handler = CheckBundleHandler(stock_ledger(config))

    try:
        dto = handler.handle(bundle_id, linked, quantities)
    except BundleSyncError as exc:
        raise click.ClickException(str(exc))

    if not dto.is_valid:
        for error in dto.errors:
            click.echo(f"  - {error}", err=True)
        raise click.ClickException(f"Bundle #{bundle_id} is not valid")

    click.echo(f"Bundle #{bundle_id} is valid: {dto.initial_stock} units can be built")

    if save:
        try:
            bundle_registry(config).save_bundle(
                BundleDefinition.of(bundle_id, linked, quantities)
            )
        except BundleSyncError as exc:
            raise click.ClickException(str(exc))
        click.echo(f"Bundle #{bundle_id} saved")
