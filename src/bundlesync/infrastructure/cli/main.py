import click

from bundlesync.infrastructure.cli.bundle_commands import bundle_check, bundle_list
from bundlesync.infrastructure.cli.sale_commands import sale_order, sale_simulate
from bundlesync.infrastructure.cli.stock_commands import stock_set, stock_show
from bundlesync.infrastructure.config import get_config
from bundlesync.infrastructure.logging import configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """bundlesync: bundle inventory reconciliation"""
    if ctx.obj is None:
        ctx.obj = get_config()
    configure_logging(ctx.obj.log_level)


@cli.group()
def sale() -> None:
    """Simulate sales and replay storefront orders."""


@cli.group()
def bundle() -> None:
    """Inspect and check bundle definitions."""


@cli.group()
def stock() -> None:
    """Inspect and adjust product stock."""


# Register subcommands
sale.add_command(sale_simulate)
sale.add_command(sale_order)
bundle.add_command(bundle_list)
bundle.add_command(bundle_check)
stock.add_command(stock_show)
stock.add_command(stock_set)
