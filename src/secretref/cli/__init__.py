"""Command line interface for secretref."""

import click

from secretref.cli.check import check
from secretref.cli.resolve import resolve_reference
from secretref.version import PACKAGE_NAME, PACKAGE_VERSION


@click.group(invoke_without_command=True)
@click.version_option(PACKAGE_VERSION, prog_name=PACKAGE_NAME)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """secretref CLI"""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(resolve_reference)
cli.add_command(check)
