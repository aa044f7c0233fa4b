"""relgen CLI - relgen command."""

import click

from relgen.cli.catalog import catalog_command
from relgen.cli.generate import generate_command
from relgen.cli.verify import verify_command
from relgen.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="relgen")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """relgen - Sorbet relation declarations for ActiveRecord models."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "INFO")


cli.add_command(generate_command, name="generate")
cli.add_command(verify_command, name="verify")
cli.add_command(catalog_command, name="catalog")


if __name__ == "__main__":
    cli()
