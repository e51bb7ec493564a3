import logging
import os

import click

from appversions.cli.commands.generate_metadata_cmd import generate_metadata_file_cmd
from appversions.cli.commands.list_cmd import list_cmd
from appversions.cli.commands.list_remote_cmd import list_remote_cmd
from appversions.cli.commands.show_diff_cmd import show_diff_cmd
from appversions.cli.commands.update_cmd import update_cmd
from appversions.core.context import create_context
from appversions.version import __version__

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

DEBUG_ENV_VAR = "APPVERSIONS_DEBUG"


def configure_logging(debug: bool) -> None:
    if debug or os.getenv(DEBUG_ENV_VAR):
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__version__, prog_name="appversions")
@click.option("-d", "--debug", is_flag=True, help="Show debug output.")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Track current and previous application versions across hosts."""
    configure_logging(debug)
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context()


cli.add_command(list_cmd)
cli.add_command(list_remote_cmd)
cli.add_command(show_diff_cmd)
cli.add_command(generate_metadata_file_cmd)
cli.add_command(update_cmd)


def main() -> None:
    """CLI entry point used by the `appversions` console script."""
    cli()
