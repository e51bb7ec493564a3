import dataclasses
import logging
import re

import click

from appversions.cli.commands.generate_metadata_cmd import write_metadata_file
from appversions.cli.errors import storage_error_boundary
from appversions.cli.options import filter_option, json_option
from appversions.cli.output import data_console, emit_json
from appversions.cli.remote import fetch_snapshots
from appversions.cli.rendering import render_diff_table
from appversions.core.context import VersionsContext
from appversions.core.diff import build_diff

logger = logging.getLogger(__name__)


@click.command("show-diff")
@json_option()
@filter_option("Application name must match.")
@click.pass_obj
@storage_error_boundary
def show_diff_cmd(ctx: VersionsContext, as_json: bool, filters: list[re.Pattern[str]]) -> None:
    """Compare application versions across all hosts.

    Versions of the same application share a color when they are equal,
    ignoring a -SNAPSHOT suffix.

    \b
    Examples:
        # Only applications whose name contains "accounting"
        appversions show-diff -f accounting

        # Two applications at once
        appversions show-diff -f '(bankfileimporter|mailconsumer)'
    """
    # Refresh this host's snapshot file; a failure must not block the diff.
    try:
        write_metadata_file(ctx, ctx.build_registry())
    except (OSError, RuntimeError, ValueError) as e:
        logger.debug("Could not regenerate local metadata file: %s", e)

    snapshots = [item.snapshot for item in fetch_snapshots(ctx.store)]
    rows = build_diff(snapshots, filters)

    if as_json:
        emit_json([dataclasses.asdict(row) | {"color": row.color} for row in rows])
        return

    data_console().print(render_diff_table(rows))
