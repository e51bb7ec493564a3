import re

import click

from appversions.cli.options import filter_option, json_option
from appversions.cli.output import data_console, emit_json
from appversions.cli.rendering import plain_table
from appversions.core.context import VersionsContext
from appversions.core.filters import matches_all


@click.command("list")
@json_option()
@filter_option("Application name must match.")
@click.pass_obj
def list_cmd(ctx: VersionsContext, as_json: bool, filters: list[re.Pattern[str]]) -> None:
    """List application versions of this host."""
    applications = ctx.build_registry().collect()
    selected = [
        applications[name] for name in sorted(applications) if matches_all(name, filters)
    ]

    if as_json:
        emit_json([application.to_snapshot_entry().model_dump(mode="json") for application in selected])
        return

    table = plain_table("application", "version")
    for application in selected:
        table.add_row(application.name, application.display_string())
    data_console().print(table)
