import re

import click

from appversions.cli.errors import storage_error_boundary
from appversions.cli.options import filter_option, json_option, last_modified_option
from appversions.cli.output import data_console, emit_json
from appversions.cli.remote import fetch_snapshots
from appversions.cli.rendering import plain_table
from appversions.core.application import Application
from appversions.core.context import VersionsContext


@click.command("list-remote")
@json_option()
@filter_option("Storage key must match.")
@last_modified_option()
@click.pass_obj
@storage_error_boundary
def list_remote_cmd(
    ctx: VersionsContext,
    as_json: bool,
    filters: list[re.Pattern[str]],
    last_modified: re.Pattern[str] | None,
) -> None:
    """List application versions uploaded by all hosts.

    \b
    Examples:
        # Versions of production hosts uploaded in May 2024
        appversions list-remote -f production -m 2024-05
    """
    remote_snapshots = fetch_snapshots(ctx.store, filters, last_modified)
    remote_snapshots.sort(key=lambda item: item.remote.last_modified)

    rows: list[dict[str, str]] = []
    for item in remote_snapshots:
        for entry in item.snapshot.applications:
            rows.append(
                {
                    "environment": item.snapshot.environment,
                    "hostname": item.snapshot.short_host_name,
                    "application": entry.application,
                    "version": Application.from_snapshot_entry(entry).display_string(),
                    "last_modified": item.remote.last_modified.isoformat(),
                }
            )

    if as_json:
        emit_json(rows)
        return

    table = plain_table("environment", "hostname", "application", "version", "last_modified")
    for row in rows:
        table.add_row(*row.values())
    data_console().print(table)
