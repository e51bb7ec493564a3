"""Table rendering for listings and diffs."""

from rich.table import Table
from rich.text import Text

from appversions.core.diff import DiffRow

PRODUCTION_ENVIRONMENT = "production"


def plain_table(*columns: str) -> Table:
    """Borderless table with one bold header line."""
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    for column in columns:
        table.add_column(column, no_wrap=True)
    return table


def render_environment(environment: str) -> Text:
    if environment == PRODUCTION_ENVIRONMENT:
        return Text(environment, style="bold")
    return Text(environment)


def render_diff_table(rows: list[DiffRow]) -> Table:
    """Build the cross-host comparison table.

    Current versions are colored by their color slot; previous versions are
    printed as-is.
    """
    table = plain_table("Application", "Hostname", "Environment", "CurrentVersion", "PreviousVersion")
    for row in rows:
        table.add_row(
            row.application,
            row.hostname,
            render_environment(row.environment),
            Text(row.current, style=row.color or ""),
            row.previous,
        )
    return table
