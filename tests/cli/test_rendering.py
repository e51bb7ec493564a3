"""Tests for table rendering."""

from rich.console import Console

from appversions.cli.rendering import render_diff_table, render_environment
from appversions.core.diff import DiffRow


def render(table: object) -> str:
    console = Console(width=200, color_system=None)
    with console.capture() as capture:
        console.print(table)
    return capture.get()


def test_production_environment_is_bold() -> None:
    assert str(render_environment("production").style) == "bold"
    assert str(render_environment("staging").style) == ""


def test_diff_table_colors_current_version_only() -> None:
    rows = [DiffRow("api", "web01", "production", "2.0", "1.9", 1)]

    table = render_diff_table(rows)

    current_cell = table.columns[3]._cells[0]
    previous_cell = table.columns[4]._cells[0]
    assert str(current_cell.style) == "yellow"
    assert previous_cell == "1.9"


def test_diff_table_lists_every_row() -> None:
    rows = [
        DiffRow("api", "web01", "production", "2.0", "", 0),
        DiffRow("api", "web02", "staging", "", "", None),
    ]

    lines = render(render_diff_table(rows)).strip().splitlines()

    assert lines[0].split() == ["Application", "Hostname", "Environment", "CurrentVersion", "PreviousVersion"]
    assert lines[1].split() == ["api", "web01", "production", "2.0"]
    assert lines[2].split() == ["api", "web02", "staging"]
