"""Tests for the show-diff command."""

import json
from datetime import UTC, datetime
from pathlib import Path

from click.testing import CliRunner

from appversions.cli.cli import cli

from tests.commands.helpers import stored_snapshot
from tests.fakes.context import create_test_context
from tests.fakes.object_store import FakeObjectStore


def make_store() -> FakeObjectStore:
    newest_key, newest_doc = stored_snapshot(
        "web01.prod.example.com", "production", {"api": ("2.0", "1.9"), "orders": ("3.0", None)}
    )
    older_key, older_doc = stored_snapshot(
        "web02.staging.example.com", "staging", {"api": ("2.0-SNAPSHOT", None), "mailer": ("1.0", None)}
    )
    oldest_key, oldest_doc = stored_snapshot(
        "web03.staging.example.com", "staging", {"api": ("2.1", "2.0")}
    )
    return FakeObjectStore(
        objects={newest_key: newest_doc, older_key: older_doc, oldest_key: oldest_doc},
        last_modified={
            newest_key: datetime(2024, 5, 3, tzinfo=UTC),
            older_key: datetime(2024, 5, 2, tzinfo=UTC),
            oldest_key: datetime(2024, 5, 1, tzinfo=UTC),
        },
    )


def test_show_diff_json_rows_and_colors(tmp_path: Path) -> None:
    ctx = create_test_context(tmp_path, store=make_store())

    result = CliRunner().invoke(cli, ["show-diff", "--json"], obj=ctx)

    assert result.exit_code == 0, result.output
    rows = json.loads(result.stdout)
    assert [(r["application"], r["hostname"], r["current"], r["color_slot"]) for r in rows] == [
        ("api", "web01", "2.0", 0),
        ("api", "web02", "2.0-SNAPSHOT", 0),
        ("api", "web03", "2.1", 1),
        ("mailer", "web02", "1.0", 0),
        ("orders", "web01", "3.0", 0),
    ]
    assert rows[0]["color"] == rows[1]["color"] == "green"
    assert rows[2]["color"] == "yellow"
    assert rows[0]["previous"] == "1.9"
    assert rows[1]["previous"] == ""


def test_show_diff_filter(tmp_path: Path) -> None:
    ctx = create_test_context(tmp_path, store=make_store())

    result = CliRunner().invoke(cli, ["show-diff", "-j", "-f", "(mailer|orders)"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert [r["application"] for r in json.loads(result.stdout)] == ["mailer", "orders"]


def test_show_diff_table(tmp_path: Path) -> None:
    ctx = create_test_context(tmp_path, store=make_store())

    result = CliRunner().invoke(cli, ["show-diff", "-f", "api"], obj=ctx)

    assert result.exit_code == 0, result.output
    lines = result.stdout.strip().splitlines()
    assert lines[0].split() == ["Application", "Hostname", "Environment", "CurrentVersion", "PreviousVersion"]
    assert lines[1].split() == ["api", "web01", "production", "2.0", "1.9"]
    assert lines[2].split() == ["api", "web02", "staging", "2.0-SNAPSHOT"]


def test_show_diff_with_wrong_credentials(tmp_path: Path) -> None:
    ctx = create_test_context(tmp_path, store=FakeObjectStore(deny_access=True))

    result = CliRunner().invoke(cli, ["show-diff"], obj=ctx)

    assert result.exit_code == 1
    assert "Wrong credentials for object storage. Access denied. Abort." in result.stderr


def test_show_diff_regenerates_local_metadata_file(tmp_path: Path) -> None:
    store = make_store()
    ctx = create_test_context(tmp_path, store=store)

    result = CliRunner().invoke(cli, ["show-diff", "-j"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert ctx.config.metadata_path.exists()
    assert store.uploads == []


def test_show_diff_ignores_unreadable_local_metadata(tmp_path: Path) -> None:
    ctx = create_test_context(tmp_path, store=make_store())
    ctx.config.version_directory.mkdir(parents=True)
    (ctx.config.version_directory / "versions.application.6f.json").write_text("{broken")

    result = CliRunner().invoke(cli, ["show-diff", "-j"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert not ctx.config.metadata_path.exists()
    assert len(json.loads(result.stdout)) == 5
