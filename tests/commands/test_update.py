"""Tests for the update command."""

import json
from datetime import timedelta
from pathlib import Path

from click.testing import CliRunner

from appversions.cli.cli import cli

from tests.fakes.context import create_test_context
from tests.fakes.object_store import FakeObjectStore
from tests.fakes.time import FakeTime


def test_update_without_arguments_uploads_snapshot(tmp_path: Path) -> None:
    store = FakeObjectStore()
    ctx = create_test_context(tmp_path, store=store)

    result = CliRunner().invoke(cli, ["update"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert [key for _, key in store.uploads] == ["versions/staging/i-test.json"]
    document = json.loads(store.objects["versions/staging/i-test.json"])
    assert document["host_name"] == "app01.staging.example.com"
    assert document["environment"] == "staging"
    assert document["instance_id"] == "i-test"
    assert document["applications"] == []
    assert "Uploaded versions.staging.i-test.json to versions/staging/i-test.json" in result.stderr


def test_update_promotes_previous_version(tmp_path: Path) -> None:
    store = FakeObjectStore()
    clock = FakeTime()
    ctx = create_test_context(tmp_path, store=store, time=clock)
    runner = CliRunner()

    first = runner.invoke(cli, ["update", "-a", "billing", "-v", "1.2.0"], obj=ctx)
    clock.advance(timedelta(minutes=5))
    second = runner.invoke(cli, ["update", "-a", "billing", "-v", "1.3.0"], obj=ctx)

    assert first.exit_code == 0, first.output
    assert second.exit_code == 0, second.output
    document = json.loads(store.objects["versions/staging/i-test.json"])
    assert document["applications"][0]["application"] == "billing"
    assert [(v["type"], v["version"]) for v in document["applications"][0]["version"]] == [
        ("current", "1.3.0"),
        ("previous", "1.2.0"),
    ]


def test_update_writes_metadata_and_snapshot_files(tmp_path: Path) -> None:
    ctx = create_test_context(tmp_path)

    result = CliRunner().invoke(cli, ["update", "-a", "billing", "-v", "1.0.0"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert (ctx.config.version_directory / f"versions.application.{b'billing'.hex()}.json").exists()
    assert ctx.config.metadata_path.exists()


def test_update_previous_flag_records_previous_only(tmp_path: Path) -> None:
    store = FakeObjectStore()
    ctx = create_test_context(tmp_path, store=store)

    result = CliRunner().invoke(cli, ["update", "-a", "billing", "-v", "0.9.0", "--previous"], obj=ctx)

    assert result.exit_code == 0, result.output
    document = json.loads(store.objects["versions/staging/i-test.json"])
    assert document["applications"][0]["version"][0]["type"] == "previous"


def test_update_requires_application_and_version_together(tmp_path: Path) -> None:
    store = FakeObjectStore()

    result = CliRunner().invoke(cli, ["update", "-a", "billing"], obj=create_test_context(tmp_path, store=store))

    assert result.exit_code == 2
    assert "must be given together" in result.stderr
    assert store.uploads == []


def test_update_with_wrong_credentials_exits_1(tmp_path: Path) -> None:
    ctx = create_test_context(tmp_path, store=FakeObjectStore(deny_access=True))

    result = CliRunner().invoke(cli, ["update"], obj=ctx)

    assert result.exit_code == 1
    assert "Wrong credentials for object storage. Access denied. Abort." in result.stderr


def test_update_without_credentials_exits_1(tmp_path: Path) -> None:
    ctx = create_test_context(tmp_path, store=FakeObjectStore(deny_access=False))

    result = CliRunner().invoke(cli, ["update"], obj=ctx)

    assert result.exit_code == 1
    assert "No credentials found for object storage. Access denied. Abort." in result.stderr
