"""Tests for context creation."""

from pathlib import Path
from unittest.mock import patch

import pytest

from appversions.core.context import create_context
from appversions.core.docker.real import RealDocker
from appversions.core.storage.s3 import S3ObjectStore
from appversions.core.time.real import RealTime

from tests.fakes.context import create_test_context


def test_create_context_uses_real_implementations(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("APPVERSIONS_ENVIRONMENT_NAME", "qa")

    with (
        patch("appversions.core.context.get_fqdn", return_value="db01.example.com"),
        patch("appversions.core.storage.s3.boto3.client"),
    ):
        ctx = create_context()

    assert ctx.host_name == "db01.example.com"
    assert ctx.config.environment_name == "qa"
    assert ctx.config.instance_id == "db01.example.com".encode().hex()
    assert isinstance(ctx.docker, RealDocker)
    assert isinstance(ctx.store, S3ObjectStore)
    assert isinstance(ctx.time, RealTime)


def test_build_registry_reflects_config(tmp_path: Path) -> None:
    ctx = create_test_context(tmp_path, environment_name="production", group_ownership="deploy")

    registry = ctx.build_registry()

    assert registry.environment_name == "production"
    assert registry.instance_id == "i-test"
    assert registry.storage_directory == tmp_path / "versions"
    assert registry.group_ownership == "deploy"
    assert len(registry.sources) == 2


def test_build_registry_returns_fresh_registry(tmp_path: Path) -> None:
    ctx = create_test_context(tmp_path)

    assert ctx.build_registry() is not ctx.build_registry()
