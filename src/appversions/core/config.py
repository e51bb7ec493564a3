"""Configuration data structures and loading.

Provides immutable configuration loaded once at the CLI entry point. Values are
overlaid in this order, later sources winning:

1. built-in defaults
2. /etc/appversions/config.toml
3. ~/.appversions/config.toml
4. APPVERSIONS_<FIELD> environment variables
"""

import os
import socket
import tomllib
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

ENV_PREFIX = "APPVERSIONS_"

SYSTEM_CONFIG_PATH = Path("/etc/appversions/config.toml")


def user_config_path() -> Path:
    return Path.home() / ".appversions" / "config.toml"


def default_config_paths() -> list[Path]:
    return [SYSTEM_CONFIG_PATH, user_config_path()]


def get_fqdn() -> str:
    """Fully qualified name of this host."""
    return socket.getfqdn()


def default_instance_id(host_name: str) -> str:
    """Instance id derived from the host name (hex encoded)."""
    return host_name.encode("utf-8").hex()


@dataclass(frozen=True)
class VersionsConfig:
    """Immutable configuration data.

    Attributes:
        tmp_directory: Where generated snapshot files are written
        version_directory: Where per-application metadata files live
        environment_name: Environment this host belongs to
        instance_id: Unique id of this host in object storage
        group_ownership: Group that written files are handed to (None = keep)
        parent_release_directory: Root of the symlinked release directories
        docker_repository: Restrict image discovery to this repository
        bucket_name: Object storage bucket holding host snapshots
        bucket_region: Region of the bucket
        access_key_id: Explicit storage credentials (None = default chain)
        secret_access_key: Explicit storage credentials (None = default chain)
    """

    tmp_directory: Path
    version_directory: Path
    environment_name: str
    instance_id: str
    group_ownership: str | None
    parent_release_directory: Path
    docker_repository: str | None
    bucket_name: str
    bucket_region: str
    access_key_id: str | None
    secret_access_key: str | None

    @staticmethod
    def defaults(host_name: str) -> "VersionsConfig":
        return VersionsConfig(
            tmp_directory=Path("/tmp"),
            version_directory=Path("/var/tmp"),
            environment_name="staging",
            instance_id=default_instance_id(host_name),
            group_ownership="app",
            parent_release_directory=Path("/data/app/data"),
            docker_repository=None,
            bucket_name="eu-central-1-application-artifacts",
            bucket_region="eu-central-1",
            access_key_id=None,
            secret_access_key=None,
        )

    @property
    def metadata_filename(self) -> str:
        return f"versions.{self.environment_name}.{self.instance_id}.json"

    @property
    def metadata_path(self) -> Path:
        """Location of the generated host snapshot file."""
        return self.tmp_directory / self.metadata_filename


_PATH_FIELDS = {"tmp_directory", "version_directory", "parent_release_directory"}
_OPTIONAL_FIELDS = {"group_ownership", "docker_repository", "access_key_id", "secret_access_key"}


def _coerce(name: str, value: Any) -> Any:
    if name in _PATH_FIELDS:
        return Path(str(value)).expanduser()
    if name in _OPTIONAL_FIELDS and value == "":
        return None
    return str(value)


def apply_overrides(config: VersionsConfig, values: Mapping[str, Any], source: str) -> VersionsConfig:
    """Return a copy of ``config`` with ``values`` applied.

    Raises:
        ValueError: If ``values`` contains an unknown setting
    """
    known = {f.name for f in fields(VersionsConfig)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(f"Unknown setting(s) {', '.join(unknown)} in {source}")
    return replace(config, **{name: _coerce(name, value) for name, value in values.items()})


def load_config(
    host_name: str,
    paths: Sequence[Path] | None = None,
    environ: Mapping[str, str] | None = None,
) -> VersionsConfig:
    """Load configuration from defaults, TOML files and the environment.

    Args:
        host_name: Host name the default instance id is derived from
        paths: Config files to overlay (defaults to system then user file)
        environ: Environment mapping (defaults to os.environ)

    Returns:
        VersionsConfig with all overlays applied

    Raises:
        ValueError: If a config file contains unknown settings
        tomllib.TOMLDecodeError: If a config file is malformed
    """
    config = VersionsConfig.defaults(host_name)

    for path in paths if paths is not None else default_config_paths():
        if not path.exists():
            continue
        data = tomllib.loads(path.read_text(encoding="utf-8"))
        config = apply_overrides(config, data, str(path))

    env = environ if environ is not None else os.environ
    env_values: dict[str, str] = {}
    for f in fields(VersionsConfig):
        key = ENV_PREFIX + f.name.upper()
        if key in env:
            env_values[f.name] = env[key]
    return apply_overrides(config, env_values, "environment")
