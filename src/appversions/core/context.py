"""Application context with dependency injection."""

from dataclasses import dataclass
from datetime import datetime

from appversions.core.config import VersionsConfig, get_fqdn, load_config
from appversions.core.docker.abc import Docker
from appversions.core.docker.real import RealDocker
from appversions.core.registry import Registry
from appversions.core.sources.docker_images import DockerImageSource
from appversions.core.sources.release_directory import ReleaseDirectorySource
from appversions.core.storage.abc import ObjectStore
from appversions.core.storage.s3 import S3ObjectStore
from appversions.core.time.abc import Time
from appversions.core.time.real import RealTime


@dataclass(frozen=True)
class VersionsContext:
    """Immutable context holding all dependencies for appversions operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    config: VersionsConfig
    host_name: str
    docker: Docker
    store: ObjectStore
    time: Time

    def now(self) -> datetime:
        return self.time.now()

    def build_registry(self) -> Registry:
        """Create a registry with every configured version source registered.

        Each call returns a fresh registry; a command should build one and use
        it for its whole run.
        """
        registry = Registry(
            environment_name=self.config.environment_name,
            instance_id=self.config.instance_id,
            host_name=self.host_name,
            storage_directory=self.config.version_directory,
            time=self.time,
            group_ownership=self.config.group_ownership,
        )
        registry.add_source(
            ReleaseDirectorySource(registry, self.config.parent_release_directory)
        )
        registry.add_source(
            DockerImageSource(
                registry,
                self.docker,
                self.config.environment_name,
                self.config.docker_repository,
            )
        )
        return registry


def create_context() -> VersionsContext:
    """Create production context with real implementations.

    Example:
        >>> ctx = create_context()
        >>> registry = ctx.build_registry()
        >>> applications = registry.collect()
    """
    host_name = get_fqdn()
    config = load_config(host_name)
    store = S3ObjectStore(
        bucket_name=config.bucket_name,
        region=config.bucket_region,
        access_key_id=config.access_key_id,
        secret_access_key=config.secret_access_key,
    )
    return VersionsContext(
        config=config,
        host_name=host_name,
        docker=RealDocker(),
        store=store,
        time=RealTime(),
    )
