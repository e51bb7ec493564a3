from appversions.core.sources.abc import VersionFact, VersionSource
from appversions.core.sources.docker_images import DockerImageSource, scan_docker_images
from appversions.core.sources.release_directory import (
    ReleaseDirectorySource,
    scan_release_directory,
)

__all__ = [
    "DockerImageSource",
    "ReleaseDirectorySource",
    "VersionFact",
    "VersionSource",
    "scan_docker_images",
    "scan_release_directory",
]
