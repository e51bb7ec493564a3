"""Discover versions from tagged container images.

An image tagged ``<application>-<environment>`` is the current version of that
application, one tagged ``<application>-<environment>-previous`` the previous
version. The version itself is read from the image's ``version`` label.
"""

import logging
import re
from typing import TYPE_CHECKING

from appversions.core.application import VersionKind
from appversions.core.docker.abc import Docker, ImageTag
from appversions.core.sources.abc import VersionFact, VersionSource

if TYPE_CHECKING:
    from appversions.core.registry import Registry

logger = logging.getLogger(__name__)


def group_tags_by_image(images: list[ImageTag]) -> dict[str, list[str]]:
    """Group tags by image id, keeping listing order."""
    grouped: dict[str, list[str]] = {}
    for image in images:
        grouped.setdefault(image.image_id, []).append(image.tag)
    return grouped


def match_environment_tag(tags: list[str], environment_name: str) -> tuple[str, VersionKind] | None:
    """Find the application an image is deployed as in the given environment.

    A current tag takes precedence over a previous tag on the same image.

    Returns:
        (application, kind), or None if no tag matches
    """
    env = re.escape(environment_name)
    current_re = re.compile(rf"^(.+)-{env}$")
    previous_re = re.compile(rf"^(.+)-{env}-previous$")

    for tag in tags:
        match = current_re.match(tag)
        if match:
            return match.group(1), VersionKind.CURRENT
    for tag in tags:
        match = previous_re.match(tag)
        if match:
            return match.group(1), VersionKind.PREVIOUS
    return None


def scan_docker_images(
    docker: Docker, environment_name: str, repository: str | None
) -> list[VersionFact]:
    """Collect facts from local images tagged for the environment.

    Args:
        docker: Docker operations
        environment_name: Environment suffix the tags must carry
        repository: Optional repository to restrict the listing to

    Returns:
        One fact per matching image. No daemon, no images or no matching
        tags all yield an empty list.
    """
    if not docker.is_daemon_running():
        logger.debug("Docker daemon not reachable, skipping image scan")
        return []

    facts: list[VersionFact] = []
    for image_id, tags in group_tags_by_image(docker.list_images(repository)).items():
        matched = match_environment_tag(tags, environment_name)
        if matched is None:
            continue
        application, kind = matched

        try:
            details = docker.inspect_image(image_id)
        except (RuntimeError, ValueError) as e:
            logger.debug("Skipping image %s (%s): %s", image_id, application, e)
            continue

        facts.append(VersionFact(application, kind, details.version, details.created))
    return facts


class DockerImageSource(VersionSource):
    """Version source scanning local container images."""

    def __init__(
        self,
        registry: "Registry",
        docker: Docker,
        environment_name: str,
        docker_repository: str | None = None,
    ) -> None:
        super().__init__(registry)
        self.docker = docker
        self.environment_name = environment_name
        self.docker_repository = docker_repository

    def scan(self) -> list[VersionFact]:
        return scan_docker_images(self.docker, self.environment_name, self.docker_repository)
