"""Docker operations interface for container-image version discovery.

This module defines the abstract interface for the Docker operations the image
scanner needs, following the ops pattern with ABC-based dependency injection
for testability.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ImageTag:
    """One line of ``docker images``: an image id and one of its tags."""

    image_id: str
    tag: str


@dataclass(frozen=True)
class ImageDetails:
    """Version metadata read from ``docker inspect``.

    Attributes:
        version: Value of the image's ``version`` label
        created: Image creation time
    """

    version: str
    created: datetime


class Docker(ABC):
    """Abstract interface for Docker operations.

    Real implementations use subprocess to call the Docker CLI. Fake
    implementations are pure in-memory for unit tests without a Docker daemon.
    """

    @abstractmethod
    def is_daemon_running(self) -> bool:
        """Check if Docker daemon is running and accessible.

        Returns:
            True if Docker daemon is running, False otherwise

        Note:
            This is a LBYL check - call before listing images so hosts without
            Docker simply contribute no facts.
        """
        ...

    @abstractmethod
    def list_images(self, repository: str | None) -> list[ImageTag]:
        """List locally available images, one entry per tag.

        Args:
            repository: Restrict the listing to this repository (None = all)

        Raises:
            RuntimeError: If the docker command fails
        """
        ...

    @abstractmethod
    def inspect_image(self, image_id: str) -> ImageDetails:
        """Read version label and creation time of an image.

        Args:
            image_id: Image id as reported by list_images()

        Raises:
            RuntimeError: If inspection fails
            ValueError: If the image has no version label or an unparseable
                creation time
        """
        ...
