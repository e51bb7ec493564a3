"""Real Docker operations using subprocess to call the Docker CLI.

All operations follow LBYL philosophy: callers check is_daemon_running()
first, other failures bubble up as RuntimeError.
"""

import re
import subprocess
from datetime import datetime

from appversions.core.docker.abc import Docker, ImageDetails, ImageTag
from appversions.core.subprocess import run_subprocess_with_context

_FIELD_SEPARATOR = "||"
_FRACTION_RE = re.compile(r"\.(\d+)")


def parse_docker_timestamp(value: str) -> datetime:
    """Parse Docker's RFC 3339 timestamps.

    Docker reports nanosecond precision ("2019-03-01T10:15:30.123456789Z"),
    which datetime cannot represent. The fraction is truncated to microseconds.

    Raises:
        ValueError: If the value is not a timestamp
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    return datetime.fromisoformat(text)


class RealDocker(Docker):
    """Real Docker operations using Docker CLI via subprocess.

    Example:
        docker = RealDocker()
        if docker.is_daemon_running():
            for image in docker.list_images("registry.example.com/apps"):
                ...
    """

    def is_daemon_running(self) -> bool:
        """Check if Docker daemon is running.

        Returns:
            True if Docker daemon responds to `docker info`, False otherwise
        """
        try:
            result = subprocess.run(
                ["docker", "info"],
                capture_output=True,
                check=False,
                timeout=5,
            )
            return result.returncode == 0
        except (FileNotFoundError, subprocess.TimeoutExpired):
            return False

    def list_images(self, repository: str | None) -> list[ImageTag]:
        cmd = ["docker", "images", "--format", "{{.ID}} {{.Tag}}"]
        if repository:
            cmd.append(repository)
        result = run_subprocess_with_context(cmd, operation_context="list docker images")

        images: list[ImageTag] = []
        for line in result.stdout.splitlines():
            parts = line.split()
            if len(parts) != 2:
                continue
            images.append(ImageTag(image_id=parts[0], tag=parts[1]))
        return images

    def inspect_image(self, image_id: str) -> ImageDetails:
        result = run_subprocess_with_context(
            [
                "docker",
                "inspect",
                image_id,
                "--format",
                '{{index .Config.Labels "version"}}||{{.Created}}',
            ],
            operation_context=f"inspect docker image {image_id}",
        )
        version, separator, created = result.stdout.strip().partition(_FIELD_SEPARATOR)
        if not separator:
            raise ValueError(f"Unexpected inspect output for image {image_id}: {result.stdout!r}")
        if not version or version == "<no value>":
            raise ValueError(f"Image {image_id} has no version label")
        return ImageDetails(version=version, created=parse_docker_timestamp(created))
