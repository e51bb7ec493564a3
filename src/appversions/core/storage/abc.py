"""Object storage interface for exchanging host snapshots.

Each host uploads its snapshot under ``versions/<environment>/<instance-id>.json``;
the diff and remote listing download all of them again.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

SNAPSHOT_PREFIX = "versions/"


def snapshot_key(environment_name: str, instance_id: str) -> str:
    """Remote key under which a host's snapshot is stored."""
    return f"{SNAPSHOT_PREFIX}{environment_name}/{instance_id}.json"


class AccessDeniedError(Exception):
    """Raised when the storage backend rejects a request.

    Attributes:
        credentials_supplied: False when no credentials were configured at all,
            True when configured credentials were rejected
    """

    def __init__(self, message: str, *, credentials_supplied: bool) -> None:
        super().__init__(message)
        self.credentials_supplied = credentials_supplied


@dataclass(frozen=True)
class RemoteObject:
    """Listing entry of a stored object."""

    key: str
    last_modified: datetime


class ObjectStore(ABC):
    """Abstract interface for snapshot storage.

    All operations raise AccessDeniedError when credentials are absent or
    invalid.
    """

    @abstractmethod
    def upload(self, local_path: Path, remote_key: str) -> None:
        """Upload a local file under the given key."""
        ...

    @abstractmethod
    def list(self, key_prefix: str) -> list[RemoteObject]:
        """List objects whose key starts with the prefix."""
        ...

    @abstractmethod
    def download(self, remote_key: str, local_path: Path) -> None:
        """Download an object into a local file."""
        ...
