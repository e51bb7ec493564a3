"""Download host snapshots from object storage."""

import logging
import re
import tempfile
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from appversions.core.filters import matches_all
from appversions.core.snapshot import HostSnapshot
from appversions.core.storage.abc import SNAPSHOT_PREFIX, ObjectStore, RemoteObject

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemoteSnapshot:
    """A downloaded snapshot together with its storage listing entry."""

    remote: RemoteObject
    snapshot: HostSnapshot


def fetch_snapshots(
    store: ObjectStore,
    key_filters: Iterable[re.Pattern[str]] = (),
    last_modified_filter: re.Pattern[str] | None = None,
) -> list[RemoteSnapshot]:
    """Download and parse every stored host snapshot.

    Args:
        store: Object storage holding the snapshots
        key_filters: Patterns the object key must all match
        last_modified_filter: Pattern the ISO last-modified time must match

    Returns:
        Snapshots ordered newest first by last-modified time

    Raises:
        AccessDeniedError: If storage rejects the request
        pydantic.ValidationError: If a stored snapshot is malformed
    """
    key_filters = list(key_filters)
    objects = [
        obj
        for obj in store.list(SNAPSHOT_PREFIX)
        if not obj.key.endswith("/")
        and matches_all(obj.key, key_filters)
        and (
            last_modified_filter is None
            or last_modified_filter.search(obj.last_modified.isoformat()) is not None
        )
    ]
    objects.sort(key=lambda obj: obj.last_modified, reverse=True)

    snapshots: list[RemoteSnapshot] = []
    with tempfile.TemporaryDirectory(prefix="appversions-") as tmp:
        for obj in objects:
            local_path = Path(tmp) / obj.key.replace("/", ".")
            store.download(obj.key, local_path)
            snapshot = HostSnapshot.model_validate_json(local_path.read_text(encoding="utf-8"))
            logger.debug("Fetched snapshot %s of host %s", obj.key, snapshot.host_name)
            snapshots.append(RemoteSnapshot(remote=obj, snapshot=snapshot))
    return snapshots
