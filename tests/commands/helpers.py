"""Builders for stored host snapshots used by remote command tests."""

from datetime import UTC, datetime

from appversions.core.snapshot import ApplicationEntry, HostSnapshot, VersionEntry
from appversions.core.storage.abc import snapshot_key

CTIME = datetime(2024, 4, 1, 6, 0, tzinfo=UTC)


def stored_snapshot(
    host_name: str,
    environment: str,
    versions: dict[str, tuple[str | None, str | None]],
) -> tuple[str, str]:
    """Return (key, JSON document) of a snapshot as a host would upload it.

    Args:
        host_name: Fully qualified host name
        environment: Environment label
        versions: Application name to (current, previous); None omits the entry
    """
    applications = []
    for name, (current, previous) in versions.items():
        entries = []
        if current is not None:
            entries.append(VersionEntry(type="current", version=current, ctime=CTIME))
        if previous is not None:
            entries.append(VersionEntry(type="previous", version=previous, ctime=CTIME))
        applications.append(ApplicationEntry(application=name, version=entries))

    instance_id = host_name.encode().hex()
    snapshot = HostSnapshot(
        last_updated=CTIME,
        host_name=host_name,
        environment=environment,
        instance_id=instance_id,
        applications=applications,
    )
    return snapshot_key(environment, instance_id), snapshot.model_dump_json()
