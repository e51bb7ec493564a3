"""Host-local registry of application versions.

The registry is the meeting point of every version source on a host. It is
populated from the per-application metadata files written by earlier updates
and from all registered sources, and serializes the result as the host's
snapshot document.

Concurrent updates of the same application on the same host race on a
last-writer-wins basis; there is no file locking.
"""

import logging
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError

from appversions.core.application import Application, VersionKind, ensure_aware
from appversions.core.ownership import share_with_group
from appversions.core.snapshot import ApplicationEntry, HostSnapshot
from appversions.core.sources.abc import VersionSource
from appversions.core.time.abc import Time

logger = logging.getLogger(__name__)

METADATA_FILE_PREFIX = "versions.application."
METADATA_FILE_SUFFIX = ".json"


class CorruptMetadataError(RuntimeError):
    """A local metadata file could not be read or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Corrupt version metadata in {path}: {reason}")
        self.path = path


def encode_application_name(name: str) -> str:
    """Hex-encode an application name for use in a file name."""
    return name.encode("utf-8").hex()


class Registry:
    """Mapping from application name to Application for one host.

    Indexing with an unknown name creates an empty Application, so sources can
    reference applications before any record exists.
    """

    def __init__(
        self,
        *,
        environment_name: str,
        instance_id: str,
        host_name: str,
        storage_directory: Path,
        time: Time,
        group_ownership: str | None = None,
    ) -> None:
        self.environment_name = environment_name
        self.instance_id = instance_id
        self.host_name = host_name
        self.storage_directory = storage_directory
        self.group_ownership = group_ownership
        self._time = time
        self._applications: dict[str, Application] = {}
        self._sources: list[VersionSource] = []
        self._collected = False

    def __getitem__(self, name: str) -> Application:
        application = self._applications.get(name)
        if application is None:
            application = Application(name)
            self._applications[name] = application
        return application

    def __contains__(self, name: object) -> bool:
        return name in self._applications

    @property
    def applications(self) -> dict[str, Application]:
        return self._applications

    @property
    def sources(self) -> tuple[VersionSource, ...]:
        return tuple(self._sources)

    def add_source(self, source: VersionSource) -> None:
        """Register a source; sources run in registration order."""
        self._sources.append(source)

    def metadata_path(self, application: str) -> Path:
        """Path of the dedicated metadata file for an application."""
        encoded = encode_application_name(application)
        return self.storage_directory / f"{METADATA_FILE_PREFIX}{encoded}{METADATA_FILE_SUFFIX}"

    def load_local(self) -> None:
        """Replay every per-application metadata file in the storage directory.

        Raises:
            CorruptMetadataError: If a file cannot be read or parsed
        """
        if not self.storage_directory.is_dir():
            logger.debug("Storage directory %s does not exist", self.storage_directory)
            return

        pattern = f"{METADATA_FILE_PREFIX}*{METADATA_FILE_SUFFIX}"
        for path in sorted(self.storage_directory.glob(pattern)):
            try:
                entry = ApplicationEntry.model_validate_json(path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError, ValidationError) as e:
                raise CorruptMetadataError(path, str(e)) from e
            logger.debug("Loaded %d version entries from %s", len(entry.version), path)
            self[entry.application].replay(entry)

    def collect(self) -> dict[str, Application]:
        """Load local metadata, then run every source once.

        Subsequent calls return the already collected mapping.
        """
        if not self._collected:
            self._collected = True
            self.load_local()
            for source in self._sources:
                logger.debug("Running version source %s", type(source).__name__)
                source.discover()
        return self._applications

    def update(
        self,
        application: str,
        version: str,
        created_at: datetime,
        kind: VersionKind = VersionKind.CURRENT,
    ) -> Path:
        """Record a new version and persist the application's metadata file.

        For a current version the existing current version is promoted to
        previous first. Both records are stamped with the later of
        ``created_at`` and the existing current's timestamp, so the new version
        wins even when a source reported a fact from a clock running ahead.

        Returns:
            Path of the written metadata file
        """
        self.collect()
        app = self[application]

        if kind == VersionKind.PREVIOUS:
            app.add_previous(version, created_at)
        else:
            existing = app.current()
            if existing is not None:
                created_at = max(ensure_aware(created_at), existing.created_at)
                app.add_previous(existing.version, created_at)
            app.add_current(version, created_at)

        return self._persist(app)

    def _persist(self, application: Application) -> Path:
        path = self.metadata_path(application.name)
        self.storage_directory.mkdir(parents=True, exist_ok=True)
        path.write_text(application.to_snapshot_entry().model_dump_json() + "\n", encoding="utf-8")
        share_with_group(path, self.group_ownership)
        logger.debug("Wrote metadata for %s to %s", application.name, path)
        return path

    def snapshot(self) -> HostSnapshot:
        """Build the complete metadata document for this host."""
        applications = self.collect()
        return HostSnapshot(
            last_updated=self._time.now(),
            host_name=self.host_name,
            environment=self.environment_name,
            instance_id=self.instance_id,
            applications=[
                applications[name].to_snapshot_entry() for name in sorted(applications)
            ],
        )
