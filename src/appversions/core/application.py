"""Version history of a single deployed application."""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

from appversions.core.snapshot import ApplicationEntry, VersionEntry


class VersionKind(Enum):
    """Role a version plays for an application."""

    CURRENT = "current"
    PREVIOUS = "previous"


@dataclass(frozen=True)
class VersionRecord:
    """Immutable version fact contributed by a source or by an update.

    Attributes:
        kind: Whether the version is the current or the previous one
        version: Version string
        created_at: Timezone-aware creation time used for ranking
    """

    kind: VersionKind
    version: str
    created_at: datetime

    def to_entry(self) -> VersionEntry:
        return VersionEntry(type=self.kind.value, version=self.version, ctime=self.created_at)


def ensure_aware(value: datetime) -> datetime:
    """Interpret naive timestamps as UTC so all facts compare."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class Application:
    """Ordered collection of version records for one named application.

    Several sources may claim a current version for the same application. The
    record with the latest ``created_at`` wins, independent of the order in
    which the records were added. On equal timestamps the record added last
    wins.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._records: list[VersionRecord] = []

    @property
    def records(self) -> tuple[VersionRecord, ...]:
        return tuple(self._records)

    def add_record(self, kind: VersionKind, version: str, created_at: datetime) -> VersionRecord:
        """Append a version fact.

        Args:
            kind: Current or previous
            version: Version string
            created_at: Creation time of the fact (naive values are treated as UTC)

        Returns:
            The appended record
        """
        if not isinstance(kind, VersionKind):
            raise ValueError(f"Unknown version kind: {kind!r}")
        record = VersionRecord(kind=kind, version=version, created_at=ensure_aware(created_at))
        self._records.append(record)
        return record

    def add_current(self, version: str, created_at: datetime) -> VersionRecord:
        return self.add_record(VersionKind.CURRENT, version, created_at)

    def add_previous(self, version: str, created_at: datetime) -> VersionRecord:
        return self.add_record(VersionKind.PREVIOUS, version, created_at)

    def _latest(self, kind: VersionKind) -> VersionRecord | None:
        latest: VersionRecord | None = None
        for record in self._records:
            if record.kind != kind:
                continue
            if latest is None or record.created_at >= latest.created_at:
                latest = record
        return latest

    def current(self) -> VersionRecord | None:
        """Return the newest current record, or None if there is none."""
        return self._latest(VersionKind.CURRENT)

    def previous(self) -> VersionRecord | None:
        """Return the newest previous record, or None if there is none."""
        return self._latest(VersionKind.PREVIOUS)

    def display_string(self) -> str:
        """Human-readable version, e.g. ``"1.4.0 (1.3.2)"``."""
        current = self.current()
        previous = self.previous()
        result = current.version if current is not None else ""
        if previous is not None:
            result = f"{result} ({previous.version})".lstrip()
        return result

    def to_snapshot_entry(self) -> ApplicationEntry:
        """Serialize to at most one current and one previous entry, current first."""
        entries: list[VersionEntry] = []
        current = self.current()
        if current is not None:
            entries.append(current.to_entry())
        previous = self.previous()
        if previous is not None:
            entries.append(previous.to_entry())
        return ApplicationEntry(application=self.name, version=entries)

    def replay(self, entry: ApplicationEntry) -> None:
        """Add every version contained in a persisted entry."""
        for version_entry in entry.version:
            self.add_record(VersionKind(version_entry.type), version_entry.version, version_entry.ctime)

    @staticmethod
    def from_snapshot_entry(entry: ApplicationEntry) -> "Application":
        application = Application(entry.application)
        application.replay(entry)
        return application

    def __repr__(self) -> str:
        return f"Application(name={self.name!r}, records={len(self._records)})"
