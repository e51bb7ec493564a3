"""Cross-host version comparison.

Host snapshots are merged into one table grouped by application. Within an
application every distinct version gets a color slot so operators can spot
hosts running something different at a glance.

Color slots are handed out in the order versions are first seen, so they
depend on the order of the input snapshots. The same version may get a
different slot in a later run when the snapshots arrive in a different order.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass

from appversions.core.filters import matches_all
from appversions.core.snapshot import HostSnapshot

SNAPSHOT_MARKER = "-SNAPSHOT"

# Display palette, indexed by color slot.
PALETTE: tuple[str, ...] = (
    "green",
    "yellow",
    "red",
    "blue",
    "bright_magenta",
    "bright_green",
    "bright_yellow",
    "bright_red",
    "bright_blue",
)


def normalize_version(version: str) -> str:
    """Strip a trailing ``-SNAPSHOT`` marker."""
    if version.endswith(SNAPSHOT_MARKER):
        return version[: -len(SNAPSHOT_MARKER)]
    return version


@dataclass(frozen=True)
class DiffRow:
    """One application as deployed on one host.

    Attributes:
        application: Application name
        hostname: Short host name
        environment: Environment label of the host
        current: Current version, empty if unknown
        previous: Previous version, empty if unknown
        color_slot: Palette slot of the current version, None if there is none
    """

    application: str
    hostname: str
    environment: str
    current: str
    previous: str
    color_slot: int | None

    @property
    def color(self) -> str | None:
        """Palette color of the current version; slots past the end wrap."""
        if self.color_slot is None:
            return None
        return PALETTE[self.color_slot % len(PALETTE)]


class VersionColorizer:
    """Assigns color slots per application in first-seen order."""

    def __init__(self) -> None:
        self._seen: dict[str, list[str]] = {}

    def slot(self, application: str, version: str) -> int | None:
        if not version:
            return None
        normalized = normalize_version(version)
        seen = self._seen.setdefault(application, [])
        if normalized not in seen:
            seen.append(normalized)
        return seen.index(normalized)


def group_by_application(
    snapshots: Iterable[HostSnapshot], filters: Iterable[re.Pattern[str]] = ()
) -> dict[str, list[tuple[str, str, str, str]]]:
    """Collect (hostname, environment, current, previous) per application.

    Rows keep snapshot order; applications failing the filter are dropped.
    """
    filters = list(filters)
    grouped: dict[str, list[tuple[str, str, str, str]]] = {}
    for snapshot in snapshots:
        hostname = snapshot.short_host_name
        for entry in snapshot.applications:
            if not matches_all(entry.application, filters):
                continue
            current = entry.find("current")
            previous = entry.find("previous")
            grouped.setdefault(entry.application, []).append(
                (
                    hostname,
                    snapshot.environment,
                    current.version if current is not None else "",
                    previous.version if previous is not None else "",
                )
            )
    return grouped


def build_diff(
    snapshots: Iterable[HostSnapshot], filters: Iterable[re.Pattern[str]] = ()
) -> list[DiffRow]:
    """Merge host snapshots into comparison rows.

    Args:
        snapshots: One snapshot per host, newest first by convention
        filters: Compiled name patterns, all of which must match

    Returns:
        Rows sorted by application name, host order preserved within an
        application
    """
    grouped = group_by_application(snapshots, filters)
    colorizer = VersionColorizer()

    rows: list[DiffRow] = []
    for application in sorted(grouped):
        for hostname, environment, current, previous in grouped[application]:
            rows.append(
                DiffRow(
                    application=application,
                    hostname=hostname,
                    environment=environment,
                    current=current,
                    previous=previous,
                    color_slot=colorizer.slot(application, current),
                )
            )
    return rows
