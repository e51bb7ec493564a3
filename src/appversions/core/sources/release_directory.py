"""Discover versions from symlinked release directories.

Deployments lay out each application as::

    <root>/<application>/releases/<version>/...
    <root>/<application>/current  -> releases/<version>
    <root>/<application>/previous -> releases/<older-version>

The ``current`` and ``previous`` links name the versions.
"""

import logging
import os
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from appversions.core.application import VersionKind
from appversions.core.sources.abc import VersionFact, VersionSource

if TYPE_CHECKING:
    from appversions.core.registry import Registry

logger = logging.getLogger(__name__)

CURRENT_LINK = "current"
PREVIOUS_LINK = "previous"
EXCLUDED_APPLICATIONS = frozenset({"sample"})


def _read_link(link: Path) -> tuple[str, datetime] | None:
    """Return (version, change time) of a resolving symlink, else None."""
    if not link.is_symlink() or not link.exists():
        return None
    target = os.readlink(link)
    version = os.path.basename(target.rstrip("/"))
    ctime = datetime.fromtimestamp(link.lstat().st_ctime, tz=UTC)
    return version, ctime


def scan_release_directory(root: Path) -> list[VersionFact]:
    """Collect current/previous facts from release links below ``root``.

    Args:
        root: Parent release directory

    Returns:
        Facts in walk order. A missing root yields an empty list.
    """
    if not root.is_dir():
        logger.debug("Release directory %s does not exist, skipping", root)
        return []

    facts: list[VersionFact] = []
    for dirpath, dirnames, filenames in os.walk(root):
        if CURRENT_LINK not in dirnames and CURRENT_LINK not in filenames:
            continue

        app_dir = Path(dirpath)
        application = app_dir.relative_to(root).as_posix()
        if application in ("", ".") or application in EXCLUDED_APPLICATIONS:
            continue

        try:
            current = _read_link(app_dir / CURRENT_LINK)
            if current is None:
                continue
            facts.append(VersionFact(application, VersionKind.CURRENT, *current))

            previous = _read_link(app_dir / PREVIOUS_LINK)
            if previous is not None:
                facts.append(VersionFact(application, VersionKind.PREVIOUS, *previous))
        except OSError as e:
            logger.debug("Skipping release links in %s: %s", app_dir, e)

    return facts


class ReleaseDirectorySource(VersionSource):
    """Version source scanning a parent release directory."""

    def __init__(self, registry: "Registry", parent_release_directory: Path) -> None:
        super().__init__(registry)
        self.parent_release_directory = parent_release_directory

    def scan(self) -> list[VersionFact]:
        return scan_release_directory(self.parent_release_directory)
