"""Pydantic models for persisted and exchanged version metadata.

Two documents share these models:

- the per-application local file ``versions.application.<hex>.json`` holds a
  single ``ApplicationEntry``
- the per-host snapshot uploaded to object storage is a ``HostSnapshot``
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class VersionEntry(BaseModel):
    """One version fact as it appears on disk.

    Attributes:
        type: Either "current" or "previous"
        version: Version string (e.g. "1.4.2" or "1.5.0-SNAPSHOT")
        ctime: Creation time of the fact
    """

    model_config = ConfigDict(extra="ignore")

    type: Literal["current", "previous"]
    version: str
    ctime: datetime


class ApplicationEntry(BaseModel):
    """Version entries of a single application.

    At most one current and one previous entry are written, current first.
    Readers accept any number of entries and rank them by ``ctime``.
    """

    model_config = ConfigDict(extra="ignore")

    application: str
    version: list[VersionEntry] = Field(default_factory=list)

    def find(self, kind: str) -> VersionEntry | None:
        """Return the first entry of the given type, if any."""
        for entry in self.version:
            if entry.type == kind:
                return entry
        return None


class HostSnapshot(BaseModel):
    """Complete version metadata of one host at one point in time."""

    model_config = ConfigDict(extra="ignore")

    last_updated: datetime
    host_name: str
    environment: str
    instance_id: str
    applications: list[ApplicationEntry] = Field(default_factory=list)

    @property
    def short_host_name(self) -> str:
        """Host name up to the first domain separator."""
        return self.host_name.split(".", 1)[0]
