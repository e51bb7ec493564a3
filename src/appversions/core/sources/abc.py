"""Version source plugin contract.

A source inspects one kind of local deployment artifact and contributes
version facts to a shared registry. Sources never coordinate with each other:
when two of them report a current version for the same application, the
registry ranks the facts by timestamp.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from appversions.core.application import VersionKind

if TYPE_CHECKING:
    from appversions.core.registry import Registry


@dataclass(frozen=True)
class VersionFact:
    """A single discovered observation about an application's version."""

    application: str
    kind: VersionKind
    version: str
    created_at: datetime


class VersionSource(ABC):
    """Discovers version facts and writes them into a registry."""

    def __init__(self, registry: "Registry") -> None:
        self.registry = registry

    @abstractmethod
    def scan(self) -> list[VersionFact]:
        """Return the facts this source currently observes.

        Failures for a single discoverable unit are skipped, never raised.
        """
        ...

    def discover(self) -> None:
        """Add every scanned fact to the registry."""
        self.record(self.scan())

    def record(self, facts: Iterable[VersionFact]) -> None:
        for fact in facts:
            self.registry[fact.application].add_record(fact.kind, fact.version, fact.created_at)
