"""Clock abstraction for testing.

Wall-clock time stamps update facts and snapshot documents. Routing it through
an ABC lets tests pin the clock.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class Time(ABC):
    """Abstract time operations for dependency injection."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time as a timezone-aware datetime."""
        ...
