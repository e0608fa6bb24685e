"""Clock abstraction for testing.

Backup names, the current_year placeholder and the now/date template
functions all read the clock through this interface.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class Time(ABC):
    """Abstract clock operations for dependency injection."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current local date and time."""
        ...
