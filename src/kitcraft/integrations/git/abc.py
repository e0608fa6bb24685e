"""Git operations needed to acquire kits.

Architecture:
- KitGit: Abstract base class defining the interface
- RealKitGit: Production implementation using subprocess
- FakeKitGit: In-memory implementation for tests
"""

from abc import ABC, abstractmethod
from pathlib import Path


class KitGit(ABC):
    """Abstract interface for git operations.

    This interface contains ONLY runtime operations - no test setup methods.
    """

    @abstractmethod
    def clone(self, url: str, target: Path) -> None:
        """Clone a repository into a directory that does not exist yet.

        Args:
            url: Remote repository reference
            target: Directory to clone into

        Raises:
            RuntimeError: If the clone fails, times out, or git is missing
        """
        ...
