"""In-memory fake implementation of KitGit for testing."""

import shutil
from pathlib import Path

from kitcraft.integrations.git.abc import KitGit


class FakeKitGit(KitGit):
    """Clones by copying pre-configured local directories.

    All state is provided via constructor using keyword arguments.
    This class has NO public setup methods.
    """

    def __init__(
        self,
        *,
        repositories: dict[str, Path] | None = None,
        failure_message: str = "Simulated clone failure",
    ) -> None:
        """Create FakeKitGit.

        Args:
            repositories: Mapping of remote URL -> directory whose contents a
                clone of that URL produces. Unknown URLs fail.
            failure_message: RuntimeError message for unknown URLs
        """
        self._repositories = repositories or {}
        self._failure_message = failure_message
        self._cloned: list[tuple[str, Path]] = []

    @property
    def cloned(self) -> list[tuple[str, Path]]:
        """Read-only access to (url, target) pairs for test assertions."""
        return self._cloned.copy()

    def clone(self, url: str, target: Path) -> None:
        self._cloned.append((url, target))
        source = self._repositories.get(url)
        if source is None:
            raise RuntimeError(f"{self._failure_message}: {url}")
        shutil.copytree(source, target)
        # A real clone always carries repository metadata
        (target / ".git").mkdir(exist_ok=True)
        (target / ".git" / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
