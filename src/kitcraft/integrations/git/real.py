"""Production KitGit implementation using subprocess."""

from pathlib import Path

from kitcraft.core.subprocess import run_subprocess_with_context
from kitcraft.integrations.git.abc import KitGit


class RealKitGit(KitGit):
    """Runs `git clone` with a bounded run time."""

    def __init__(self, timeout_seconds: float | None = None) -> None:
        self._timeout_seconds = timeout_seconds

    def clone(self, url: str, target: Path) -> None:
        # Shallow: history is deleted right after the clone anyway
        run_subprocess_with_context(
            ["git", "clone", "--depth", "1", url, str(target)],
            operation_context=f"clone {url}",
            timeout=self._timeout_seconds,
        )
