"""Abstract interface for running post-generation scripts."""

from abc import ABC, abstractmethod
from pathlib import Path


class ScriptRunner(ABC):
    """Runs a kit's post-generation script.

    All implementations must implement this interface for testability.
    """

    @abstractmethod
    def run(self, script: Path, cwd: Path, env: dict[str, str]) -> int:
        """Run a script and wait for it to finish.

        The script inherits the caller's stdout and stderr.

        Args:
            script: Path to the script file
            cwd: Working directory for the script
            env: Variables added on top of the current process environment

        Returns:
            The script's exit code

        Raises:
            RuntimeError: If the script cannot be started or times out
        """
        ...
