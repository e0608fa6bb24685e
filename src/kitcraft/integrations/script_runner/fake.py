"""In-memory fake implementation of ScriptRunner for testing."""

from dataclasses import dataclass
from pathlib import Path

from kitcraft.integrations.script_runner.abc import ScriptRunner


@dataclass(frozen=True)
class ScriptCall:
    """One recorded run() call."""

    script: Path
    cwd: Path
    env: dict[str, str]


class FakeScriptRunner(ScriptRunner):
    """Records script runs without spawning processes.

    All state is provided via constructor using keyword arguments.
    This class has NO public setup methods.
    """

    def __init__(self, *, exit_code: int = 0, error: str | None = None) -> None:
        """Create FakeScriptRunner.

        Args:
            exit_code: Exit code returned from every run
            error: If set, run() raises RuntimeError with this message
        """
        self._exit_code = exit_code
        self._error = error
        self._calls: list[ScriptCall] = []

    @property
    def calls(self) -> list[ScriptCall]:
        """Read-only access to recorded runs for test assertions."""
        return self._calls.copy()

    def run(self, script: Path, cwd: Path, env: dict[str, str]) -> int:
        self._calls.append(ScriptCall(script=script, cwd=cwd, env=dict(env)))
        if self._error is not None:
            raise RuntimeError(self._error)
        return self._exit_code
