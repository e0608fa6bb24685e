"""Real script runner using subprocess."""

import os
import subprocess
from pathlib import Path

from kitcraft.integrations.script_runner.abc import ScriptRunner


class RealScriptRunner(ScriptRunner):
    """Production implementation that runs scripts with bash."""

    def __init__(self, timeout_seconds: float | None = None) -> None:
        self._timeout_seconds = timeout_seconds

    def run(self, script: Path, cwd: Path, env: dict[str, str]) -> int:
        try:
            result = subprocess.run(
                ["/bin/bash", str(script)],
                cwd=cwd,
                env={**os.environ, **env},
                check=False,
                timeout=self._timeout_seconds,
            )
        except subprocess.TimeoutExpired as e:
            raise RuntimeError(f"Script {script} timed out after {e.timeout}s") from e
        except OSError as e:
            raise RuntimeError(f"Could not start script {script}: {e}") from e
        return result.returncode
