"""Subprocess execution with rich error context."""

import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Any


def run_subprocess_with_context(
    cmd: Sequence[str],
    operation_context: str,
    cwd: Path | None = None,
    timeout: float | None = None,
    capture_output: bool = True,
    check: bool = True,
    **kwargs: Any,
) -> subprocess.CompletedProcess[str]:
    """Execute subprocess with enriched error reporting for the integration layer.

    Wraps subprocess.run() to catch CalledProcessError, TimeoutExpired and a
    missing binary, and re-raise as RuntimeError with operation context,
    captured output and command details.

    Args:
        cmd: Command and arguments to execute
        operation_context: Human-readable description of operation
        cwd: Working directory for command execution
        timeout: Seconds before the process is killed (None = no limit)
        capture_output: Whether to capture stdout/stderr (default: True)
        check: Whether to raise on non-zero exit (default: True)
        **kwargs: Additional arguments passed to subprocess.run()

    Returns:
        CompletedProcess instance from subprocess.run()

    Raises:
        RuntimeError: If command fails, times out, or is not installed
    """
    cmd_str = " ".join(str(arg) for arg in cmd)
    try:
        return subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=capture_output,
            text=True,
            encoding="utf-8",
            check=check,
            timeout=timeout,
            **kwargs,
        )

    except subprocess.CalledProcessError as e:
        error_msg = f"Failed to {operation_context}"
        error_msg += f"\nCommand: {cmd_str}"
        error_msg += f"\nExit code: {e.returncode}"

        if e.stdout and e.stdout.strip():
            error_msg += f"\nstdout: {e.stdout.strip()}"
        if e.stderr and e.stderr.strip():
            error_msg += f"\nstderr: {e.stderr.strip()}"

        raise RuntimeError(error_msg) from e

    except subprocess.TimeoutExpired as e:
        error_msg = f"Timed out after {e.timeout}s while trying to {operation_context}"
        error_msg += f"\nCommand: {cmd_str}"
        raise RuntimeError(error_msg) from e

    except FileNotFoundError as e:
        error_msg = f"Command not found while trying to {operation_context}: {cmd[0]}"
        error_msg += f"\nFull command: {cmd_str}"
        raise RuntimeError(error_msg) from e
