"""Subprocess execution with rich error context."""

import subprocess
from collections.abc import Sequence


def run_subprocess_with_context(
    cmd: Sequence[str], operation_context: str
) -> subprocess.CompletedProcess[str]:
    """Run a command, capturing text output, and fail loudly.

    Args:
        cmd: Command and arguments to execute
        operation_context: Human-readable description of operation

    Returns:
        CompletedProcess of a zero-exit run

    Raises:
        RuntimeError: If the command exits non-zero or the binary is missing
    """
    cmd_str = " ".join(str(arg) for arg in cmd)
    try:
        return subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            check=True,
        )
    except subprocess.CalledProcessError as e:
        error_msg = f"Failed to {operation_context}"
        error_msg += f"\nCommand: {cmd_str}"
        error_msg += f"\nExit code: {e.returncode}"

        if e.stderr:
            stderr_stripped = e.stderr.strip()
            if stderr_stripped:
                error_msg += f"\nstderr: {stderr_stripped}"

        raise RuntimeError(error_msg) from e
    except FileNotFoundError as e:
        error_msg = f"Command not found while trying to {operation_context}: {cmd[0]}"
        error_msg += f"\nFull command: {cmd_str}"
        raise RuntimeError(error_msg) from e
