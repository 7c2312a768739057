"""Subprocess wrapper shared by the collectors."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from npm_report.log import ERROR, ProgressLog

logger = logging.getLogger(__name__)


def run_command(
    command: str,
    log: ProgressLog | None = None,
    cwd: Path | str | None = None,
    timeout: float | None = None,
) -> str | None:
    """Run a shell command and return its trimmed stdout.

    npm exits non-zero whenever ``outdated`` or ``audit`` find something, so the
    exit code is not treated as a failure; whatever reached stdout is returned.
    Only a failure to launch (or an expired ``timeout``) is reported, and in
    that case ``None`` is returned instead of raising.

    Args:
        command: Command line, interpreted by the shell.
        log: Where to report launch failures.
        cwd: Working directory for the command.
        timeout: Seconds to wait before giving up. ``None`` waits forever.

    Returns:
        Trimmed stdout, or None if the command could not be run.
    """
    logger.debug("Running %r (cwd=%s)", command, cwd)
    try:
        result = subprocess.run(
            command,
            shell=True,
            capture_output=True,
            text=True,
            cwd=cwd,
            timeout=timeout,
            stdin=subprocess.DEVNULL,
        )
    except subprocess.TimeoutExpired:
        _report(log, f"Error running command: {command}\nCommand timed out after {timeout}s")
        return None
    except OSError as e:
        _report(log, f"Error running command: {command}\n{e}")
        return None

    logger.debug("%r exited with code %s", command, result.returncode)
    return (result.stdout or "").strip()


def _report(log: ProgressLog | None, message: str) -> None:
    logger.debug(message)
    if log is not None:
        log.log(message, level=ERROR)
