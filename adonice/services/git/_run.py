"""Internal helpers: run git commands, GitRunnerError."""

import logging
import subprocess
from pathlib import Path


class GitRunnerError(Exception):
    """Raised when a git command fails."""

    pass


def _run_git(args: list[str], cwd: Path, log: logging.Logger | None = None) -> str:
    """Run git command and return its stdout; raise GitRunnerError on non-zero exit.

    Output is decoded as UTF-8; undecodable bytes (Latin-1 or binary
    content in a diff) become U+FFFD.
    """
    cmd = ["git"] + args
    if log:
        log.debug("Running git %s in %s", " ".join(args), cwd)
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            check=True,
            capture_output=True,
            encoding="utf-8",
            errors="replace",
        )
    except subprocess.CalledProcessError as e:
        err = (e.stderr or e.stdout or "").strip()
        if log:
            log.warning("Git %s failed: %s", args, err)
        raise GitRunnerError(f"git {' '.join(args)}: {err}") from e
    except FileNotFoundError as e:
        raise GitRunnerError("git not found") from e
    return result.stdout
