"""Unified diff between origin/<target> and HEAD."""

import logging
from pathlib import Path

from adonice.services.git._run import GitRunnerError, _run_git

NO_CHANGES_PLACEHOLDER = "No changes detected."

_UNREACHABLE_MARKERS = ("bad object", "unknown revision", "bad revision")


def collect_diff(
    target_branch: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> str:
    """Return `git diff origin/<target>...HEAD`.

    An empty diff is returned as NO_CHANGES_PLACEHOLDER, not as an error.

    Raises:
        GitRunnerError: With an explanatory message when origin/<target> is
            unreachable or git fails otherwise.
    """
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    ref = f"origin/{target_branch}"
    try:
        diff = _run_git(["diff", f"{ref}...HEAD"], cwd=cwd, log=log)
    except GitRunnerError as e:
        msg = str(e)
        if any(marker in msg for marker in _UNREACHABLE_MARKERS):
            raise GitRunnerError(f"The target branch '{ref}' does not exist or is not reachable.") from e
        raise GitRunnerError(f"Error getting Git diff: {msg}") from e
    if not diff.strip():
        return NO_CHANGES_PLACEHOLDER
    return diff
