"""Repository metadata: current branch, origin remote and target branch."""

import logging
import re
from pathlib import Path

from adonice.models import GitMetadata
from adonice.services.git._run import GitRunnerError, _run_git

# https://[user@]dev.azure.com/<org>/<project>/_git/<repo>
_AZURE_REMOTE_RE = re.compile(r"dev\.azure\.com/([^/]+)/([^/]+)/_git/([^/\s]+)")
_HEAD_BRANCH_RE = re.compile(r"HEAD branch: (.+)")

DEFAULT_TARGET_BRANCH = "development"


class RemoteUrlError(GitRunnerError):
    """Raised when the origin URL does not look like an Azure Repos URL."""

    pass


def parse_remote_url(url: str) -> tuple[str, str, str]:
    """Split an Azure Repos remote URL into (organization, project, repository).

    Raises:
        RemoteUrlError: If the URL does not match .../<org>/<project>/_git/<repo>.
    """
    match = _AZURE_REMOTE_RE.search(url.strip())
    if not match:
        raise RemoteUrlError(f"Could not parse project and repository from remote URL: {url.strip()!r}")
    return match.group(1), match.group(2), match.group(3)


def current_branch(repo_dir: Path | None = None, log: logging.Logger | None = None) -> str:
    """Name of the checked out branch."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    branch = _run_git(["rev-parse", "--abbrev-ref", "HEAD"], cwd=cwd, log=log).strip()
    if not branch:
        raise GitRunnerError("Failed to detect current Git branch. Please ensure you are in a Git repository.")
    return branch


def remote_url(repo_dir: Path | None = None, log: logging.Logger | None = None) -> str:
    """URL of the origin remote."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    return _run_git(["remote", "get-url", "origin"], cwd=cwd, log=log).strip()


def remote_default_branch(repo_dir: Path | None = None, log: logging.Logger | None = None) -> str | None:
    """Default branch reported by `git remote show origin`, or None if unknown."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    output = _run_git(["remote", "show", "origin"], cwd=cwd, log=log)
    match = _HEAD_BRANCH_RE.search(output)
    if not match:
        return None
    branch = match.group(1).strip()
    if not branch or branch == "(unknown)":
        return None
    return branch


def get_git_metadata(
    repo_dir: Path | None = None,
    saved_target_branch: str | None = None,
    fallback_target_branch: str = DEFAULT_TARGET_BRANCH,
    log: logging.Logger | None = None,
) -> GitMetadata | None:
    """Collect project, repository, source and target branch for the repo.

    Target branch: saved_target_branch, else the remote's HEAD branch,
    else fallback_target_branch. Returns None (after logging the cause)
    when any git command fails or the remote URL cannot be parsed.
    """
    logger = log or logging.getLogger("adonice.git")
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    logger.info("Running Git commands in: %s", cwd)

    try:
        organization, project, repository_id = parse_remote_url(remote_url(cwd, log=logger))
        source_branch = current_branch(cwd, log=logger)
        target_branch = saved_target_branch
        if not target_branch:
            target_branch = remote_default_branch(cwd, log=logger) or fallback_target_branch
    except GitRunnerError as e:
        logger.error("Error getting Git metadata: %s", e)
        return None

    return GitMetadata(
        organization=organization,
        project=project,
        repository_id=repository_id,
        source_branch=source_branch,
        target_branch=target_branch,
    )
