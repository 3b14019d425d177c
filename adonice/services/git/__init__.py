"""Git queries: branch, remote and diff."""

from adonice.services.git._run import GitRunnerError
from adonice.services.git.diff import NO_CHANGES_PLACEHOLDER, collect_diff
from adonice.services.git.metadata import (
    RemoteUrlError,
    current_branch,
    get_git_metadata,
    parse_remote_url,
    remote_default_branch,
    remote_url,
)

__all__ = [
    "GitRunnerError",
    "NO_CHANGES_PLACEHOLDER",
    "RemoteUrlError",
    "collect_diff",
    "current_branch",
    "get_git_metadata",
    "parse_remote_url",
    "remote_default_branch",
    "remote_url",
]
