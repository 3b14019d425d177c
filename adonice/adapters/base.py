"""Abstract base for Git platform adapters."""

from abc import ABC, abstractmethod

from adonice.models import PullRequest


class GitPlatformError(Exception):
    """Raised when a Git platform API call fails."""

    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class GitPlatformAdapter(ABC):
    """Abstract interface for Git hosting platforms."""

    @abstractmethod
    def create_pr(
        self,
        organization_url: str,
        project: str,
        repository_id: str,
        title: str,
        description: str,
        source_branch: str,
        target_branch: str,
    ) -> PullRequest:
        """Create a pull request from source_branch into target_branch."""
        ...
