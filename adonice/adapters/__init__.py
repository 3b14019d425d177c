"""Git platform adapters."""

from adonice.adapters.azure_devops import AzureDevOpsAdapter
from adonice.adapters.base import GitPlatformAdapter, GitPlatformError

__all__ = ["AzureDevOpsAdapter", "GitPlatformAdapter", "GitPlatformError"]
