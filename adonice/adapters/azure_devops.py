"""Azure DevOps (Azure Repos) REST API adapter."""

import base64
from typing import Any, Dict

import requests

from adonice.adapters.base import GitPlatformAdapter, GitPlatformError
from adonice.models import PullRequest

DEFAULT_API_VERSION = "7.1-preview.1"


def basic_auth_header(token: str) -> str:
    """Basic auth value for a PAT: empty username, token as password."""
    return "Basic " + base64.b64encode(f":{token}".encode("utf-8")).decode("ascii")


def branch_ref(branch: str) -> str:
    """Full ref name for a branch (refs/heads/<branch>)."""
    if branch.startswith("refs/"):
        return branch
    return f"refs/heads/{branch}"


def _pr_from_api(data: Dict[str, Any]) -> PullRequest:
    links = data.get("_links") or {}
    web = links.get("web") or {}
    return PullRequest(
        pull_request_id=data.get("pullRequestId"),
        title=data.get("title") or "",
        status=data.get("status", "active"),
        url=data.get("url"),
        web_url=web.get("href"),
    )


class AzureDevOpsAdapter(GitPlatformAdapter):
    """Azure DevOps implementation authenticated with a personal access token."""

    def __init__(
        self,
        token: str,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float | None = None,
    ) -> None:
        self._api_version = api_version
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers["Authorization"] = basic_auth_header(token)
        self._session.headers["Content-Type"] = "application/json"

    def pull_requests_url(self, organization_url: str, project: str, repository_id: str) -> str:
        return (
            f"{organization_url.rstrip('/')}/{project}/_apis/git/repositories/"
            f"{repository_id}/pullrequests?api-version={self._api_version}"
        )

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
        url = self.pull_requests_url(organization_url, project, repository_id)
        payload = {
            "sourceRefName": branch_ref(source_branch),
            "targetRefName": branch_ref(target_branch),
            "title": title,
            "description": description,
            "repositoryId": repository_id,
        }
        resp = self._session.request("POST", url, json=payload, timeout=self._timeout)
        if not 200 <= resp.status_code < 300:
            body = resp.text or resp.reason or ""
            raise GitPlatformError(
                f"Failed to create PR: {resp.status_code} {body}",
                status_code=resp.status_code,
                body=body,
            )
        return _pr_from_api(resp.json())
