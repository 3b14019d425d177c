"""Submit the final PR draft to the hosting platform."""

import logging

from adonice.adapters.base import GitPlatformAdapter
from adonice.models import PrDraft


def submit_pr_draft(
    adapter: GitPlatformAdapter,
    draft: PrDraft,
    log: logging.Logger | None = None,
) -> str:
    """Create the pull request and return its web link (or API URL).

    Raises:
        GitPlatformError: If the platform rejects the request.
    """
    logger = log or logging.getLogger("adonice.submit")
    logger.info("Submitting pull request %s -> %s", draft.source_branch, draft.target_branch)
    pr = adapter.create_pr(
        organization_url=draft.organization_url,
        project=draft.project,
        repository_id=draft.repository_id,
        title=draft.title,
        description=draft.body,
        source_branch=draft.source_branch,
        target_branch=draft.target_branch,
    )
    logger.info("Pull request created: #%s", pr.pull_request_id)
    return pr.link or ""
