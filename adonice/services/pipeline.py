"""
Run one PR drafting session: metadata, draft, review, submit.

Sequential and single-threaded. Metadata and generation failures end the
run with PipelineError; editor problems fall back to the model's draft;
submission errors propagate as GitPlatformError.
"""

import logging
from pathlib import Path
from typing import Callable

from adonice.adapters.base import GitPlatformAdapter
from adonice.agents.base import DraftAgent
from adonice.agents.prompts import DEFAULT_USER_INPUT
from adonice.config import RunSettings
from adonice.models import PrDraft
from adonice.review.confirm import confirm_edit, confirm_submit
from adonice.review.editor import edit_pr_draft
from adonice.services.draft import draft_from_repo
from adonice.services.git.metadata import DEFAULT_TARGET_BRANCH, get_git_metadata
from adonice.services.submit import submit_pr_draft


class PipelineError(Exception):
    """Raised when the run cannot continue (no metadata, no draft)."""

    pass


def format_pr_draft(draft: PrDraft) -> str:
    """Human-readable summary of the draft."""
    return "\n".join(
        [
            f"Title: {draft.title}",
            f"Body:\n{draft.body}",
            "",
            f"Source Branch: {draft.source_branch}",
            f"Target Branch: {draft.target_branch}",
            f"Organization URL: {draft.organization_url}",
            f"Project: {draft.project}",
            f"Repository ID: {draft.repository_id}",
        ]
    )


def run_pipeline(
    settings: RunSettings,
    agent: DraftAgent,
    adapter: GitPlatformAdapter,
    user_input: str = DEFAULT_USER_INPUT,
    target_branch: str | None = None,
    repo_dir: Path | None = None,
    editor: list[str] | None = None,
    fallback_target_branch: str = DEFAULT_TARGET_BRANCH,
    ask_edit: Callable[[], bool] = confirm_edit,
    ask_submit: Callable[[], bool] = confirm_submit,
    echo: Callable[[str], None] = print,
    log: logging.Logger | None = None,
) -> str | None:
    """
    Draft, review and optionally submit a pull request for the current branch.

    1. Read git metadata (project, repository, branches).
    2. Target branch: explicit target_branch, else the one resolved from
       metadata (saved setting, remote default, fallback).
    3. Ask the agent for a draft from the diff against origin/<target>.
    4. Optionally open the draft in an editor.
    5. Optionally submit; return the PR link, or None if not submitted.

    Raises:
        PipelineError: If metadata cannot be read or no draft is produced.
        GitPlatformError: If submission fails.
    """
    logger = log or logging.getLogger("adonice.pipeline")

    metadata = get_git_metadata(
        repo_dir,
        saved_target_branch=settings.target_branch,
        fallback_target_branch=fallback_target_branch,
        log=logger,
    )
    if metadata is None:
        raise PipelineError("Could not retrieve Git metadata.")
    if metadata.organization.lower() not in settings.org_url.lower():
        logger.warning(
            "Remote organization %r does not match ORG_URL %s; the PR is sent to ORG_URL",
            metadata.organization,
            settings.org_url,
        )

    target = target_branch or metadata.target_branch
    result = draft_from_repo(
        agent,
        metadata.source_branch,
        target,
        user_input,
        repo_dir=repo_dir,
        log=logger,
    )
    if not result.ok:
        raise PipelineError(f"Failed to generate PR draft: {result.error}")

    draft = PrDraft(
        title=result.draft.title,
        body=result.draft.body,
        source_branch=metadata.source_branch,
        target_branch=target,
        organization_url=settings.org_url,
        project=metadata.project,
        repository_id=metadata.repository_id,
    )
    echo("\nPull Request Generated:\n")
    echo(format_pr_draft(draft))

    if ask_edit():
        draft = edit_pr_draft(draft, editor=editor, log=logger)
        echo(format_pr_draft(draft))

    if not ask_submit():
        echo("\nPR submission cancelled.")
        return None

    link = submit_pr_draft(adapter, draft, log=logger)
    echo("Pull Request created successfully!")
    echo(link)
    return link
