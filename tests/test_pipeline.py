"""Tests for the run pipeline (run_pipeline) with mocked stages."""

import logging
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from adonice.agents.base import GenerationResult
from adonice.config import RunSettings
from adonice.models import Draft, GitMetadata, PrDraft
from adonice.services.pipeline import PipelineError, format_pr_draft, run_pipeline

SETTINGS = RunSettings(api_key="sk", pat="pat", org_url="https://dev.azure.com/orgname")
METADATA = GitMetadata(
    organization="orgname",
    project="myproj",
    repository_id="myrepo",
    source_branch="feature/login",
    target_branch="develop",
)
DRAFT = Draft(title="Add login", body="Implements login form.")


def _run(
    ask_edit: bool = False,
    ask_submit: bool = False,
    target_branch: str | None = None,
    metadata: GitMetadata | None = METADATA,
    result: GenerationResult | None = None,
):
    adapter = Mock()
    adapter.create_pr.return_value = Mock(link="https://dev.azure.com/orgname/myproj/_git/myrepo/pullrequest/1")
    echoed: list[str] = []
    with (
        patch("adonice.services.pipeline.get_git_metadata", return_value=metadata) as mock_meta,
        patch(
            "adonice.services.pipeline.draft_from_repo",
            return_value=result or GenerationResult(draft=DRAFT),
        ) as mock_draft,
        patch("adonice.services.pipeline.edit_pr_draft", side_effect=lambda d, **kw: d) as mock_edit,
    ):
        link = run_pipeline(
            SETTINGS,
            Mock(),
            adapter,
            user_input="Generate PR",
            target_branch=target_branch,
            repo_dir=Path("/tmp/repo"),
            ask_edit=lambda: ask_edit,
            ask_submit=lambda: ask_submit,
            echo=echoed.append,
        )
    return link, adapter, mock_meta, mock_draft, mock_edit, echoed


def test_declined_submission_returns_none() -> None:
    """Default answers: no edit, no submit, nothing posted."""
    link, adapter, _, _, mock_edit, echoed = _run()
    assert link is None
    adapter.create_pr.assert_not_called()
    mock_edit.assert_not_called()
    assert any("Title: Add login" in line for line in echoed)
    assert any("cancelled" in line for line in echoed)


def test_submit_uses_metadata_and_settings() -> None:
    """Accepted submission posts a draft built from model output and metadata."""
    link, adapter, mock_meta, mock_draft, _, _ = _run(ask_submit=True)
    assert link == "https://dev.azure.com/orgname/myproj/_git/myrepo/pullrequest/1"
    kwargs = adapter.create_pr.call_args[1]
    assert kwargs == {
        "organization_url": "https://dev.azure.com/orgname",
        "project": "myproj",
        "repository_id": "myrepo",
        "title": "Add login",
        "description": "Implements login form.",
        "source_branch": "feature/login",
        "target_branch": "develop",
    }
    assert mock_meta.call_args[1]["saved_target_branch"] is None
    assert mock_draft.call_args[0][1:4] == ("feature/login", "develop", "Generate PR")


def test_explicit_target_overrides_metadata() -> None:
    """--target wins over the branch resolved from metadata."""
    _, adapter, _, mock_draft, _, _ = _run(ask_submit=True, target_branch="main")
    assert mock_draft.call_args[0][2] == "main"
    assert adapter.create_pr.call_args[1]["target_branch"] == "main"


def test_edit_is_applied_before_submit() -> None:
    """The edited draft is what gets submitted."""
    edited = PrDraft(
        title="Edited",
        body="Edited body",
        source_branch="feature/login",
        target_branch="develop",
        organization_url="https://dev.azure.com/orgname",
        project="myproj",
        repository_id="myrepo",
    )
    adapter = Mock()
    adapter.create_pr.return_value = Mock(link="link")
    with (
        patch("adonice.services.pipeline.get_git_metadata", return_value=METADATA),
        patch("adonice.services.pipeline.draft_from_repo", return_value=GenerationResult(draft=DRAFT)),
        patch("adonice.services.pipeline.edit_pr_draft", return_value=edited) as mock_edit,
    ):
        run_pipeline(
            SETTINGS,
            Mock(),
            adapter,
            ask_edit=lambda: True,
            ask_submit=lambda: True,
            echo=lambda s: None,
        )
    mock_edit.assert_called_once()
    assert adapter.create_pr.call_args[1]["title"] == "Edited"


def test_missing_metadata_is_fatal() -> None:
    """No metadata means no generation and no PR."""
    with pytest.raises(PipelineError, match="Git metadata"):
        _run(metadata=None)


def test_generation_error_is_fatal() -> None:
    """A generation error ends the run with its message."""
    with pytest.raises(PipelineError, match="Failed to parse JSON"):
        _run(result=GenerationResult(error="Failed to parse JSON from agent response: x"))


def test_format_pr_draft_lists_all_fields() -> None:
    """Summary shows every field of the draft."""
    text = format_pr_draft(
        PrDraft(
            title="T",
            body="B",
            source_branch="s",
            target_branch="t",
            organization_url="o",
            project="p",
            repository_id="r",
        )
    )
    for line in ["Title: T", "Body:\nB", "Source Branch: s", "Target Branch: t", "Project: p", "Repository ID: r"]:
        assert line in text


def test_organization_mismatch_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    """A remote in another organization than ORG_URL is reported, not fatal."""
    other = METADATA.model_copy(update={"organization": "otherorg"})
    with caplog.at_level(logging.WARNING, logger="adonice.pipeline"):
        _, adapter, _, _, _, _ = _run(ask_submit=True, metadata=other)
    assert "otherorg" in caplog.text
    assert adapter.create_pr.call_args[1]["organization_url"] == "https://dev.azure.com/orgname"


def test_matching_organization_is_quiet(caplog: pytest.LogCaptureFixture) -> None:
    """No warning when the remote belongs to the ORG_URL organization."""
    with caplog.at_level(logging.WARNING, logger="adonice.pipeline"):
        _run()
    assert "does not match" not in caplog.text
