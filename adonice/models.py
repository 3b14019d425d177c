"""Data models for the PR draft, git metadata and created pull requests."""

import json
from typing import Any, List

from pydantic import BaseModel, Field, ValidationError


class Draft(BaseModel):
    """Title/body pair returned by the language model."""

    title: str = Field(..., alias="Title")
    body: str = Field(..., alias="Body")

    model_config = {"strict": True, "extra": "ignore", "populate_by_name": True}


class PrDraft(BaseModel):
    """Full pull request record carried through review to submission.

    Serialized with camelCase keys; the same document is what the user
    edits.
    """

    title: str
    body: str
    source_branch: str = Field(..., alias="sourceBranch")
    target_branch: str = Field(..., alias="targetBranch")
    organization_url: str = Field(..., alias="organizationUrl")
    project: str
    repository_id: str = Field(..., alias="repositoryId")

    model_config = {"strict": True, "extra": "ignore", "populate_by_name": True}

    def to_json(self) -> str:
        """Pretty-printed JSON document (2-space indent, camelCase keys)."""
        return json.dumps(self.model_dump(by_alias=True), indent=2, ensure_ascii=False)


class GitMetadata(BaseModel):
    """Identifiers read from the local repository."""

    organization: str
    project: str
    repository_id: str
    source_branch: str
    target_branch: str


class DraftValidation:
    """Result of validating an edited PR draft document.

    Either draft is set, or missing names the absent/invalid fields (by
    their JSON key), or error explains why the document is unusable.
    """

    def __init__(
        self,
        draft: PrDraft | None = None,
        missing: List[str] | None = None,
        error: str | None = None,
    ) -> None:
        self.draft = draft
        self.missing = missing or []
        self.error = error or ""

    @property
    def valid(self) -> bool:
        return self.draft is not None


def validate_pr_draft(data: Any) -> DraftValidation:
    """Validate a parsed JSON document as a PrDraft."""
    if not isinstance(data, dict):
        return DraftValidation(error=f"Expected a JSON object, got {type(data).__name__}")
    try:
        # Edited documents must use the camelCase keys written by to_json
        return DraftValidation(draft=PrDraft.model_validate(data, by_alias=True, by_name=False))
    except ValidationError as e:
        missing: List[str] = []
        for err in e.errors():
            name = str(err["loc"][0]) if err.get("loc") else ""
            if name and name not in missing:
                missing.append(name)
        return DraftValidation(missing=missing, error=f"Missing or invalid fields: {', '.join(missing)}")


class PullRequest:
    """Pull request created on the hosting platform."""

    def __init__(
        self,
        pull_request_id: int | None,
        title: str,
        status: str,
        url: str | None = None,
        web_url: str | None = None,
    ) -> None:
        self.pull_request_id = pull_request_id
        self.title = title
        self.status = status
        self.url = url
        self.web_url = web_url

    @property
    def link(self) -> str | None:
        """Web link for humans if the API returned one, else the API URL."""
        return self.web_url or self.url
