"""Abstract base for draft agents and the generation result."""

from adonice.models import Draft


class GenerationResult:
    """Outcome of drafting a PR: a Draft, or a descriptive error string."""

    def __init__(self, draft: Draft | None = None, error: str | None = None) -> None:
        self.draft = draft
        self.error = error or ""

    @property
    def ok(self) -> bool:
        return self.draft is not None and not self.error


class DraftAgent:
    """
    Pluggable completion backend for PR drafts.

    Implementations send one system and one user message and return the
    raw completion text; normalization happens in adonice.agents.response.
    """

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Return the completion text (may be empty).

        Raises whatever the backend raises; the caller converts it into
        a GenerationResult error.
        """
        raise NotImplementedError
