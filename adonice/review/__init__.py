"""Interactive review of the PR draft: confirmations and editor session."""

from adonice.review.confirm import confirm_edit, confirm_submit
from adonice.review.editor import edit_pr_draft, resolve_editor

__all__ = ["confirm_edit", "confirm_submit", "edit_pr_draft", "resolve_editor"]
