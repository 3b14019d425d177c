"""Yes/no prompts gating the edit and submit steps.

Both default to No so an unattended run never submits.
"""

import typer


def _ask(question: str) -> bool:
    try:
        return typer.confirm(question, default=False)
    except typer.Abort:
        return False


def confirm_edit() -> bool:
    """Ask whether to open the draft in an editor before submitting."""
    return _ask("Edit PR details before submitting?")


def confirm_submit() -> bool:
    """Ask whether to submit the pull request now."""
    return _ask("Submit Pull Request?")
