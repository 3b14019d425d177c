"""
Edit the PR draft in an external editor.

The draft is written as JSON to a temp file, the editor runs in the
foreground, and the file is read back and validated. Any failure keeps
the original draft; the temp file is always removed.
"""

import json
import logging
import os
import shlex
import subprocess
import sys
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Mapping

from adonice.models import PrDraft, validate_pr_draft

TEMP_PREFIX = "pr-edit-"
TEMP_SUFFIX = ".json"


class EditorError(Exception):
    """Raised when the editor cannot be started or exits non-zero."""

    pass


def resolve_editor(
    override: str | None = None,
    environ: Mapping[str, str] | None = None,
    platform: str | None = None,
) -> list[str]:
    """Editor command as argv (file path is appended by the caller).

    Order: explicit override, $EDITOR, platform default.
    """
    env = environ if environ is not None else os.environ
    command = override or env.get("EDITOR")
    if command and command.strip():
        return shlex.split(command)
    platform = platform or sys.platform
    if platform == "win32":
        return ["notepad"]
    if platform == "darwin":
        # -W waits for the app to close, -n opens a new instance, -e uses TextEdit
        return ["open", "-W", "-n", "-e"]
    return ["nano"]


@contextmanager
def draft_file(draft: PrDraft) -> Iterator[Path]:
    """Write draft to a uniquely named temp file; remove it on exit."""
    fd, name = tempfile.mkstemp(prefix=TEMP_PREFIX, suffix=TEMP_SUFFIX)
    path = Path(name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(draft.to_json())
        yield path
    finally:
        path.unlink(missing_ok=True)


def run_editor(command: list[str], path: Path) -> int:
    """Run the editor on path in the foreground and return its exit code.

    Raises:
        EditorError: If the editor exits non-zero or cannot be started.
    """
    try:
        result = subprocess.run(command + [str(path)], check=False)
    except OSError as e:
        raise EditorError(f"Could not start editor {command[0]!r}: {e}") from e
    if result.returncode != 0:
        raise EditorError(f"Editor exited with code {result.returncode}")
    return result.returncode


def edit_pr_draft(
    draft: PrDraft,
    editor: list[str] | None = None,
    log: logging.Logger | None = None,
) -> PrDraft:
    """Let the user edit draft; return the edited draft or the original on failure."""
    logger = log or logging.getLogger("adonice.review.editor")
    command = editor or resolve_editor()

    with draft_file(draft) as path:
        logger.info("Opening %s in %s", path, command[0])
        logger.info("Save and close the file when you're done editing.")
        try:
            run_editor(command, path)
            content = path.read_text(encoding="utf-8")
        except (EditorError, OSError, UnicodeDecodeError) as e:
            logger.warning("Error during editing: %s. Using original data.", e)
            return draft

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        logger.warning("Invalid JSON format (%s). Using original data.", e)
        return draft

    validation = validate_pr_draft(data)
    if not validation.valid:
        logger.warning("%s. Using original data.", validation.error)
        return draft

    logger.info("PR details updated successfully")
    return validation.draft
