"""Normalize the raw completion into a Draft.

The model does not always honour the JSON-only instruction, so fence
markers are stripped before parsing and the result is validated against
the Draft model.
"""

import json
import re

from pydantic import ValidationError

from adonice.agents.base import GenerationResult
from adonice.models import Draft

_FENCE_RE = re.compile(r"```json|```")


def strip_code_fences(text: str) -> str:
    """Remove ```json and ``` markers anywhere in text and trim whitespace."""
    return _FENCE_RE.sub("", text).strip()


def parse_draft_response(text: str | None) -> GenerationResult:
    """Parse completion text into a GenerationResult.

    Never raises; every failure is reported through GenerationResult.error.
    """
    raw = (text or "").strip()
    if not raw:
        return GenerationResult(error="Agent did not return a PR draft.")
    cleaned = strip_code_fences(raw)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        return GenerationResult(error=f"Failed to parse JSON from agent response: {e}")
    if not isinstance(data, dict):
        return GenerationResult(error="Agent response is not a JSON object.")
    try:
        draft = Draft.model_validate(data)
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        return GenerationResult(error=f"Agent response is missing or has invalid fields: {', '.join(fields)}")
    return GenerationResult(draft=draft)
