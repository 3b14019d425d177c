"""Language model agents that draft pull requests."""

from adonice.agents.base import DraftAgent, GenerationResult
from adonice.agents.openai_agent import OpenAIAgent

__all__ = ["DraftAgent", "GenerationResult", "OpenAIAgent"]
