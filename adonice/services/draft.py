"""Draft a PR title/body: collect the diff, ask the agent once, normalize."""

import logging
from pathlib import Path

from openai import OpenAIError

from adonice.agents.base import DraftAgent, GenerationResult
from adonice.agents.prompts import SYSTEM_PROMPT, build_user_prompt
from adonice.agents.response import parse_draft_response
from adonice.services.git import GitRunnerError, collect_diff


def generate_draft(
    agent: DraftAgent,
    source_branch: str,
    target_branch: str,
    user_input: str,
    diff: str,
    log: logging.Logger | None = None,
) -> GenerationResult:
    """Send system prompt + user message to the agent and normalize the reply.

    Agent failures are returned as GenerationResult.error, whatever the
    backend raised.
    """
    logger = log or logging.getLogger("adonice.draft")
    user_prompt = build_user_prompt(source_branch, target_branch, diff, user_input)
    logger.debug("User prompt:\n%s", user_prompt)
    try:
        text = agent.complete(SYSTEM_PROMPT, user_prompt)
    except OpenAIError as e:
        logger.debug("Agent call failed", exc_info=True)
        return GenerationResult(error=f"Agent error: {e}")
    except Exception as e:
        logger.debug("Agent backend raised %s", type(e).__name__, exc_info=True)
        return GenerationResult(error=f"Agent error: {type(e).__name__}: {e}")
    result = parse_draft_response(text)
    if not result.ok:
        logger.debug("Unusable agent response: %r", text)
    return result


def draft_from_repo(
    agent: DraftAgent,
    source_branch: str,
    target_branch: str,
    user_input: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> GenerationResult:
    """Collect the diff against origin/<target_branch> and draft the PR.

    Diff collection errors become GenerationResult.error.
    """
    logger = log or logging.getLogger("adonice.draft")
    try:
        diff = collect_diff(target_branch, repo_dir=repo_dir, log=logger)
    except GitRunnerError as e:
        return GenerationResult(error=str(e))
    return generate_draft(agent, source_branch, target_branch, user_input, diff, log=logger)
