"""Prompts for the PR draft agent."""

SYSTEM_PROMPT = """You are an Azure DevOps pull request assistant.

Create a new pull request draft that is concise and professional based on the provided changes.

You will ONLY and ALWAYS respond in the following exact JSON format, with NO markdown, code blocks, or explanations.
DO NOT wrap the JSON in triple backticks or markdown code fences.

Respond ONLY with this format:
{
  "Title": "...",
  "Body": "..."
}
NEVER give a response that is not of that format
"""

DEFAULT_USER_INPUT = "Generate PR"


def build_user_prompt(source_branch: str, target_branch: str, diff: str, user_input: str) -> str:
    """User message: branches, diff and the user's instruction."""
    instruction = user_input.strip() or DEFAULT_USER_INPUT
    return (
        f"Current branch: {source_branch}\n"
        f"Target branch: {target_branch}\n"
        f"Changes:\n{diff}\n\n"
        f"User input: {instruction}"
    )
