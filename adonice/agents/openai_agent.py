"""OpenAI chat completions agent."""

import logging

from openai import OpenAI

from adonice.agents.base import DraftAgent


class OpenAIAgent(DraftAgent):
    """Single, non-streaming chat completion with a bounded token budget."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o",
        max_tokens: int = 300,
        base_url: str | None = None,
        client: OpenAI | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self.model = model
        self.max_tokens = max_tokens
        self._client = client or OpenAI(api_key=api_key, base_url=base_url, max_retries=0)
        self._log = log or logging.getLogger("adonice.agents.openai")

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        self._log.debug("Requesting completion: model=%s max_tokens=%s", self.model, self.max_tokens)
        completion = self._client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            max_tokens=self.max_tokens,
        )
        if not completion.choices:
            return ""
        message = completion.choices[0].message
        return (message.content or "") if message is not None else ""
