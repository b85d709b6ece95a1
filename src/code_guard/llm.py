"""
Chat model client.

The review pipeline only needs "send a prompt, get a reply", so the model is
hidden behind the one-method ChatModel protocol. OpenAIChatModel talks to any
OpenAI-compatible chat completions endpoint.
"""

from typing import Protocol

import structlog
from openai import AsyncOpenAI
from openai.types.chat import ChatCompletionMessage

logger = structlog.get_logger(__name__)


class ChatModel(Protocol):
    """Anything that can answer a prompt."""

    async def generate(self, prompt: str) -> str | ChatCompletionMessage:
        """Submit a prompt and return the model reply."""
        ...


class OpenAIChatModel:
    """ChatModel backed by an OpenAI-compatible API."""

    def __init__(self, base_url: str | None, api_key: str | None, model: str):
        """
        Initialize the client.

        Args:
            base_url: API server URL (None for the OpenAI default)
            api_key: API key
            model: Model identifier passed on every request
        """
        self.model = model
        self.client = AsyncOpenAI(base_url=base_url or None, api_key=api_key or None)

    async def generate(self, prompt: str) -> ChatCompletionMessage:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
        )
        if not response.choices:
            raise ValueError("model returned no choices")

        logger.debug("Model replied", model=self.model, choices=len(response.choices))
        return response.choices[0].message
