"""
Claude AI Provider - Anthropic Claude implementation

Job status checks enable Anthropic's server-side web search tool.
"""

import logging
from typing import Any, Dict, List, Optional

import anthropic

from .base import AIProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-3-5-haiku-latest"
DEFAULT_BROWSE_MODEL = "claude-sonnet-4-20250514"

WEB_SEARCH_TOOL = {"type": "web_search_20250305", "name": "web_search", "max_uses": 3}


class ClaudeProvider(AIProvider):
    """Claude AI provider using the Anthropic API."""

    def __init__(
        self,
        api_key: Optional[str],
        model: Optional[str] = None,
        browse_model: Optional[str] = None,
    ):
        if not api_key:
            raise ValueError(
                "ANTHROPIC_API_KEY not found. Set it in .env or environment variables."
            )

        self._model = model or DEFAULT_MODEL
        self._browse_model = browse_model or DEFAULT_BROWSE_MODEL
        self._client = anthropic.Anthropic(api_key=api_key)

    @property
    def provider_name(self) -> str:
        return "claude"

    @property
    def model_name(self) -> str:
        return self._model

    @property
    def browse_model_name(self) -> str:
        return self._browse_model

    def _create(
        self,
        model: str,
        system_prompt: str,
        user_prompt: str,
        tools: Optional[List[Dict[str, Any]]] = None,
        max_tokens: int = 50,
    ) -> str:
        kwargs: Dict[str, Any] = {}
        if tools:
            kwargs["tools"] = tools
        response = self._client.messages.create(
            model=model,
            max_tokens=max_tokens,
            temperature=0,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
            **kwargs,
        )
        return last_text(response.content)

    def _generate(self, system_prompt: str, user_prompt: str) -> str:
        return self._create(self._model, system_prompt, user_prompt)

    def _browse(self, system_prompt: str, user_prompt: str) -> str:
        # Tool-use turns need more than a one-word budget
        return self._create(
            self._browse_model, system_prompt, user_prompt, tools=[WEB_SEARCH_TOOL], max_tokens=1024
        )


def last_text(content: List[Any]) -> str:
    """
    Text of the final text block in a response.

    Tool use produces several blocks; the answer comes last.
    """
    texts = [block.text for block in content if getattr(block, "type", None) == "text"]
    return texts[-1] if texts else ""
