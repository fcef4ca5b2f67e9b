"""
Groq AI Provider - Groq chat completions implementation

Plain classification uses a small instant model. Job status checks use the
compound model with its web_search tool enabled.
"""

import logging
from typing import Optional

from groq import Groq

from .base import AIProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "llama-3.1-8b-instant"
DEFAULT_BROWSE_MODEL = "groq/compound"


class GroqProvider(AIProvider):
    """AI provider backed by the Groq API."""

    def __init__(
        self,
        api_key: Optional[str],
        model: Optional[str] = None,
        browse_model: Optional[str] = None,
    ):
        """
        Initialize Groq provider.

        Args:
            api_key: GROQ_API_KEY value
            model: Classification model (defaults to DEFAULT_MODEL)
            browse_model: Web-browsing model (defaults to DEFAULT_BROWSE_MODEL)
        """
        if not api_key:
            raise ValueError("GROQ_API_KEY not found. Set it in .env or environment variables.")

        self._model = model or DEFAULT_MODEL
        self._browse_model = browse_model or DEFAULT_BROWSE_MODEL
        self._client = Groq(api_key=api_key)

    @property
    def provider_name(self) -> str:
        return "groq"

    @property
    def model_name(self) -> str:
        return self._model

    @property
    def browse_model_name(self) -> str:
        return self._browse_model

    def _complete(self, model: str, system_prompt: str, user_prompt: str, **kwargs) -> str:
        response = self._client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=0,
            **kwargs,
        )
        return response.choices[0].message.content or ""

    def _generate(self, system_prompt: str, user_prompt: str) -> str:
        return self._complete(self._model, system_prompt, user_prompt)

    def _browse(self, system_prompt: str, user_prompt: str) -> str:
        return self._complete(
            self._browse_model,
            system_prompt,
            user_prompt,
            extra_body={"compound_custom": {"tools": {"enabled_tools": ["web_search"]}}},
        )
