# openrouter_flow/device/generation.py

from typing import List, Optional

from ..llm.client import OpenRouterClient
from ..llm.errors import NoKeyConfigured
from ..llm.models import ChatMessage
from ..utils.logger import get_logger, log_exception
from .interfaces import CredentialSource

logger = get_logger(__name__)


def build_messages(prompt: str, system_prompt: Optional[str] = None) -> List[ChatMessage]:
    """Optional system message followed by exactly one user message."""
    messages = []
    if system_prompt:
        messages.append(ChatMessage(role="system", content=system_prompt))
    messages.append(ChatMessage(role="user", content=prompt))
    return messages


class GenerationService:
    """Single-shot text generation for flow actions. Nothing is kept between calls."""

    def __init__(self, client: OpenRouterClient, credentials: CredentialSource):
        self.client = client
        self.credentials = credentials

    async def generate_text(
            self,
            prompt: str,
            model: Optional[str] = None,
            system_prompt: Optional[str] = None,
    ) -> str:
        """
        Generate a reply to a prompt.

        Args:
            prompt: User prompt
            model: Model identifier; the configured default when omitted
            system_prompt: Optional instructions sent before the prompt

        Returns:
            Trimmed response text
        """
        api_key = self.credentials.api_key
        if not api_key:
            raise NoKeyConfigured()

        selected_model = model or self.credentials.default_model
        messages = build_messages(prompt, system_prompt)

        logger.info(f"Generating text with model: {selected_model}")

        try:
            return await self.client.generate(api_key, selected_model, messages)
        except Exception as e:
            log_exception(logger, e, "Text generation failed:")
            raise
