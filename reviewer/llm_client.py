"""
LLM client for sending review prompts to Gemini, OpenAI or Claude.

Uses the OpenAI Python SDK for all three providers: Gemini and Anthropic
both expose OpenAI-compatible chat completion endpoints.
"""

import logging
from typing import Optional

import openai
from openai import AsyncOpenAI

from utils.exceptions import ModelConfigurationError

logger = logging.getLogger(__name__)

PROVIDER_BASE_URLS = {
    "gemini": "https://generativelanguage.googleapis.com/v1beta/openai/",
    "anthropic": "https://api.anthropic.com/v1",
    "openai": None,
}

MODEL_CONFIGURATION_MESSAGE = (
    "AI model configuration error. Please check API key and model availability."
)


class LLMClient:
    """
    Client for interacting with LLM providers.

    Uses the OpenAI SDK which supports Gemini, Anthropic and OpenAI models
    through one interface.
    """

    def __init__(
        self,
        provider: str,
        model: str,
        api_key: Optional[str],
        temperature: float = 0.7,
        top_p: float = 0.95,
        max_tokens: int = 2048
    ):
        """
        Initialize LLM client.

        Args:
            provider: LLM provider - 'gemini', 'openai' or 'anthropic'
            model: Model name (e.g., 'gemini-2.5-pro', 'gpt-4o')
            api_key: API key for the provider
            temperature: Sampling temperature (default 0.7)
            top_p: Nucleus sampling mass (default 0.95)
            max_tokens: Maximum tokens in response (default 2048)

        Raises:
            ValueError: If provider is not supported or API key is missing
        """
        self.provider = provider.lower()
        self.model = model
        self.temperature = temperature
        self.top_p = top_p
        self.max_tokens = max_tokens

        if self.provider not in PROVIDER_BASE_URLS:
            raise ValueError(
                f"Unsupported provider: {provider}. Must be 'gemini', 'openai' or 'anthropic'"
            )

        if not api_key:
            raise ValueError(f"{provider} API key is required but not provided")

        base_url = PROVIDER_BASE_URLS[self.provider]
        if base_url:
            self.client = AsyncOpenAI(api_key=api_key, base_url=base_url)
        else:
            self.client = AsyncOpenAI(api_key=api_key)

        logger.info(f"Initialized LLMClient: provider={provider}, model={model}")

    async def generate_review(self, prompt: str) -> str:
        """
        Send a review prompt and return the generated text as-is.

        Args:
            prompt: The complete prompt including PR details and instructions

        Returns:
            str: The generated review (empty string if the model returned nothing)

        Raises:
            ModelConfigurationError: If the provider does not know the model
            openai.OpenAIError: For any other API failure
        """
        try:
            logger.debug(f"Generating review with {self.provider} ({len(prompt)} chars)")

            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
                top_p=self.top_p,
                max_tokens=self.max_tokens,
            )

            response_text = response.choices[0].message.content

            if getattr(response, "usage", None):
                logger.info(
                    f"Review generation usage: {response.usage.prompt_tokens} prompt tokens, "
                    f"{response.usage.completion_tokens} completion tokens, "
                    f"{response.usage.total_tokens} total"
                )

            logger.info(f"Generated review ({len(response_text) if response_text else 0} chars)")
            return response_text if response_text else ""

        except openai.NotFoundError as e:
            logger.error(f"Model {self.model} not found at {self.provider}: {e}")
            raise ModelConfigurationError(MODEL_CONFIGURATION_MESSAGE) from e
        except Exception as e:
            logger.error(f"Review generation API call failed: {e}")
            raise
